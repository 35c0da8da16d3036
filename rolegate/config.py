"""
GateConfig: defaults → optional YAML → environment overrides.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG_PATH = ROOT / "rolegate" / "config.yaml"

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class GateConfig:
    # None → bundled DEFAULT_ROLE_FEATURES
    permissions_file: Path | None = None
    strict_permissions: bool = False

    log_level: str = "INFO"
    log_dir: Path | None = None

    @classmethod
    def load(cls, yaml_path: str | Path | None = None) -> "GateConfig":
        """Load config from YAML file + environment variable overrides."""
        cfg = cls()

        if yaml_path is None:
            yaml_path = DEFAULT_CONFIG_PATH
        yaml_path = Path(yaml_path)
        if yaml_path.exists():
            with yaml_path.open() as f:
                data: dict[str, Any] = yaml.safe_load(f) or {}
            cfg._apply_yaml(data, base_dir=yaml_path.parent)

        # ENV overrides (always win)
        cfg._apply_env()
        return cfg

    def _apply_yaml(self, data: dict[str, Any], base_dir: Path) -> None:
        for key, val in data.items():
            if key == "permissions_file" and val:
                path = Path(val)
                self.permissions_file = path if path.is_absolute() else base_dir / path
            elif key == "log_dir" and val:
                self.log_dir = Path(val)
            elif key == "strict_permissions":
                self.strict_permissions = _as_bool(val)
            elif key == "log_level" and val:
                self.log_level = str(val).upper()

    def _apply_env(self) -> None:
        env_map = {
            "ROLEGATE_PERMISSIONS_FILE": ("permissions_file", Path),
            "ROLEGATE_STRICT": ("strict_permissions", _as_bool),
            "ROLEGATE_LOG_LEVEL": ("log_level", str.upper),
            "ROLEGATE_LOG_DIR": ("log_dir", Path),
        }
        for env_key, (attr, convert) in env_map.items():
            val = os.environ.get(env_key, "")
            if not val:
                continue
            setattr(self, attr, convert(val))


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in _TRUE


# Module-level singleton: loaded once on first use
_config: GateConfig | None = None


def get_config() -> GateConfig:
    global _config
    if _config is None:
        _config = GateConfig.load()
    return _config


def reload_config(yaml_path: str | Path | None = None) -> GateConfig:
    global _config
    _config = GateConfig.load(yaml_path)
    return _config
