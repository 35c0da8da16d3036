"""
YAML permission file → RolePermissionEntry list.

Accepted shapes:
    permissions:
      - role: owner
        features: [settings, view_dashboard]
      - role: platform_admin
        features: all
or the bare list without the `permissions:` key.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import yaml

from rolegate.roles.enums import Feature, Role, to_feature, to_role
from rolegate.roles.permissions import PermissionRegistry, RolePermissionEntry
from rolegate.utils.logger import get_logger

log = get_logger("roles.loader")

ALL_FEATURES = "all"


class PermissionConfigError(ValueError):
    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        self.problems = list(problems or [])
        if self.problems:
            message += ":\n" + "\n".join(f"  - {p}" for p in self.problems)
        super().__init__(message)


def load_entries(source: str | Path, strict: bool = False) -> list[RolePermissionEntry]:
    """
    Parse a permission file (Path) or YAML text (str).

    Unknown role/feature names and duplicate roles are problems: logged and
    skipped when strict=False, raised together when strict=True.
    Structural errors always raise PermissionConfigError.
    """
    data = _read_yaml(source)
    raw_entries = _extract_list(data)

    entries: list[RolePermissionEntry] = []
    problems: list[str] = []
    seen: set[Role] = set()

    for i, raw in enumerate(raw_entries):
        if not isinstance(raw, dict) or "role" not in raw:
            raise PermissionConfigError(f"Entry #{i} must be a mapping with a 'role' key")

        role = to_role(raw["role"])
        if role is None:
            problems.append(f"Entry #{i}: unknown role {raw['role']!r}")
            continue
        if role in seen:
            problems.append(f"Entry #{i}: duplicate role '{role.value}'")
        seen.add(role)

        features, bad = _parse_features(raw.get("features", []), i)
        problems.extend(f"Entry #{i} ({role.value}): unknown feature {name!r}" for name in bad)
        entries.append(RolePermissionEntry(role, tuple(features)))

    if problems:
        if strict:
            raise PermissionConfigError("Invalid permission configuration", problems)
        for p in problems:
            log.warning("Permission config: %s", p)

    log.info("Loaded %d permission entries", len(entries))
    return entries


def load_registry(source: str | Path, strict: bool = False) -> PermissionRegistry:
    return PermissionRegistry(load_entries(source, strict=strict))


def validate_entries(entries: Iterable[RolePermissionEntry]) -> list[str]:
    """Problems in already built entries (duplicate roles, foreign values)."""
    problems: list[str] = []
    seen: set[Role] = set()
    for entry in entries:
        role = to_role(entry.role)
        if role is None:
            problems.append(f"Unknown role {entry.role!r}")
            continue
        if role in seen:
            problems.append(f"Duplicate role '{role.value}'")
        seen.add(role)
        for feat in entry.features:
            if to_feature(feat) is None:
                problems.append(f"Role '{role.value}' has unknown feature {feat!r}")
    return problems


def _read_yaml(source: str | Path) -> Any:
    if isinstance(source, Path):
        if not source.exists():
            raise PermissionConfigError(f"Permission file not found: {source}")
        text = source.read_text(encoding="utf-8")
    else:
        text = source
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PermissionConfigError(f"Permission file is not valid YAML: {exc}") from exc


def _extract_list(data: Any) -> list:
    if isinstance(data, dict):
        data = data.get("permissions")
    if data is None:
        return []
    if not isinstance(data, list):
        raise PermissionConfigError("Permission config must be a list of role entries")
    return data


def _parse_features(raw: Any, index: int) -> tuple[list[Feature], list[str]]:
    if raw == ALL_FEATURES:
        return list(Feature), []
    if raw is None:
        return [], []
    if not isinstance(raw, list):
        raise PermissionConfigError(
            f"Entry #{index}: 'features' must be a list or '{ALL_FEATURES}'"
        )
    good: list[Feature] = []
    bad: list[str] = []
    for name in raw:
        feat = to_feature(name)
        if feat is None:
            bad.append(str(name))
        else:
            good.append(feat)
    return good, bad
