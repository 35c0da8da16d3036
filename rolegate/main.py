"""
Application context: builds the permission registry once from config and
publishes it as the process-wide registry.

    rolegate debug   OR   python -m rolegate.cli debug
"""
from __future__ import annotations

from rolegate.config import GateConfig, get_config
from rolegate.roles.enums import Feature, Role
from rolegate.roles.loader import load_registry
from rolegate.roles.permissions import PermissionRegistry, default_registry, set_registry
from rolegate.utils.logger import configure_logging, get_logger

log = get_logger("main")

# Roles inspected by the debug report, in print order
DEBUG_ROLES: tuple[Role, ...] = (Role.PLATFORM_ADMIN, Role.ADMIN, Role.OWNER)


def build_registry(config: GateConfig | None = None) -> PermissionRegistry:
    """Load from cfg.permissions_file when set, else the bundled table; install it."""
    cfg = config or get_config()
    configure_logging(cfg.log_level, cfg.log_dir)

    if cfg.permissions_file is not None:
        log.info("Loading permissions from %s", cfg.permissions_file)
        registry = load_registry(cfg.permissions_file, strict=cfg.strict_permissions)
    else:
        registry = default_registry()

    set_registry(registry)
    return registry


def run_debug(registry: PermissionRegistry, feature: Feature = Feature.SETTINGS) -> dict:
    """
    Print what each debug role resolves to and whether it holds `feature`.
    Returns the same facts as a dict keyed by role value (for callers/tests).
    """
    from rolegate.utils.output import print_entry, print_field, print_flag, print_header

    print_header("Permission debug")
    print_field("Platform admin role", Role.PLATFORM_ADMIN.value)
    print_field(f"Feature {feature.name}", feature.value)

    report: dict[str, dict] = {}
    for role in DEBUG_ROLES:
        entry = registry.find_by_role(role)
        print()
        print_entry(f"{role.value} permissions", role.value,
                    None if entry is None else entry.feature_names())
        if entry is None:
            report[role.value] = {"found": False}
            continue

        has = registry.has_feature(role, feature)
        count = registry.feature_count(role)
        print_flag(f"Has {feature.name}", has)
        print_field("Feature count", count)
        print_field("Known features", registry.total_known_features())
        report[role.value] = {"found": True, "has_feature": has, "feature_count": count}

    print()
    log.debug("Debug report: %s", report)
    return report
