"""
CLI entry point: rolegate debug | roles | show | check | route | config
argparse-based.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path


def _context(args):
    """Resolve config (+ CLI overrides) and build the registry once."""
    from rolegate.config import get_config
    from rolegate.main import build_registry

    cfg = replace(get_config())
    if args.permissions:
        cfg.permissions_file = Path(args.permissions)
    if args.strict:
        cfg.strict_permissions = True
    return cfg, build_registry(cfg)


def cmd_debug(args) -> int:
    from rolegate.main import run_debug
    _, registry = _context(args)
    run_debug(registry)
    return 0


def cmd_roles(args) -> int:
    from rolegate.utils.output import print_field, print_header
    _, registry = _context(args)
    print_header("Registered roles")
    for role in registry.roles():
        print_field(role.value, f"{registry.feature_count(role)} features")
    print_field("Known features", registry.total_known_features())
    print()
    return 0


def cmd_show(args) -> int:
    from rolegate.utils.output import print_entry
    _, registry = _context(args)
    entry = registry.find_by_role(args.role)
    print_entry("Permissions", args.role,
                None if entry is None else entry.feature_names())
    return 0 if entry is not None else 1


def cmd_check(args) -> int:
    from rolegate.utils.output import print_flag, print_status
    _, registry = _context(args)
    if registry.find_by_role(args.role) is None:
        print_status(f"role '{args.role}' not registered")
    allowed = registry.has_feature(args.role, args.feature)
    print_flag(f"{args.role} → {args.feature}", allowed)
    return 0 if allowed else 1


def cmd_route(args) -> int:
    from rolegate.roles.permissions import parse_roles
    from rolegate.roles.routes import check_route_access, get_required_feature, match_route
    from rolegate.utils.output import print_field, print_flag, print_header

    _, registry = _context(args)
    roles = parse_roles(args.roles)
    route = match_route(args.path)
    allowed = check_route_access(args.path, roles, registry)

    print_header(f"Route {args.path}")
    print_field("Matched pattern", route.description if route else "none (default)")
    print_field("Required feature", get_required_feature(args.path).value)
    print_field("Roles", ", ".join(roles) or "none")
    print_flag("Access", allowed)
    print()
    return 0 if allowed else 1


def cmd_config(args) -> int:
    from rolegate.config import DEFAULT_CONFIG_PATH
    from rolegate.utils.output import print_field, print_header
    cfg, registry = _context(args)
    print_header("rolegate configuration")
    print_field("Config", DEFAULT_CONFIG_PATH)
    print_field("Permissions", cfg.permissions_file or "bundled table")
    print_field("Strict", cfg.strict_permissions)
    print_field("Log level", cfg.log_level)
    print_field("Log dir", cfg.log_dir or "console only")
    print_field("Roles loaded", len(registry))
    print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rolegate",
        description="rolegate: role → feature permission lookup",
    )
    parser.add_argument("--permissions", "-p", help="YAML permission file (overrides config)")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on unknown roles/features in the permission file")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("debug", help="Inspect platform admin / admin / owner permissions")
    sub.add_parser("roles", help="List registered roles")
    sub.add_parser("config", help="Show current configuration")

    p_show = sub.add_parser("show", help="Show the features of one role")
    p_show.add_argument("role")

    p_check = sub.add_parser("check", help="Check whether a role has a feature")
    p_check.add_argument("role")
    p_check.add_argument("feature")

    p_route = sub.add_parser("route", help="Check which feature a UI route needs")
    p_route.add_argument("path")
    p_route.add_argument("--roles", "-r", default="", help="Comma separated roles, e.g. owner,admin")

    return parser


def main(argv: list[str] | None = None) -> int:
    from rolegate.utils.output import print_error

    args = build_parser().parse_args(argv)

    dispatch = {
        "debug":  cmd_debug,
        "roles":  cmd_roles,
        "show":   cmd_show,
        "check":  cmd_check,
        "route":  cmd_route,
        "config": cmd_config,
    }

    try:
        return dispatch.get(args.command, cmd_debug)(args)
    except KeyboardInterrupt:
        print("\nBye.")
        return 130
    except Exception as exc:
        print_error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
