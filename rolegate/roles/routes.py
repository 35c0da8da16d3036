"""
UI route → required feature. Patterns are checked in order, first match wins.
Unmatched paths fall back to VIEW_DASHBOARD.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from rolegate.roles.enums import Feature, Role
from rolegate.roles.permissions import PermissionRegistry, get_registry

DEFAULT_FEATURE = Feature.VIEW_DASHBOARD


@dataclass(frozen=True)
class RoutePattern:
    pattern: re.Pattern
    feature: Feature
    description: str = ""

    def matches(self, path: str) -> bool:
        return self.pattern.search(path) is not None

    def example(self) -> str:
        """Pattern source without anchors/escapes, e.g. '/organizations/users'."""
        return self.pattern.pattern.replace("^", "").replace("$", "").replace("\\/", "/")


def _route(regex: str, feature: Feature, description: str) -> RoutePattern:
    return RoutePattern(re.compile(regex), feature, description)


ROUTE_FEATURE_MAP: tuple[RoutePattern, ...] = (
    # Platform
    _route(r"^\/platform-settings", Feature.PLATFORM_SETTINGS, "Platform administration and settings"),
    # Dashboard & profile
    _route(r"^\/dashboard$", Feature.VIEW_DASHBOARD, "Main user dashboard"),
    _route(r"^\/profile", Feature.MANAGE_PROFILE, "User profile management"),
    _route(r"^\/setting", Feature.SETTINGS, "Admin and platform admin settings"),
    # Organizations
    _route(r"^\/organizations\/dashboard", Feature.VIEW_DASHBOARD, "Organization dashboard"),
    _route(r"^\/organizations\/users", Feature.MANAGE_MEMBERS, "Organization user management"),
    _route(r"^\/organizations\/invitations", Feature.INVITE_USERS, "Organization invitations"),
    _route(r"^\/organizations\/delete-organizations", Feature.DELETE_ORGANIZATION, "Delete organizations"),
    _route(r"^\/organizations(?:\/index)?$", Feature.MANAGE_ORGANIZATION, "Organization management"),
    # Schemas
    _route(r"^\/organizations\/schemas\/create", Feature.CREATE_SCHEMA, "Create new schema"),
    _route(r"^\/organizations\/schemas\/[^\/]+$", Feature.VIEW_SCHEMAS, "View specific schema details"),
    _route(r"^\/organizations\/schemas", Feature.VIEW_SCHEMAS, "Schema management and listing"),
    # Issuance
    _route(r"^\/organizations\/credentials\/issue\/bulk-issuance", Feature.BULK_ISSUANCE, "Bulk credential issuance"),
    _route(r"^\/organizations\/credentials\/issue\/email", Feature.EMAIL_ISSUANCE, "Email-based credential issuance"),
    _route(r"^\/organizations\/credentials\/issue", Feature.ISSUANCE, "Standard credential issuance workflow"),
    _route(r"^\/organizations\/credentials", Feature.VIEW_ISSUED_CREDENTIALS, "View issued credentials"),
    # Verification
    _route(r"^\/organizations\/verification\/verify-credentials\/email", Feature.EMAIL_VERIFICATION,
           "Email-based credential verification"),
    _route(r"^\/organizations\/verification", Feature.VERIFICATION, "Credential verification workflow"),
    # Connections / invitations
    _route(r"^\/connections", Feature.VIEW_CONNECTIONS, "Connection management"),
    _route(r"^\/invitations", Feature.SEND_INVITATION, "User invitation management"),
    # Legacy credential routes
    _route(r"^\/credentials\/users", Feature.VIEW_USERS, "View users (legacy route)"),
    _route(r"^\/credentials\/invitations", Feature.INVITE_USERS, "Manage invitations (legacy route)"),
    _route(r"^\/credentials\/dashboard", Feature.VIEW_DASHBOARD, "Dashboard (legacy route)"),
    _route(r"^\/credentials", Feature.VIEW_ISSUED_CREDENTIALS, "View credentials (legacy route)"),
    # Ecosystems
    _route(r"^\/ecosystems", Feature.ECOSYSTEM_MANAGEMENT, "Ecosystem management"),
)


def _clean(path: str) -> str:
    if path.endswith("/"):
        path = path[:-1]
    return path or "/"


def match_route(path: str) -> RoutePattern | None:
    cleaned = _clean(path)
    for route in ROUTE_FEATURE_MAP:
        if route.matches(cleaned):
            return route
    return None


def get_required_feature(path: str) -> Feature:
    route = match_route(path)
    return route.feature if route else DEFAULT_FEATURE


def check_route_access(path: str, roles: Iterable[Role | str],
                       registry: PermissionRegistry | None = None) -> bool:
    reg = registry if registry is not None else get_registry()
    return get_required_feature(path) in reg.effective_features(roles)


def available_routes(roles: Iterable[Role | str],
                     registry: PermissionRegistry | None = None) -> list[str]:
    reg = registry if registry is not None else get_registry()
    granted = reg.effective_features(roles)
    seen: dict[str, None] = {}
    for route in ROUTE_FEATURE_MAP:
        if route.feature in granted:
            seen.setdefault(route.example(), None)
    return list(seen)
