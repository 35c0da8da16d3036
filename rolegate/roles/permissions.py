"""
Role → feature permission matrix + read-only registry.
Query-only: nothing here enforces access, callers decide what a False means.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rolegate.roles.enums import Feature, Role, to_feature, to_role
from rolegate.utils.logger import get_logger

log = get_logger("roles.permissions")


@dataclass(frozen=True)
class RolePermissionEntry:
    role: Role
    features: tuple[Feature, ...] = ()
    feature_set: frozenset[Feature] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Known names become enum members; foreign values are kept as given
        role = to_role(self.role)
        if role is not None:
            object.__setattr__(self, "role", role)
        coerced = []
        for feat in self.features:
            known = to_feature(feat)
            coerced.append(feat if known is None else known)
        # dict.fromkeys drops repeats, keeps first-seen order
        ordered = tuple(dict.fromkeys(coerced))
        object.__setattr__(self, "features", ordered)
        object.__setattr__(self, "feature_set", frozenset(ordered))

    def feature_names(self) -> list[str]:
        return [getattr(f, "value", str(f)) for f in self.features]


class PermissionRegistry:
    """
    Immutable role → features lookup.

    Entries keep their insertion order. If a role is listed twice the first
    entry wins; the later one is kept in `entries` but never resolved.
    Unknown roles/features resolve to None / False / 0, never an exception.
    """

    def __init__(self, entries: Iterable[RolePermissionEntry] = ()) -> None:
        self._entries: tuple[RolePermissionEntry, ...] = tuple(entries)
        index: dict[Role, RolePermissionEntry] = {}
        for entry in self._entries:
            role = to_role(entry.role)
            if role is None:
                log.warning("Permission entry for unknown role %r is unreachable", entry.role)
                continue
            if role in index:
                log.warning("Duplicate permission entry for role '%s' ignored", role.value)
                continue
            index[role] = entry
        self._index = index
        log.debug("PermissionRegistry built: %d roles, %d entries",
                  len(self._index), len(self._entries))

    @classmethod
    def from_mapping(cls, table: dict) -> "PermissionRegistry":
        """Build from {role: [features]} (the DEFAULT_ROLE_FEATURES shape)."""
        return cls(RolePermissionEntry(role, tuple(feats)) for role, feats in table.items())

    @property
    def entries(self) -> tuple[RolePermissionEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, role: object) -> bool:
        return self.find_by_role(role) is not None

    # ── Core queries ──────────────────────────────────────────────────────────

    def find_by_role(self, role: Role | str) -> RolePermissionEntry | None:
        key = to_role(role)
        if key is None:
            return None
        return self._index.get(key)

    def has_feature(self, role: Role | str, feature: Feature | str) -> bool:
        """True iff role is registered and grants feature. Unknown role == denied."""
        entry = self.find_by_role(role)
        if entry is None:
            return False
        feat = to_feature(feature)
        return feat is not None and feat in entry.feature_set

    def feature_count(self, role: Role | str) -> int:
        entry = self.find_by_role(role)
        return len(entry.features) if entry else 0

    def total_known_features(self) -> int:
        return len(Feature)

    # ── Convenience ───────────────────────────────────────────────────────────

    def roles(self) -> tuple[Role, ...]:
        return tuple(self._index)

    def features_for(self, role: Role | str) -> frozenset[Feature]:
        entry = self.find_by_role(role)
        return entry.feature_set if entry else frozenset()

    def missing_features(self, role: Role | str) -> tuple[Feature, ...]:
        granted = self.features_for(role)
        return tuple(f for f in Feature if f not in granted)

    def effective_features(self, roles: Iterable[Role | str]) -> frozenset[Feature]:
        """Union of features over several roles. Platform admin gets everything."""
        resolved = [r for r in (to_role(x) for x in roles) if r is not None]
        if Role.PLATFORM_ADMIN in resolved:
            return frozenset(Feature)
        combined: set[Feature] = set()
        for role in resolved:
            combined |= self.features_for(role)
        return frozenset(combined)

    def any_has_feature(self, roles: Iterable[Role | str], feature: Feature | str) -> bool:
        return any(self.has_feature(role, feature) for role in roles)

    @staticmethod
    def is_platform_admin(roles: Iterable[Role | str]) -> bool:
        return any(to_role(r) is Role.PLATFORM_ADMIN for r in roles)


def parse_roles(raw: str | None) -> list[str]:
    """'owner, admin,,owner' → ['owner', 'admin']"""
    if not raw:
        return []
    seen: dict[str, None] = {}
    for part in raw.split(","):
        name = part.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


# Bundled table: role → allowed features
DEFAULT_ROLE_FEATURES: dict[Role, list[Feature]] = {
    Role.PLATFORM_ADMIN: list(Feature),
    Role.OWNER: [
        Feature.VIEW_DASHBOARD, Feature.MANAGE_PROFILE, Feature.MANAGE_ORGANIZATION,
        Feature.VIEW_WALLET_DETAILS, Feature.ORGANIZATION_SETTINGS,
        Feature.CREATE_SCHEMA, Feature.VIEW_SCHEMAS, Feature.SCHEMA_ENDORSEMENT,
        Feature.ISSUANCE, Feature.BULK_ISSUANCE, Feature.EMAIL_ISSUANCE, Feature.W3C_ISSUANCE,
        Feature.VIEW_ISSUED_CREDENTIALS,
        Feature.VERIFICATION, Feature.REQUEST_PROOF, Feature.EMAIL_VERIFICATION,
        Feature.W3C_VERIFICATION, Feature.VERIFY_CREDENTIALS,
        Feature.MANAGE_DIDS, Feature.CREATE_DID, Feature.SET_PRIMARY_DID,
        Feature.VIEW_CONNECTIONS, Feature.MANAGE_CONNECTIONS, Feature.CREATE_CONNECTIONS,
        Feature.MANAGE_MEMBERS, Feature.EDIT_USER_ROLES, Feature.INVITE_USERS,
        Feature.SEND_INVITATION,
        Feature.ECOSYSTEM_MANAGEMENT, Feature.CREATE_ORG,
        Feature.GENERATE_CLIENT_CREDENTIALS, Feature.API_ACCESS,
        Feature.DOWNLOAD_TEMPLATE, Feature.VIEW_ISSUANCE_HISTORY, Feature.RETRY_ISSUANCE,
        Feature.SETTINGS,
    ],
    Role.ADMIN: [
        Feature.VIEW_DASHBOARD, Feature.MANAGE_PROFILE, Feature.MANAGE_ORGANIZATION,
        Feature.VIEW_WALLET_DETAILS, Feature.ORGANIZATION_SETTINGS,
        Feature.CREATE_SCHEMA, Feature.VIEW_SCHEMAS,
        Feature.ISSUANCE, Feature.BULK_ISSUANCE, Feature.EMAIL_ISSUANCE, Feature.W3C_ISSUANCE,
        Feature.VIEW_ISSUED_CREDENTIALS,
        Feature.VERIFICATION, Feature.REQUEST_PROOF, Feature.EMAIL_VERIFICATION,
        Feature.W3C_VERIFICATION, Feature.VERIFY_CREDENTIALS,
        Feature.MANAGE_DIDS, Feature.CREATE_DID,
        Feature.VIEW_CONNECTIONS, Feature.MANAGE_CONNECTIONS,
        Feature.MANAGE_MEMBERS, Feature.EDIT_USER_ROLES, Feature.INVITE_USERS,
        Feature.SEND_INVITATION,
    ],
    Role.ISSUER: [
        Feature.VIEW_DASHBOARD, Feature.MANAGE_PROFILE, Feature.VIEW_WALLET_DETAILS,
        Feature.CREATE_SCHEMA, Feature.VIEW_SCHEMAS,
        Feature.ISSUANCE, Feature.BULK_ISSUANCE, Feature.EMAIL_ISSUANCE, Feature.W3C_ISSUANCE,
        Feature.VIEW_ISSUED_CREDENTIALS,
        Feature.DOWNLOAD_TEMPLATE, Feature.VIEW_ISSUANCE_HISTORY, Feature.RETRY_ISSUANCE,
    ],
    Role.VERIFIER: [
        Feature.VIEW_DASHBOARD, Feature.MANAGE_PROFILE, Feature.VIEW_WALLET_DETAILS,
        Feature.VERIFICATION, Feature.REQUEST_PROOF, Feature.EMAIL_VERIFICATION,
        Feature.W3C_VERIFICATION, Feature.VERIFY_CREDENTIALS,
    ],
    Role.MEMBER: [
        Feature.VIEW_DASHBOARD, Feature.MANAGE_PROFILE, Feature.VIEW_WALLET_DETAILS,
        Feature.VIEW_CONNECTIONS, Feature.SEND_INVITATION,
    ],
    Role.HOLDER: [
        Feature.VIEW_DASHBOARD, Feature.MANAGE_PROFILE, Feature.VIEW_WALLET_DETAILS,
        Feature.VIEW_CONNECTIONS, Feature.SEND_INVITATION,
    ],
}


def default_registry() -> PermissionRegistry:
    return PermissionRegistry.from_mapping(DEFAULT_ROLE_FEATURES)


# ── Module-level singleton ─────────────────────────────────────────────────
# Swapped as a whole, never mutated in place.
_registry: PermissionRegistry | None = None


def get_registry() -> PermissionRegistry:
    global _registry
    if _registry is None:
        _registry = default_registry()
    return _registry


def set_registry(registry: PermissionRegistry | None) -> None:
    """Replace the process-wide registry (None → rebuild defaults on next get)."""
    global _registry
    _registry = registry
