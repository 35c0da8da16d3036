"""Tests for rolegate.roles: enums, RolePermissionEntry, PermissionRegistry."""
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def small_registry():
    """owner: [settings, issuance], admin: [settings]."""
    from rolegate.roles.enums import Feature, Role
    from rolegate.roles.permissions import PermissionRegistry, RolePermissionEntry
    return PermissionRegistry([
        RolePermissionEntry(Role.OWNER, (Feature.SETTINGS, Feature.ISSUANCE)),
        RolePermissionEntry(Role.ADMIN, (Feature.SETTINGS,)),
    ])


# ── Enums ────────────────────────────────────────────────────────────────────

class TestEnums:
    def test_feature_enum_size(self):
        from rolegate.roles.enums import Feature
        assert len(Feature) == 61

    def test_feature_values_unique(self):
        from rolegate.roles.enums import Feature
        values = [f.value for f in Feature]
        assert len(values) == len(set(values))

    def test_to_role_accepts_value_and_member(self):
        from rolegate.roles.enums import Role, to_role
        assert to_role("owner") is Role.OWNER
        assert to_role(Role.ADMIN) is Role.ADMIN

    def test_to_role_unknown_is_none(self):
        from rolegate.roles.enums import to_role
        assert to_role("guest") is None
        assert to_role("OWNER") is None
        assert to_role(None) is None

    def test_to_feature_unknown_is_none(self):
        from rolegate.roles.enums import Feature, to_feature
        assert to_feature("settings") is Feature.SETTINGS
        assert to_feature("setting") is None


# ── RolePermissionEntry ──────────────────────────────────────────────────────

class TestRolePermissionEntry:
    def test_duplicates_dropped_order_kept(self):
        from rolegate.roles.enums import Feature, Role
        from rolegate.roles.permissions import RolePermissionEntry
        entry = RolePermissionEntry(
            Role.ISSUER, (Feature.ISSUANCE, Feature.VIEW_SCHEMAS, Feature.ISSUANCE)
        )
        assert entry.features == (Feature.ISSUANCE, Feature.VIEW_SCHEMAS)
        assert entry.feature_set == {Feature.ISSUANCE, Feature.VIEW_SCHEMAS}

    def test_entry_is_frozen(self):
        from dataclasses import FrozenInstanceError
        from rolegate.roles.enums import Role
        from rolegate.roles.permissions import RolePermissionEntry
        entry = RolePermissionEntry(Role.MEMBER)
        with pytest.raises(FrozenInstanceError):
            entry.role = Role.ADMIN


# ── PermissionRegistry core queries ──────────────────────────────────────────

class TestPermissionRegistry:
    def test_scenario_owner_and_admin(self, small_registry):
        from rolegate.roles.enums import Feature, Role
        reg = small_registry
        assert reg.has_feature("owner", Feature.SETTINGS) is True
        assert reg.has_feature("admin", Feature.ISSUANCE) is False
        assert reg.has_feature("admin", "billing") is False
        assert reg.has_feature("guest", Feature.SETTINGS) is False
        assert reg.feature_count("owner") == 2
        assert reg.find_by_role(Role.PLATFORM_ADMIN) is None

    def test_scenario_with_feature_outside_enum(self):
        from rolegate.roles.enums import Feature, Role
        from rolegate.roles.permissions import PermissionRegistry, RolePermissionEntry
        owner = RolePermissionEntry(Role.OWNER, (Feature.SETTINGS, "billing"))
        reg = PermissionRegistry([owner, RolePermissionEntry(Role.ADMIN, (Feature.SETTINGS,))])
        assert reg.feature_count("owner") == 2
        assert reg.has_feature("owner", "billing") is False
        assert reg.has_feature("owner", "settings") is True
        assert reg.has_feature("admin", "billing") is False
        assert owner.feature_names() == ["settings", "billing"]
        assert "billing" in repr(owner)

    def test_string_table_coerced_to_enums(self):
        from rolegate.roles.enums import Feature, Role
        from rolegate.roles.permissions import PermissionRegistry
        reg = PermissionRegistry.from_mapping({"owner": ["settings", "billing"], "admin": ["settings"]})
        entry = reg.find_by_role(Role.OWNER)
        assert entry.role is Role.OWNER
        assert entry.features == (Feature.SETTINGS, "billing")
        assert reg.roles() == (Role.OWNER, Role.ADMIN)

    def test_find_by_role_returns_features(self, small_registry):
        from rolegate.roles.enums import Feature, Role
        entry = small_registry.find_by_role(Role.OWNER)
        assert entry is not None
        assert set(entry.features) == {Feature.ISSUANCE, Feature.SETTINGS}

    def test_find_by_role_accepts_string(self, small_registry):
        from rolegate.roles.enums import Role
        assert small_registry.find_by_role("admin") is small_registry.find_by_role(Role.ADMIN)

    def test_unknown_role_not_found(self, small_registry):
        from rolegate.roles.enums import Feature
        for role in ("guest", "", "Owner", "platformAdmin", None):
            assert small_registry.find_by_role(role) is None
            assert small_registry.feature_count(role) == 0
            for feat in Feature:
                assert small_registry.has_feature(role, feat) is False

    def test_registered_role_has_every_granted_feature(self):
        from rolegate.roles.permissions import default_registry
        reg = default_registry()
        for entry in reg.entries:
            for feat in entry.features:
                assert reg.has_feature(entry.role, feat)

    def test_registered_role_lacks_ungranted_features(self):
        from rolegate.roles.enums import Feature
        from rolegate.roles.permissions import default_registry
        reg = default_registry()
        for entry in reg.entries:
            for feat in Feature:
                if feat not in entry.feature_set:
                    assert reg.has_feature(entry.role, feat) is False

    def test_unknown_feature_is_false(self, small_registry):
        assert small_registry.has_feature("owner", "settingz") is False

    def test_total_known_features_constant(self, small_registry):
        from rolegate.roles.enums import Feature
        from rolegate.roles.permissions import PermissionRegistry
        assert small_registry.total_known_features() == len(Feature)
        assert PermissionRegistry().total_known_features() == len(Feature)
        small_registry.has_feature("owner", "settings")
        assert small_registry.total_known_features() == len(Feature)

    def test_duplicate_role_first_entry_wins(self):
        from rolegate.roles.enums import Feature, Role
        from rolegate.roles.permissions import PermissionRegistry, RolePermissionEntry
        first = RolePermissionEntry(Role.ADMIN, (Feature.SETTINGS,))
        second = RolePermissionEntry(Role.ADMIN, (Feature.ISSUANCE, Feature.VERIFICATION))
        reg = PermissionRegistry([first, second])
        assert reg.find_by_role("admin") is first
        assert reg.feature_count("admin") == 1
        assert len(reg) == 1
        assert len(reg.entries) == 2

    def test_entry_with_unknown_role_is_unreachable(self):
        from rolegate.roles.enums import Feature
        from rolegate.roles.permissions import PermissionRegistry, RolePermissionEntry
        reg = PermissionRegistry([RolePermissionEntry("guest", (Feature.SETTINGS,))])
        assert reg.find_by_role("guest") is None
        assert len(reg) == 0

    def test_queries_are_idempotent(self, small_registry):
        from rolegate.roles.enums import Feature
        first = [small_registry.has_feature("owner", f) for f in Feature]
        second = [small_registry.has_feature("owner", f) for f in Feature]
        assert first == second
        assert small_registry.find_by_role("owner") is small_registry.find_by_role("owner")

    def test_contains(self, small_registry):
        assert "owner" in small_registry
        assert "holder" not in small_registry


# ── Convenience queries ──────────────────────────────────────────────────────

class TestRegistryHelpers:
    def test_roles_in_entry_order(self, small_registry):
        from rolegate.roles.enums import Role
        assert small_registry.roles() == (Role.OWNER, Role.ADMIN)

    def test_features_for_unknown_is_empty(self, small_registry):
        assert small_registry.features_for("guest") == frozenset()

    def test_missing_features(self, small_registry):
        from rolegate.roles.enums import Feature
        missing = small_registry.missing_features("admin")
        assert Feature.SETTINGS not in missing
        assert len(missing) == len(Feature) - 1
        assert len(small_registry.missing_features("guest")) == len(Feature)

    def test_effective_features_union(self, small_registry):
        from rolegate.roles.enums import Feature
        assert small_registry.effective_features(["admin", "owner"]) == {
            Feature.SETTINGS, Feature.ISSUANCE,
        }

    def test_effective_features_skips_unknown(self, small_registry):
        from rolegate.roles.enums import Feature
        assert small_registry.effective_features(["guest", "admin"]) == {Feature.SETTINGS}
        assert small_registry.effective_features([]) == frozenset()

    def test_platform_admin_gets_everything(self, small_registry):
        from rolegate.roles.enums import Feature
        # platform_admin is not even registered here
        assert small_registry.effective_features(["platform_admin"]) == frozenset(Feature)

    def test_any_has_feature(self, small_registry):
        assert small_registry.any_has_feature(["guest", "owner"], "issuance") is True
        assert small_registry.any_has_feature(["admin"], "issuance") is False
        assert small_registry.any_has_feature([], "settings") is False

    def test_is_platform_admin(self):
        from rolegate.roles.permissions import PermissionRegistry
        assert PermissionRegistry.is_platform_admin(["owner", "platform_admin"]) is True
        assert PermissionRegistry.is_platform_admin(["owner"]) is False


class TestParseRoles:
    def test_split_strip_dedupe(self):
        from rolegate.roles.permissions import parse_roles
        assert parse_roles("owner, admin,,owner ") == ["owner", "admin"]

    def test_empty(self):
        from rolegate.roles.permissions import parse_roles
        assert parse_roles("") == []
        assert parse_roles(None) == []


# ── Bundled table + singleton ────────────────────────────────────────────────

class TestDefaultRegistry:
    def test_platform_admin_has_all_features(self):
        from rolegate.roles.enums import Feature, Role
        from rolegate.roles.permissions import default_registry
        reg = default_registry()
        assert reg.feature_count(Role.PLATFORM_ADMIN) == len(Feature)

    def test_owner_has_settings_admin_does_not(self):
        from rolegate.roles.enums import Feature
        from rolegate.roles.permissions import default_registry
        reg = default_registry()
        assert reg.has_feature("owner", Feature.SETTINGS)
        assert not reg.has_feature("admin", Feature.SETTINGS)

    def test_feature_counts(self):
        from rolegate.roles.permissions import default_registry
        reg = default_registry()
        assert reg.feature_count("owner") == 36
        assert reg.feature_count("admin") == 25
        assert reg.feature_count("issuer") == 13
        assert reg.feature_count("verifier") == 8
        assert reg.feature_count("member") == 5
        assert reg.feature_count("holder") == 5

    def test_every_role_registered(self):
        from rolegate.roles.enums import Role
        from rolegate.roles.permissions import default_registry
        assert set(default_registry().roles()) == set(Role)

    def test_bundled_table_is_valid(self):
        from rolegate.roles.loader import validate_entries
        from rolegate.roles.permissions import default_registry
        assert validate_entries(default_registry().entries) == []

    def test_get_registry_singleton(self):
        from rolegate.roles.permissions import get_registry, set_registry
        set_registry(None)
        r1 = get_registry()
        r2 = get_registry()
        assert r1 is r2

    def test_set_registry_swaps_snapshot(self):
        from rolegate.roles.permissions import (
            PermissionRegistry, get_registry, set_registry,
        )
        old = get_registry()
        new = PermissionRegistry()
        try:
            set_registry(new)
            assert get_registry() is new
            # readers holding the old snapshot keep their view
            assert old.has_feature("owner", "settings")
        finally:
            set_registry(None)
