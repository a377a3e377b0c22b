"""Tests for the per-platform capability table."""

from __future__ import annotations

import pytest

from healthbridge.domains.health.taxonomy.capabilities import (
    Capability,
    all_capabilities,
    capabilities_for,
    get_capability_table,
    load_capability_table,
    permissions_for,
    platform_profile,
)
from healthbridge.domains.health.taxonomy.data_types import (
    DistanceUnit,
    HealthDataType,
    Platform,
)
from healthbridge.domains.health.taxonomy.permissions import AccessType, Permission


class TestCapabilitiesFor:
    def test_total_over_every_type_and_platform(self):
        for platform in Platform:
            for data_type in HealthDataType:
                capability = capabilities_for(data_type, platform)
                assert isinstance(capability, Capability)
                assert capability.data_type is data_type
                assert capability.platform is platform

    def test_missing_entry_is_unsupported_not_an_error(self):
        # Menstruation period is only tracked by Health Connect.
        capability = capabilities_for(HealthDataType.MENSTRUATION_PERIOD, Platform.IOS)
        assert capability.can_read is False
        assert capability.can_write is False
        assert not capability.is_supported

    def test_read_write_entry(self):
        capability = capabilities_for(HealthDataType.HEART_RATE, Platform.IOS)
        assert capability.can_read and capability.can_write

    def test_read_only_entry_carries_note(self):
        capability = capabilities_for(HealthDataType.ELECTROCARDIOGRAM, Platform.IOS)
        assert capability.can_read
        assert not capability.can_write
        assert capability.notes

    def test_android_lacks_mobility_metrics(self):
        assert not capabilities_for(HealthDataType.WALKING_SPEED, Platform.ANDROID).is_supported
        assert capabilities_for(HealthDataType.WALKING_SPEED, Platform.IOS).can_read

    def test_clinical_records_are_read_only_everywhere(self):
        for platform in Platform:
            capability = capabilities_for(HealthDataType.CLINICAL_IMMUNIZATIONS, platform)
            assert capability.can_read
            assert not capability.can_write

    def test_all_capabilities_in_enum_order(self):
        capabilities = all_capabilities(Platform.ANDROID)
        assert [c.data_type for c in capabilities] == list(HealthDataType)


class TestPermissionsFor:
    def test_read_write_type_yields_two_permissions(self):
        permissions = permissions_for({HealthDataType.STEPS}, Platform.IOS)
        assert permissions == {
            Permission(HealthDataType.STEPS, AccessType.READ),
            Permission(HealthDataType.STEPS, AccessType.WRITE),
        }

    def test_read_only_type_yields_read_only(self):
        permissions = permissions_for({HealthDataType.WALKING_SPEED}, Platform.IOS)
        assert permissions == {Permission(HealthDataType.WALKING_SPEED, AccessType.READ)}

    def test_unsupported_type_yields_nothing(self):
        assert permissions_for({HealthDataType.STAND_HOURS}, Platform.ANDROID) == frozenset()

    def test_every_permission_backed_by_a_capability_flag(self):
        for platform in Platform:
            permissions = permissions_for(HealthDataType, platform)
            per_type: dict[HealthDataType, int] = {}
            for permission in permissions:
                capability = capabilities_for(permission.data_type, platform)
                if permission.access_type is AccessType.READ:
                    assert capability.can_read
                else:
                    assert capability.can_write
                per_type[permission.data_type] = per_type.get(permission.data_type, 0) + 1
            assert all(count <= 2 for count in per_type.values())

    def test_empty_input(self):
        assert permissions_for([], Platform.IOS) == frozenset()


class TestPlatformProfile:
    def test_ios_profile(self):
        profile = platform_profile(Platform.IOS)
        assert profile.name == "iOS HealthKit"
        assert profile.supports_background_delivery
        assert profile.supports_live_workout_metrics
        assert profile.is_available(HealthDataType.HEART_RATE)
        assert not profile.is_available(HealthDataType.MENSTRUATION_PERIOD)

    def test_android_profile(self):
        profile = platform_profile(Platform.ANDROID)
        assert profile.name == "Android Health Connect"
        assert not profile.supports_background_delivery
        assert profile.is_available(HealthDataType.MENSTRUATION_PERIOD)


class TestTableLoading:
    def test_table_is_cached(self):
        assert get_capability_table() is get_capability_table()

    def test_unknown_data_type_fails_load(self, tmp_path):
        path = tmp_path / "caps.yaml"
        path.write_text("ios:\n  read_write:\n    - NotAType\n")
        with pytest.raises(ValueError, match="NotAType"):
            load_capability_table(path)

    def test_unknown_platform_fails_load(self, tmp_path):
        path = tmp_path / "caps.yaml"
        path.write_text("windows:\n  read_write:\n    - Steps\n")
        with pytest.raises(ValueError, match="windows"):
            load_capability_table(path)

    def test_duplicate_entry_fails_load(self, tmp_path):
        path = tmp_path / "caps.yaml"
        path.write_text("ios:\n  read_write:\n    - Steps\n  read_only:\n    - Steps\n")
        with pytest.raises(ValueError, match="twice"):
            load_capability_table(path)

    def test_profile_defaults_when_section_missing(self, tmp_path):
        path = tmp_path / "caps.yaml"
        path.write_text("android:\n  read_only:\n    - Steps\n")
        table = load_capability_table(path)
        assert table.profiles[Platform.ANDROID].name == "android"
        assert table.lookup(HealthDataType.STEPS, Platform.ANDROID).can_read
        assert not table.lookup(HealthDataType.STEPS, Platform.IOS).is_supported


class TestDataTypes:
    def test_from_string(self):
        assert HealthDataType.from_string("HeartRate") is HealthDataType.HEART_RATE
        assert HealthDataType.from_string("Nope") is None

    def test_distance_unit_to_meters(self):
        assert DistanceUnit.METERS.to_meters(5.0) == 5.0
        assert DistanceUnit.KILOMETERS.to_meters(1.5) == pytest.approx(1500.0)
        assert DistanceUnit.MILES.to_meters(1.0) == pytest.approx(1609.344)
