"""Tests for Permission and the granted/denied partition."""

from __future__ import annotations

import pytest

from healthbridge.domains.health.taxonomy.data_types import HealthDataType
from healthbridge.domains.health.taxonomy.permissions import (
    AccessType,
    Permission,
    PermissionResult,
    PermissionStatus,
)

READ_HR = Permission(HealthDataType.HEART_RATE, AccessType.READ)
WRITE_HR = Permission(HealthDataType.HEART_RATE, AccessType.WRITE)
READ_STEPS = Permission(HealthDataType.STEPS, AccessType.READ)


class TestPermission:
    def test_structural_equality_and_hashing(self):
        assert Permission(HealthDataType.HEART_RATE, AccessType.READ) == READ_HR
        assert {READ_HR, Permission(HealthDataType.HEART_RATE, AccessType.READ)} == {READ_HR}
        assert READ_HR != WRITE_HR

    def test_str(self):
        assert str(READ_HR) == "HeartRate:READ"


class TestPermissionResult:
    def test_partition_covers_request(self):
        requested = {READ_HR, WRITE_HR, READ_STEPS}
        result = PermissionResult.from_granted(requested, {READ_HR})
        assert result.granted == {READ_HR}
        assert result.denied == {WRITE_HR, READ_STEPS}
        assert result.granted | result.denied == requested
        assert not result.granted & result.denied

    def test_grants_outside_request_are_ignored(self):
        result = PermissionResult.from_granted({READ_HR}, {READ_HR, READ_STEPS})
        assert result.granted == {READ_HR}
        assert result.requested == {READ_HR}

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="both granted and denied"):
            PermissionResult(granted=frozenset({READ_HR}), denied=frozenset({READ_HR}))

    @pytest.mark.parametrize(
        "requested, granted, status",
        [
            (set(), set(), PermissionStatus.NOT_DETERMINED),
            ({READ_HR}, {READ_HR}, PermissionStatus.GRANTED),
            ({READ_HR}, set(), PermissionStatus.DENIED),
            ({READ_HR, READ_STEPS}, {READ_STEPS}, PermissionStatus.PARTIALLY_GRANTED),
        ],
    )
    def test_status(self, requested, granted, status):
        assert PermissionResult.from_granted(requested, granted).status is status

    def test_is_granted(self):
        result = PermissionResult.from_granted({READ_HR, WRITE_HR}, {WRITE_HR})
        assert result.is_granted(WRITE_HR)
        assert not result.is_granted(READ_HR)

    def test_platform_info_does_not_affect_equality(self):
        a = PermissionResult.from_granted({READ_HR}, {READ_HR}, {"platform": "ios"})
        b = PermissionResult.from_granted({READ_HR}, {READ_HR})
        assert a == b
        assert a.platform_info == {"platform": "ios"}
