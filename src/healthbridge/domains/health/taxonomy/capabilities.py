"""Per-platform read/write capabilities for each canonical data type.

The table lives in ``capabilities.yaml`` next to this module. It is parsed
once and cached; nothing mutates it afterwards. Lookups are total: a
(data type, platform) pair with no entry resolves to a capability with both
flags false rather than an error.

Usage::

    cap = capabilities_for(HealthDataType.HEART_RATE, Platform.IOS)
    perms = permissions_for({HealthDataType.STEPS}, Platform.ANDROID)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from healthbridge.domains.health.taxonomy.data_types import HealthDataType, Platform
from healthbridge.domains.health.taxonomy.permissions import AccessType, Permission

logger = logging.getLogger(__name__)

_TABLE_PATH = Path(__file__).parent / "capabilities.yaml"


@dataclass(frozen=True)
class Capability:
    """Whether ``platform`` can read and/or write ``data_type``."""

    data_type: HealthDataType
    platform: Platform
    can_read: bool = False
    can_write: bool = False
    notes: str | None = None

    @property
    def is_supported(self) -> bool:
        return self.can_read or self.can_write


@dataclass(frozen=True)
class PlatformProfile:
    """Platform-wide facts about a native health store."""

    platform: Platform
    name: str
    supports_background_delivery: bool = False
    supports_wearable_integration: bool = False
    supports_live_workout_metrics: bool = False
    available_data_types: frozenset[HealthDataType] = field(default_factory=frozenset)

    def is_available(self, data_type: HealthDataType) -> bool:
        return data_type in self.available_data_types


@dataclass(frozen=True)
class CapabilityTable:
    """Parsed capability table: explicit entries plus platform profiles."""

    entries: dict[tuple[HealthDataType, Platform], Capability]
    profiles: dict[Platform, PlatformProfile]

    def lookup(self, data_type: HealthDataType, platform: Platform) -> Capability:
        entry = self.entries.get((data_type, platform))
        if entry is None:
            return Capability(data_type=data_type, platform=platform)
        return entry


def _parse_type_list(platform: Platform, section: str, names: list[Any]) -> list[HealthDataType]:
    types: list[HealthDataType] = []
    for name in names or []:
        data_type = HealthDataType.from_string(str(name))
        if data_type is None:
            raise ValueError(
                f"Unknown data type {name!r} in capability table ({platform.value}.{section})"
            )
        types.append(data_type)
    return types


def load_capability_table(path: str | Path = _TABLE_PATH) -> CapabilityTable:
    """Parse a capability YAML document into a :class:`CapabilityTable`.

    Raises:
        ValueError: If the document names an unknown platform or data type,
            or lists a data type more than once for the same platform.
    """
    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    entries: dict[tuple[HealthDataType, Platform], Capability] = {}
    profiles: dict[Platform, PlatformProfile] = {}

    for platform_key, platform_data in data.items():
        try:
            platform = Platform(platform_key)
        except ValueError as exc:
            raise ValueError(f"Unknown platform {platform_key!r} in capability table") from exc

        platform_data = platform_data or {}
        notes = platform_data.get("notes", {}) or {}

        for section, can_write in (("read_write", True), ("read_only", False)):
            for data_type in _parse_type_list(platform, section, platform_data.get(section, [])):
                key = (data_type, platform)
                if key in entries:
                    raise ValueError(
                        f"Data type {data_type.value!r} listed twice for {platform.value}"
                    )
                entries[key] = Capability(
                    data_type=data_type,
                    platform=platform,
                    can_read=True,
                    can_write=can_write,
                    notes=notes.get(section),
                )

        profile_data = platform_data.get("profile", {}) or {}
        profiles[platform] = PlatformProfile(
            platform=platform,
            name=profile_data.get("name", platform.value),
            supports_background_delivery=bool(profile_data.get("supports_background_delivery", False)),
            supports_wearable_integration=bool(profile_data.get("supports_wearable_integration", False)),
            supports_live_workout_metrics=bool(profile_data.get("supports_live_workout_metrics", False)),
            available_data_types=frozenset(
                data_type for (data_type, p), cap in entries.items()
                if p is platform and cap.is_supported
            ),
        )

    logger.debug("Loaded capability table from %s: %d entries", path, len(entries))
    return CapabilityTable(entries=entries, profiles=profiles)


@lru_cache(maxsize=1)
def get_capability_table() -> CapabilityTable:
    """Return the packaged capability table, parsing it on first use."""
    return load_capability_table()


def capabilities_for(data_type: HealthDataType, platform: Platform) -> Capability:
    """Capability of ``platform`` for ``data_type``. Never raises for enum members."""
    return get_capability_table().lookup(data_type, platform)


def all_capabilities(platform: Platform) -> list[Capability]:
    """Capabilities for every data type on ``platform``, in enum order."""
    return [capabilities_for(data_type, platform) for data_type in HealthDataType]


def permissions_for(
    data_types: Iterable[HealthDataType],
    platform: Platform,
) -> frozenset[Permission]:
    """Expand data types into the permissions ``platform`` can actually grant.

    Each type yields READ if readable and WRITE if writable, so between zero
    and two permissions per type.
    """
    permissions: set[Permission] = set()
    for data_type in data_types:
        capability = capabilities_for(data_type, platform)
        if capability.can_read:
            permissions.add(Permission(data_type, AccessType.READ))
        if capability.can_write:
            permissions.add(Permission(data_type, AccessType.WRITE))
    return frozenset(permissions)


def platform_profile(platform: Platform) -> PlatformProfile:
    """Platform-wide profile; a bare profile if the table has no section for it."""
    profile = get_capability_table().profiles.get(platform)
    if profile is None:
        return PlatformProfile(platform=platform, name=platform.value)
    return profile
