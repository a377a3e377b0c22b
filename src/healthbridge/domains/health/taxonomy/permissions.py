"""Permission value types and the granted/denied partition of a request."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from healthbridge.domains.health.taxonomy.data_types import HealthDataType


class AccessType(str, Enum):
    READ = "READ"
    WRITE = "WRITE"


@dataclass(frozen=True)
class Permission:
    """Access of one kind to one data type. Hashable; compared by value."""

    data_type: HealthDataType
    access_type: AccessType

    def __str__(self) -> str:
        return f"{self.data_type.value}:{self.access_type.value}"


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    NOT_DETERMINED = "not_determined"
    PARTIALLY_GRANTED = "partially_granted"


@dataclass(frozen=True)
class PermissionResult:
    """Outcome of a permission request or check.

    ``granted`` and ``denied`` are disjoint and together cover exactly the
    requested set. Build one with :meth:`from_granted` so the partition is
    derived rather than trusted.
    """

    granted: frozenset[Permission] = frozenset()
    denied: frozenset[Permission] = frozenset()
    platform_info: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        overlap = self.granted & self.denied
        if overlap:
            raise ValueError(
                "Permissions cannot be both granted and denied: "
                + ", ".join(sorted(str(p) for p in overlap))
            )

    @classmethod
    def from_granted(
        cls,
        requested: Iterable[Permission],
        granted: Iterable[Permission],
        platform_info: dict[str, Any] | None = None,
    ) -> PermissionResult:
        """Partition ``requested`` by membership in ``granted``.

        Grants outside the requested set are ignored.
        """
        requested_set = frozenset(requested)
        granted_set = frozenset(granted) & requested_set
        return cls(
            granted=granted_set,
            denied=requested_set - granted_set,
            platform_info=dict(platform_info or {}),
        )

    @property
    def requested(self) -> frozenset[Permission]:
        return self.granted | self.denied

    @property
    def status(self) -> PermissionStatus:
        if not self.granted and not self.denied:
            return PermissionStatus.NOT_DETERMINED
        if not self.denied:
            return PermissionStatus.GRANTED
        if not self.granted:
            return PermissionStatus.DENIED
        return PermissionStatus.PARTIALLY_GRANTED

    def is_granted(self, permission: Permission) -> bool:
        return permission in self.granted
