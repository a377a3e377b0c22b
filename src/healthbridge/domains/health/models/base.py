"""Canonical health data point supertype and provenance types.

Every concrete record is a frozen, keyword-only dataclass deriving from
:class:`HealthDataPoint`. Records are built where data is read, written or
observed and never mutated afterwards; an update is a new value.

Unit conventions: metric units unless a variant carries an explicit unit
field, in which case that field names the unit (defaulting to metres,
kilograms or degrees Celsius).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, ClassVar

from healthbridge.domains.health.taxonomy.data_types import HealthDataType


class SourceType(str, Enum):
    DEVICE = "device"
    APPLICATION = "application"
    UNKNOWN = "unknown"


class DeviceType(str, Enum):
    PHONE = "phone"
    WATCH = "watch"
    OTHER = "other"


@dataclass(frozen=True)
class DeviceInfo:
    manufacturer: str | None = None
    model: str | None = None
    type: DeviceType = DeviceType.OTHER
    software_version: str | None = None


@dataclass(frozen=True)
class DataSource:
    """Where a data point came from (app bundle and/or physical device)."""

    name: str
    type: SourceType = SourceType.UNKNOWN
    bundle_identifier: str | None = None
    device: DeviceInfo | None = None


@dataclass(frozen=True)
class TimeInterval:
    """A start instant and an optional end (open while still in progress)."""

    start: datetime
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end < self.start:
            raise ValueError("Interval end must not precede its start")

    @property
    def duration(self) -> timedelta | None:
        if self.end is None:
            return None
        return self.end - self.start


@dataclass(frozen=True, kw_only=True)
class HealthDataPoint:
    """A timestamped, sourced, annotated health observation.

    ``timestamp`` is always populated after construction. Variants that
    carry an ``interval`` may omit it; it is then taken from
    ``interval.start``, and an explicit timestamp must equal that start.
    """

    data_type: ClassVar[HealthDataType]

    timestamp: datetime | None = None
    source: DataSource | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        interval: TimeInterval | None = getattr(self, "interval", None)
        if interval is not None:
            if self.timestamp is None:
                object.__setattr__(self, "timestamp", interval.start)
            elif self.timestamp != interval.start:
                raise ValueError(
                    f"{type(self).__name__}.timestamp must equal its interval start"
                )
        if self.timestamp is None:
            raise ValueError(f"{type(self).__name__} requires a timestamp")

    def covered_data_types(self) -> frozenset[HealthDataType]:
        """Every data type this record carries values for."""
        return frozenset({self.data_type})
