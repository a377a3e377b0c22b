"""Workout records and the configuration used to start a live session."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from healthbridge.domains.health.models.base import HealthDataPoint, TimeInterval
from healthbridge.domains.health.taxonomy.data_types import (
    DistanceUnit,
    HealthDataType,
    WorkoutType,
)


@dataclass(frozen=True)
class LocationData:
    """One route sample. Accuracies in metres, speed in m/s, bearing in degrees."""

    timestamp: datetime
    latitude: float
    longitude: float
    altitude: float | None = None
    accuracy: float | None = None
    altitude_accuracy: float | None = None
    speed: float | None = None
    bearing: float | None = None


@dataclass(frozen=True)
class WorkoutSegment:
    type: WorkoutType
    interval: TimeInterval
    name: str | None = None
    total_calories: float | None = None
    total_distance: float | None = None
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class WorkoutData(HealthDataPoint):
    """A completed workout, or a partial update streamed from a live one.

    Live updates only populate the metrics the platform measured since the
    previous update; everything else stays ``None``.
    """

    data_type = HealthDataType.WORKOUT

    id: str
    type: WorkoutType
    interval: TimeInterval
    title: str | None = None
    duration: timedelta | None = None
    total_calories: float | None = None
    active_calories: float | None = None
    total_distance: float | None = None
    distance_unit: DistanceUnit = DistanceUnit.METERS
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    min_heart_rate: int | None = None
    elevation_gained: float | None = None
    elevation_lost: float | None = None
    step_count: int | None = None
    is_indoor: bool | None = None
    segments: tuple[WorkoutSegment, ...] | None = None
    route: tuple[LocationData, ...] | None = None

    @property
    def distance_meters(self) -> float | None:
        if self.total_distance is None:
            return None
        return self.distance_unit.to_meters(self.total_distance)


@dataclass(frozen=True)
class WorkoutConfiguration:
    type: WorkoutType
    is_indoor: bool | None = None
    enable_gps_tracking: bool = True
    metadata: Mapping[str, Any] = field(default_factory=dict)
