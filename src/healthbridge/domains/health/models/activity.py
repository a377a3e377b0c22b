"""Activity and movement records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from healthbridge.domains.health.models.base import HealthDataPoint, TimeInterval
from healthbridge.domains.health.taxonomy.data_types import DistanceUnit, HealthDataType


@dataclass(frozen=True, kw_only=True)
class StepsData(HealthDataPoint):
    data_type = HealthDataType.STEPS

    count: int
    cadence: float | None = None  # steps per minute
    floors_climbed: int | None = None
    interval: TimeInterval | None = None


class DistanceActivityType(str, Enum):
    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    WHEELCHAIR = "wheelchair"
    OTHER = "other"
    UNKNOWN = "unknown"


@dataclass(frozen=True, kw_only=True)
class DistanceData(HealthDataPoint):
    data_type = HealthDataType.DISTANCE

    distance: float
    unit: DistanceUnit = DistanceUnit.METERS
    activity_type: DistanceActivityType = DistanceActivityType.UNKNOWN
    interval: TimeInterval | None = None


@dataclass(frozen=True, kw_only=True)
class CalorieData(HealthDataPoint):
    data_type = HealthDataType.CALORIES

    active_calories: float
    basal_calories: float | None = None

    def covered_data_types(self) -> frozenset[HealthDataType]:
        types = {HealthDataType.CALORIES, HealthDataType.ACTIVE_CALORIES}
        if self.basal_calories is not None:
            types.add(HealthDataType.BASAL_CALORIES)
        return frozenset(types)


@dataclass(frozen=True, kw_only=True)
class SpeedData(HealthDataPoint):
    data_type = HealthDataType.WALKING_SPEED

    meters_per_second: float


@dataclass(frozen=True, kw_only=True)
class PowerData(HealthDataPoint):
    data_type = HealthDataType.CYCLING_POWER

    watts: float


@dataclass(frozen=True, kw_only=True)
class CyclingCadenceData(HealthDataPoint):
    data_type = HealthDataType.CYCLING_CADENCE

    rpm: int


@dataclass(frozen=True, kw_only=True)
class WheelchairPushesData(HealthDataPoint):
    data_type = HealthDataType.WHEELCHAIR_PUSHES

    push_count: int
    duration: timedelta | None = None


@dataclass(frozen=True, kw_only=True)
class RunningStrideLengthData(HealthDataPoint):
    data_type = HealthDataType.RUNNING_STRIDE_LENGTH

    stride_length: float  # metres


@dataclass(frozen=True, kw_only=True)
class WalkingSpeedData(HealthDataPoint):
    data_type = HealthDataType.WALKING_SPEED

    speed: float  # metres per second
    interval: TimeInterval | None = None


@dataclass(frozen=True, kw_only=True)
class WalkingAsymmetryData(HealthDataPoint):
    data_type = HealthDataType.WALKING_ASYMMETRY

    percentage: float  # 0-100


@dataclass(frozen=True, kw_only=True)
class WalkingStepLengthData(HealthDataPoint):
    data_type = HealthDataType.WALKING_STEP_LENGTH

    step_length: float  # metres
