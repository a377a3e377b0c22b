"""Sleep, mindfulness and audio exposure records (all interval-bearing)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from healthbridge.domains.health.models.base import HealthDataPoint, TimeInterval
from healthbridge.domains.health.taxonomy.data_types import HealthDataType


class SleepStageType(str, Enum):
    AWAKE = "awake"
    LIGHT = "light"
    DEEP = "deep"
    REM = "rem"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SleepStage:
    stage: SleepStageType
    interval: TimeInterval


@dataclass(frozen=True, kw_only=True)
class SleepData(HealthDataPoint):
    """One sleep session. ``stages`` keeps the order the platform reported."""

    data_type = HealthDataType.SLEEP

    interval: TimeInterval
    stages: tuple[SleepStage, ...] = ()
    heart_rate_average: int | None = None
    heart_rate_min: int | None = None
    respiratory_rate_average: float | None = None


@dataclass(frozen=True, kw_only=True)
class MindfulnessSessionData(HealthDataPoint):
    data_type = HealthDataType.MINDFULNESS

    interval: TimeInterval
    heart_rate_variability: float | None = None  # ms
    respiratory_rate: float | None = None


@dataclass(frozen=True, kw_only=True)
class EnvironmentalAudioExposureData(HealthDataPoint):
    data_type = HealthDataType.ENVIRONMENTAL_AUDIO_EXPOSURE

    level: float  # dB
    interval: TimeInterval


@dataclass(frozen=True, kw_only=True)
class HeadphoneAudioExposureData(HealthDataPoint):
    data_type = HealthDataType.HEADPHONE_AUDIO_EXPOSURE

    level: float  # dB
    interval: TimeInterval
    is_notification_enabled: bool = True
