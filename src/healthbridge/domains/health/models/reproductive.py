"""Reproductive health records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from healthbridge.domains.health.models.base import HealthDataPoint
from healthbridge.domains.health.taxonomy.data_types import HealthDataType


class FlowLevel(str, Enum):
    SPOTTING = "spotting"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    UNSPECIFIED = "unspecified"


class OvulationTestResult(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    INDETERMINATE = "indeterminate"


class CervicalMucusQuality(str, Enum):
    DRY = "dry"
    STICKY = "sticky"
    CREAMY = "creamy"
    WATERY = "watery"
    EGG_WHITE = "egg_white"


@dataclass(frozen=True, kw_only=True)
class MenstruationFlowData(HealthDataPoint):
    data_type = HealthDataType.MENSTRUATION_FLOW

    flow: FlowLevel = FlowLevel.UNSPECIFIED


@dataclass(frozen=True, kw_only=True)
class OvulationTestData(HealthDataPoint):
    data_type = HealthDataType.OVULATION_TEST

    result: OvulationTestResult


@dataclass(frozen=True, kw_only=True)
class SexualActivityData(HealthDataPoint):
    data_type = HealthDataType.SEXUAL_ACTIVITY

    protection_used: bool | None = None


@dataclass(frozen=True, kw_only=True)
class CervicalMucusData(HealthDataPoint):
    data_type = HealthDataType.CERVICAL_MUCUS

    quality: CervicalMucusQuality


@dataclass(frozen=True, kw_only=True)
class IntermenstrualBleedingData(HealthDataPoint):
    data_type = HealthDataType.INTERMENSTRUAL_BLEEDING

    is_spotting: bool = True
