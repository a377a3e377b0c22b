"""Vital sign records: heart, blood, respiration, temperature, ECG."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from healthbridge.domains.health.models.base import HealthDataPoint
from healthbridge.domains.health.taxonomy.data_types import HealthDataType, TemperatureUnit

# mmol/L -> mg/dL for blood glucose
GLUCOSE_MMOL_TO_MG_DL = 18.0182


@dataclass(frozen=True, kw_only=True)
class HeartRateData(HealthDataPoint):
    data_type = HealthDataType.HEART_RATE

    bpm: int
    variability: float | None = None  # HRV, ms


@dataclass(frozen=True, kw_only=True)
class RestingHeartRateData(HealthDataPoint):
    data_type = HealthDataType.RESTING_HEART_RATE

    bpm: int


@dataclass(frozen=True, kw_only=True)
class HeartRateVariabilityData(HealthDataPoint):
    data_type = HealthDataType.HEART_RATE_VARIABILITY

    sdnn: float  # ms
    rmssd: float | None = None
    pnn50: float | None = None


@dataclass(frozen=True, kw_only=True)
class BloodPressureData(HealthDataPoint):
    data_type = HealthDataType.BLOOD_PRESSURE

    systolic: int
    diastolic: int


@dataclass(frozen=True, kw_only=True)
class OxygenSaturationData(HealthDataPoint):
    data_type = HealthDataType.OXYGEN_SATURATION

    percentage: float
    supplemental_oxygen_flow: float | None = None  # L/min


@dataclass(frozen=True, kw_only=True)
class RespiratoryRateData(HealthDataPoint):
    data_type = HealthDataType.RESPIRATORY_RATE

    breaths_per_minute: float


@dataclass(frozen=True, kw_only=True)
class BodyTemperatureData(HealthDataPoint):
    data_type = HealthDataType.BODY_TEMPERATURE

    temperature: float
    unit: TemperatureUnit = TemperatureUnit.CELSIUS


class SpecimenSource(str, Enum):
    INTERSTITIAL_FLUID = "interstitial_fluid"
    CAPILLARY_BLOOD = "capillary_blood"
    PLASMA = "plasma"
    SERUM = "serum"
    TEARS = "tears"
    WHOLE_BLOOD = "whole_blood"
    UNKNOWN = "unknown"


class MealRelation(str, Enum):
    BEFORE_MEAL = "before_meal"
    AFTER_MEAL = "after_meal"
    FASTING = "fasting"
    RANDOM = "random"
    UNKNOWN = "unknown"


@dataclass(frozen=True, kw_only=True)
class GlucoseData(HealthDataPoint):
    """Blood glucose reading. ``level`` is in mmol/L."""

    data_type = HealthDataType.BLOOD_GLUCOSE

    level: float
    specimen_source: SpecimenSource | None = None
    meal_relation: MealRelation | None = None

    def to_conventional(self) -> float:
        """The reading in mg/dL."""
        return self.level * GLUCOSE_MMOL_TO_MG_DL


class ECGClassification(str, Enum):
    NOT_SET = "not_set"
    SINUS_RHYTHM = "sinus_rhythm"
    ATRIAL_FIBRILLATION = "atrial_fibrillation"
    INCONCLUSIVE_LOW_HEART_RATE = "inconclusive_low_heart_rate"
    INCONCLUSIVE_HIGH_HEART_RATE = "inconclusive_high_heart_rate"
    INCONCLUSIVE_POOR_RECORDING = "inconclusive_poor_recording"
    INCONCLUSIVE_OTHER = "inconclusive_other"
    UNRECOGNIZED = "unrecognized"
    UNKNOWN = "unknown"


class ECGSymptomsStatus(str, Enum):
    NOT_SET = "not_set"
    NONE = "none"
    PRESENT = "present"
    UNKNOWN = "unknown"


@dataclass(frozen=True, kw_only=True)
class ElectrocardiogramData(HealthDataPoint):
    data_type = HealthDataType.ELECTROCARDIOGRAM

    classification: ECGClassification
    number_of_voltage_measurements: int
    average_heart_rate: int | None = None
    sampling_frequency: float = 512.0  # Hz
    symptoms_status: ECGSymptomsStatus = ECGSymptomsStatus.NOT_SET
    symptoms: frozenset[str] = frozenset()
    voltage_measurements: tuple[float, ...] = field(default_factory=tuple)  # microvolts
