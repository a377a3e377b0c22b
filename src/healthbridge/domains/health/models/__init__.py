"""Canonical health data point model.

The variants below form a closed set: adapters produce and accept only
these shapes, and ``HealthDataPointVariant`` names the union.
"""

from __future__ import annotations

from typing import Union

from healthbridge.domains.health.models.activity import (
    CalorieData,
    CyclingCadenceData,
    DistanceActivityType,
    DistanceData,
    PowerData,
    RunningStrideLengthData,
    SpeedData,
    StepsData,
    WalkingAsymmetryData,
    WalkingSpeedData,
    WalkingStepLengthData,
    WheelchairPushesData,
)
from healthbridge.domains.health.models.base import (
    DataSource,
    DeviceInfo,
    DeviceType,
    HealthDataPoint,
    SourceType,
    TimeInterval,
)
from healthbridge.domains.health.models.body import (
    BodyMeasurements,
    HydrationData,
    NutritionData,
)
from healthbridge.domains.health.models.reproductive import (
    CervicalMucusData,
    CervicalMucusQuality,
    FlowLevel,
    IntermenstrualBleedingData,
    MenstruationFlowData,
    OvulationTestData,
    OvulationTestResult,
    SexualActivityData,
)
from healthbridge.domains.health.models.sleep import (
    EnvironmentalAudioExposureData,
    HeadphoneAudioExposureData,
    MindfulnessSessionData,
    SleepData,
    SleepStage,
    SleepStageType,
)
from healthbridge.domains.health.models.vitals import (
    BloodPressureData,
    BodyTemperatureData,
    ECGClassification,
    ECGSymptomsStatus,
    ElectrocardiogramData,
    GlucoseData,
    HeartRateData,
    HeartRateVariabilityData,
    MealRelation,
    OxygenSaturationData,
    RespiratoryRateData,
    RestingHeartRateData,
    SpecimenSource,
)
from healthbridge.domains.health.models.workout import (
    LocationData,
    WorkoutConfiguration,
    WorkoutData,
    WorkoutSegment,
)

HealthDataPointVariant = Union[
    HeartRateData,
    RestingHeartRateData,
    HeartRateVariabilityData,
    BloodPressureData,
    OxygenSaturationData,
    RespiratoryRateData,
    BodyTemperatureData,
    GlucoseData,
    ElectrocardiogramData,
    StepsData,
    DistanceData,
    CalorieData,
    SpeedData,
    PowerData,
    CyclingCadenceData,
    WheelchairPushesData,
    RunningStrideLengthData,
    WalkingSpeedData,
    WalkingAsymmetryData,
    WalkingStepLengthData,
    BodyMeasurements,
    NutritionData,
    HydrationData,
    SleepData,
    MindfulnessSessionData,
    EnvironmentalAudioExposureData,
    HeadphoneAudioExposureData,
    MenstruationFlowData,
    OvulationTestData,
    SexualActivityData,
    CervicalMucusData,
    IntermenstrualBleedingData,
    WorkoutData,
]

__all__ = [
    "BloodPressureData",
    "BodyMeasurements",
    "BodyTemperatureData",
    "CalorieData",
    "CervicalMucusData",
    "CervicalMucusQuality",
    "CyclingCadenceData",
    "DataSource",
    "DeviceInfo",
    "DeviceType",
    "DistanceActivityType",
    "DistanceData",
    "ECGClassification",
    "ECGSymptomsStatus",
    "ElectrocardiogramData",
    "EnvironmentalAudioExposureData",
    "FlowLevel",
    "GlucoseData",
    "HeadphoneAudioExposureData",
    "HealthDataPoint",
    "HealthDataPointVariant",
    "HeartRateData",
    "HeartRateVariabilityData",
    "HydrationData",
    "IntermenstrualBleedingData",
    "LocationData",
    "MealRelation",
    "MenstruationFlowData",
    "MindfulnessSessionData",
    "NutritionData",
    "OvulationTestData",
    "OvulationTestResult",
    "OxygenSaturationData",
    "PowerData",
    "RespiratoryRateData",
    "RestingHeartRateData",
    "RunningStrideLengthData",
    "SexualActivityData",
    "SleepData",
    "SleepStage",
    "SleepStageType",
    "SourceType",
    "SpecimenSource",
    "SpeedData",
    "StepsData",
    "TimeInterval",
    "WalkingAsymmetryData",
    "WalkingSpeedData",
    "WalkingStepLengthData",
    "WheelchairPushesData",
    "WorkoutConfiguration",
    "WorkoutData",
    "WorkoutSegment",
]
