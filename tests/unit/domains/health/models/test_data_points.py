"""Tests for the canonical health data point model."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from healthbridge.domains.health.models import (
    BodyMeasurements,
    BodyTemperatureData,
    CalorieData,
    DataSource,
    DistanceData,
    GlucoseData,
    HeartRateData,
    NutritionData,
    SleepData,
    SleepStage,
    SleepStageType,
    StepsData,
    TimeInterval,
    WorkoutData,
)
from healthbridge.domains.health.models.vitals import GLUCOSE_MMOL_TO_MG_DL
from healthbridge.domains.health.taxonomy.data_types import (
    DistanceUnit,
    HealthDataType,
    TemperatureUnit,
    WeightUnit,
    WorkoutType,
)

T0 = datetime(2024, 5, 1, 22, 0, tzinfo=timezone.utc)


class TestTimestampInvariant:
    def test_point_in_time_variant_requires_timestamp(self):
        with pytest.raises(ValueError, match="requires a timestamp"):
            HeartRateData(bpm=60)

    def test_interval_variant_takes_timestamp_from_start(self):
        sleep = SleepData(interval=TimeInterval(start=T0, end=T0 + timedelta(hours=8)))
        assert sleep.timestamp == T0

    def test_mismatched_timestamp_rejected(self):
        with pytest.raises(ValueError, match="interval start"):
            SleepData(
                timestamp=T0 + timedelta(minutes=5),
                interval=TimeInterval(start=T0),
            )

    def test_matching_timestamp_accepted(self):
        sleep = SleepData(timestamp=T0, interval=TimeInterval(start=T0))
        assert sleep.timestamp == T0

    def test_optional_interval_variant(self):
        steps = StepsData(timestamp=T0, count=1200)
        assert steps.interval is None
        with_interval = StepsData(
            count=1200, interval=TimeInterval(start=T0, end=T0 + timedelta(hours=1))
        )
        assert with_interval.timestamp == T0

    def test_interval_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            TimeInterval(start=T0, end=T0 - timedelta(seconds=1))

    def test_interval_duration(self):
        assert TimeInterval(start=T0, end=T0 + timedelta(minutes=30)).duration == timedelta(minutes=30)
        assert TimeInterval(start=T0).duration is None


class TestImmutability:
    def test_points_are_frozen(self):
        point = HeartRateData(timestamp=T0, bpm=60)
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.bpm = 70  # type: ignore[misc]

    def test_updates_are_new_values(self):
        point = HeartRateData(timestamp=T0, bpm=60)
        updated = dataclasses.replace(point, bpm=70)
        assert point.bpm == 60
        assert updated.bpm == 70

    def test_metadata_and_source(self):
        point = HeartRateData(
            timestamp=T0,
            bpm=60,
            source=DataSource(name="Watch"),
            metadata={"context": "resting"},
        )
        assert point.source.name == "Watch"
        assert point.metadata["context"] == "resting"
        assert HeartRateData(timestamp=T0, bpm=60).metadata == {}


class TestUnitDefaults:
    def test_distance_defaults_to_meters(self):
        assert DistanceData(timestamp=T0, distance=5.0).unit is DistanceUnit.METERS

    def test_weight_defaults_to_kilograms(self):
        assert BodyMeasurements(timestamp=T0, weight=70.0).weight_unit is WeightUnit.KILOGRAMS

    def test_temperature_defaults_to_celsius(self):
        assert BodyTemperatureData(timestamp=T0, temperature=36.6).unit is TemperatureUnit.CELSIUS

    def test_explicit_unit_kept(self):
        point = DistanceData(timestamp=T0, distance=3.1, unit=DistanceUnit.MILES)
        assert point.unit is DistanceUnit.MILES


class TestGlucose:
    def test_to_conventional(self):
        assert GlucoseData(timestamp=T0, level=5.0).to_conventional() == pytest.approx(90.091, abs=0.001)

    def test_constant_is_exact(self):
        assert GLUCOSE_MMOL_TO_MG_DL == 18.0182
        assert GlucoseData(timestamp=T0, level=1.0).to_conventional() == 18.0182


class TestCoveredDataTypes:
    def test_single_metric(self):
        point = HeartRateData(timestamp=T0, bpm=60)
        assert point.covered_data_types() == {HealthDataType.HEART_RATE}

    def test_body_measurements_report_populated_fields(self):
        point = BodyMeasurements(timestamp=T0, weight=70.0, bmi=22.5)
        assert point.covered_data_types() == {HealthDataType.WEIGHT, HealthDataType.BMI}

    def test_nutrition_reports_populated_fields(self):
        point = NutritionData(timestamp=T0, protein=30.0, water=250.0)
        assert point.covered_data_types() == {HealthDataType.PROTEIN, HealthDataType.WATER}

    def test_calories_include_basal_only_when_present(self):
        active = CalorieData(timestamp=T0, active_calories=100.0)
        assert HealthDataType.BASAL_CALORIES not in active.covered_data_types()
        both = CalorieData(timestamp=T0, active_calories=100.0, basal_calories=1500.0)
        assert HealthDataType.BASAL_CALORIES in both.covered_data_types()


class TestSleepAndWorkout:
    def test_sleep_stages_keep_order(self):
        stages = (
            SleepStage(SleepStageType.LIGHT, TimeInterval(start=T0, end=T0 + timedelta(hours=1))),
            SleepStage(SleepStageType.DEEP, TimeInterval(start=T0 + timedelta(hours=1))),
        )
        sleep = SleepData(interval=TimeInterval(start=T0), stages=stages)
        assert [s.stage for s in sleep.stages] == [SleepStageType.LIGHT, SleepStageType.DEEP]

    def test_workout_distance_in_meters(self):
        workout = WorkoutData(
            id="w1",
            type=WorkoutType.RUNNING,
            interval=TimeInterval(start=T0),
            total_distance=2.0,
            distance_unit=DistanceUnit.KILOMETERS,
        )
        assert workout.timestamp == T0
        assert workout.distance_meters == pytest.approx(2000.0)

    def test_workout_without_distance(self):
        workout = WorkoutData(id="w1", type=WorkoutType.YOGA, interval=TimeInterval(start=T0))
        assert workout.distance_meters is None
