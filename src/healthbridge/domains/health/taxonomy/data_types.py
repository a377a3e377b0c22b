"""Canonical health data taxonomy shared by every platform adapter.

``HealthDataType`` is the closed catalogue of metric kinds the library knows
about. Values are the stable string names used in the capability table and
on the MCP surface (e.g. ``"HeartRate"``).
"""

from __future__ import annotations

from enum import Enum


class Platform(str, Enum):
    """Native health stores an adapter can sit on top of."""

    IOS = "ios"          # Apple HealthKit
    ANDROID = "android"  # Google Health Connect


class HealthDataType(str, Enum):
    """Canonical metric kinds."""

    # Fitness
    STEPS = "Steps"
    DISTANCE = "Distance"
    CALORIES = "Calories"
    ACTIVE_CALORIES = "ActiveCalories"
    BASAL_CALORIES = "BasalCalories"
    FLOORS = "Floors"

    # Vitals
    HEART_RATE = "HeartRate"
    HEART_RATE_VARIABILITY = "HeartRateVariability"
    RESTING_HEART_RATE = "RestingHeartRate"
    BLOOD_PRESSURE = "BloodPressure"
    OXYGEN_SATURATION = "OxygenSaturation"
    RESPIRATORY_RATE = "RespiratoryRate"
    BODY_TEMPERATURE = "BodyTemperature"

    # Body measurements
    WEIGHT = "Weight"
    HEIGHT = "Height"
    BODY_FAT = "BodyFat"
    BMI = "BMI"
    LEAN_BODY_MASS = "LeanBodyMass"

    # Workout
    WORKOUT = "Workout"
    VO2_MAX = "VO2Max"

    # Nutrition
    WATER = "Water"
    PROTEIN = "Protein"
    CARBOHYDRATES = "Carbohydrates"
    FAT = "Fat"
    FIBER = "Fiber"
    SUGAR = "Sugar"
    CAFFEINE = "Caffeine"

    # Sleep
    SLEEP = "Sleep"

    # Movement & mobility
    WALKING_ASYMMETRY = "WalkingAsymmetry"
    WALKING_DOUBLE_SUPPORT_PERCENTAGE = "WalkingDoubleSupportPercentage"
    WALKING_SPEED = "WalkingSpeed"
    WALKING_STEP_LENGTH = "WalkingStepLength"
    STAIR_ASCENT_SPEED = "StairAscentSpeed"
    STAIR_DESCENT_SPEED = "StairDescentSpeed"
    SIX_MINUTE_WALK_TEST_DISTANCE = "SixMinuteWalkTestDistance"
    NUMBER_OF_TIMES_FALLEN = "NumberOfTimesFallen"
    STAND_HOURS = "StandHours"

    # Audio & environment
    ENVIRONMENTAL_AUDIO_EXPOSURE = "EnvironmentalAudioExposure"
    HEADPHONE_AUDIO_EXPOSURE = "HeadphoneAudioExposure"
    UV_EXPOSURE = "UVExposure"

    # Advanced workout metrics
    RUNNING_STRIDE_LENGTH = "RunningStrideLength"
    RUNNING_VERTICAL_OSCILLATION = "RunningVerticalOscillation"
    RUNNING_GROUND_CONTACT_TIME = "RunningGroundContactTime"
    CYCLING_CADENCE = "CyclingCadence"
    CYCLING_POWER = "CyclingPower"
    CYCLING_FUNCTIONAL_THRESHOLD_POWER = "CyclingFunctionalThresholdPower"
    SWIMMING_STROKE_STYLE = "SwimmingStrokeStyle"
    WHEELCHAIR_PUSHES = "WheelchairPushes"

    # Clinical
    ELECTROCARDIOGRAM = "Electrocardiogram"
    IRREGULAR_HEART_RHYTHM_EVENT = "IrregularHeartRhythmEvent"
    PERIPHERAL_PERFUSION_INDEX = "PeripheralPerfusionIndex"

    # Clinical records (FHIR)
    CLINICAL_ALLERGIES = "ClinicalAllergies"
    CLINICAL_CONDITIONS = "ClinicalConditions"
    CLINICAL_IMMUNIZATIONS = "ClinicalImmunizations"
    CLINICAL_LAB_RESULTS = "ClinicalLabResults"
    CLINICAL_MEDICATIONS = "ClinicalMedications"
    CLINICAL_PROCEDURES = "ClinicalProcedures"
    CLINICAL_VITAL_SIGNS = "ClinicalVitalSigns"

    # Mindfulness
    MINDFULNESS = "Mindfulness"

    # Reproductive health
    MENSTRUATION_FLOW = "MenstruationFlow"
    MENSTRUATION_PERIOD = "MenstruationPeriod"
    OVULATION_TEST = "OvulationTest"
    SEXUAL_ACTIVITY = "SexualActivity"
    CERVICAL_MUCUS = "CervicalMucus"
    INTERMENSTRUAL_BLEEDING = "IntermenstrualBleeding"

    # Other
    BLOOD_GLUCOSE = "BloodGlucose"

    @classmethod
    def from_string(cls, value: str) -> HealthDataType | None:
        """Look up a data type by its canonical name; ``None`` if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class WorkoutType(str, Enum):
    RUNNING = "RUNNING"
    WALKING = "WALKING"
    CYCLING = "CYCLING"
    SWIMMING = "SWIMMING"
    STRENGTH_TRAINING = "STRENGTH_TRAINING"
    YOGA = "YOGA"
    PILATES = "PILATES"
    DANCE = "DANCE"
    MARTIAL_ARTS = "MARTIAL_ARTS"
    ROWING = "ROWING"
    ELLIPTICAL = "ELLIPTICAL"
    STAIR_CLIMBING = "STAIR_CLIMBING"
    HIGH_INTENSITY_INTERVAL_TRAINING = "HIGH_INTENSITY_INTERVAL_TRAINING"
    FUNCTIONAL_TRAINING = "FUNCTIONAL_TRAINING"
    CORE_TRAINING = "CORE_TRAINING"
    CROSS_TRAINING = "CROSS_TRAINING"
    FLEXIBILITY = "FLEXIBILITY"
    MIXED_CARDIO = "MIXED_CARDIO"
    SOCCER = "SOCCER"
    BASKETBALL = "BASKETBALL"
    TENNIS = "TENNIS"
    GOLF = "GOLF"
    HIKING = "HIKING"
    SKIING = "SKIING"
    SNOWBOARDING = "SNOWBOARDING"
    SKATING = "SKATING"
    SURFING = "SURFING"
    CLIMBING = "CLIMBING"
    EQUESTRIAN = "EQUESTRIAN"
    FISHING = "FISHING"
    HUNTING = "HUNTING"
    PLAY = "PLAY"
    MEDITATION = "MEDITATION"
    COOLDOWN = "COOLDOWN"
    OTHER = "OTHER"


class WeightUnit(str, Enum):
    KILOGRAMS = "kg"
    POUNDS = "lb"
    STONES = "st"


class TemperatureUnit(str, Enum):
    CELSIUS = "degC"
    FAHRENHEIT = "degF"
    KELVIN = "K"


# Metres per unit; only workout aggregation relies on these.
_METRES_PER_UNIT = {
    "m": 1.0,
    "km": 1000.0,
    "mi": 1609.344,
    "ft": 0.3048,
}


class DistanceUnit(str, Enum):
    METERS = "m"
    KILOMETERS = "km"
    MILES = "mi"
    FEET = "ft"

    def to_meters(self, value: float) -> float:
        return value * _METRES_PER_UNIT[self.value]
