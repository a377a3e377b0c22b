"""Body measurement and nutrition records.

Both record kinds can carry several metrics at once, so they report every
populated metric through ``covered_data_types``.
"""

from __future__ import annotations

from dataclasses import dataclass

from healthbridge.domains.health.models.base import HealthDataPoint
from healthbridge.domains.health.taxonomy.data_types import HealthDataType, WeightUnit


@dataclass(frozen=True, kw_only=True)
class BodyMeasurements(HealthDataPoint):
    data_type = HealthDataType.WEIGHT

    weight: float | None = None
    weight_unit: WeightUnit = WeightUnit.KILOGRAMS
    height: float | None = None  # metres
    body_fat_percentage: float | None = None
    bmi: float | None = None
    lean_body_mass: float | None = None
    lean_body_mass_unit: WeightUnit = WeightUnit.KILOGRAMS
    waist_circumference: float | None = None  # metres

    def covered_data_types(self) -> frozenset[HealthDataType]:
        fields = {
            HealthDataType.WEIGHT: self.weight,
            HealthDataType.HEIGHT: self.height,
            HealthDataType.BODY_FAT: self.body_fat_percentage,
            HealthDataType.BMI: self.bmi,
            HealthDataType.LEAN_BODY_MASS: self.lean_body_mass,
        }
        return frozenset(t for t, value in fields.items() if value is not None)


@dataclass(frozen=True, kw_only=True)
class NutritionData(HealthDataPoint):
    """One meal or intake entry. Masses in grams unless noted."""

    data_type = HealthDataType.PROTEIN

    calories: float | None = None
    protein: float | None = None
    carbohydrates: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    unsaturated_fat: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None  # mg
    cholesterol: float | None = None  # mg
    water: float | None = None  # ml
    caffeine: float | None = None  # mg
    alcohol: float | None = None

    def covered_data_types(self) -> frozenset[HealthDataType]:
        fields = {
            HealthDataType.CALORIES: self.calories,
            HealthDataType.PROTEIN: self.protein,
            HealthDataType.CARBOHYDRATES: self.carbohydrates,
            HealthDataType.FAT: self.fat,
            HealthDataType.FIBER: self.fiber,
            HealthDataType.SUGAR: self.sugar,
            HealthDataType.WATER: self.water,
            HealthDataType.CAFFEINE: self.caffeine,
        }
        return frozenset(t for t, value in fields.items() if value is not None)


@dataclass(frozen=True, kw_only=True)
class HydrationData(HealthDataPoint):
    data_type = HealthDataType.WATER

    volume: float  # ml
