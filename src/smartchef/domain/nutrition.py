"""Nutrition domain models."""

import datetime as dt
import math
from dataclasses import dataclass
from enum import StrEnum

from pydantic import Field, field_validator

from smartchef.domain.models import CamelModel, UtcDatetime

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


class MealType(StrEnum):
    """Meal slot a log entry was recorded for."""

    BREAKFAST = "Breakfast"
    BRUNCH = "Brunch"
    LUNCH = "Lunch"
    SNACK = "Snack"
    DINNER = "Dinner"


class DietType(StrEnum):
    """Diet plan preset family."""

    WEIGHT_LOSS = "weight-loss"
    MAINTENANCE = "maintenance"
    MUSCLE_GAIN = "muscle-gain"
    CUSTOM = "custom"


class NutritionInfo(CamelModel):
    """Nutrition values for a recipe, meal or day."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)
    saturated_fat: float | None = Field(default=None, ge=0)
    cholesterol: float | None = Field(default=None, ge=0)

    def scaled(self, factor: float) -> "NutritionInfo":
        """Return these values multiplied by a serving factor."""
        values = self.model_dump(exclude_none=True)
        return NutritionInfo(**{name: value * factor for name, value in values.items()})


class NutritionLog(CamelModel):
    """A single cooked-and-eaten entry."""

    id: str = Field(min_length=1)
    date: dt.date
    recipe_id: str
    recipe_title: str
    meal_type: MealType
    servings: float = Field(gt=0)
    nutrition: NutritionInfo
    timestamp: UtcDatetime


class Macros(CamelModel):
    """Daily macronutrient targets in grams."""

    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)


class DietPlan(CamelModel):
    """The user's active calorie and macro goals."""

    daily_calories: float = Field(ge=0)
    macros: Macros
    diet_type: DietType
    start_date: dt.date
    is_active: bool = True

    @field_validator("start_date", mode="before")
    @classmethod
    def _date_part(cls, value: object) -> object:
        # Older plans stored a full ISO timestamp.
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value


class DailyNutrition(CamelModel):
    """Totals for one calendar day."""

    date: dt.date
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    total_fiber: float = 0
    meals: list[NutritionLog] = Field(default_factory=list)


class NutrientBreakdown(CamelModel):
    """Per-metric values used for progress percentages and remainders."""

    calories: float
    protein: float
    carbs: float
    fat: float


class NutritionProgress(CamelModel):
    """Consumption measured against a diet plan."""

    consumed: NutritionInfo
    goals: DietPlan
    percentages: NutrientBreakdown
    remaining: NutrientBreakdown
    is_over_goal: bool


class WeeklySummary(CamelModel):
    """Rolling seven-day summary ending today."""

    week_start: dt.date
    week_end: dt.date
    daily_totals: list[DailyNutrition]
    average_calories: int
    average_protein: int
    average_carbs: int
    average_fat: int
    days_met_goal: int
    total_meals: int


@dataclass(frozen=True)
class DietPreset:
    """Template for building a diet plan from base calories."""

    name: str
    description: str
    type: DietType
    calorie_multiplier: float
    protein_percent: float
    carbs_percent: float
    fat_percent: float


DIET_PRESETS: dict[DietType, DietPreset] = {
    DietType.WEIGHT_LOSS: DietPreset(
        name="Weight Loss",
        description="Calorie deficit with high protein",
        type=DietType.WEIGHT_LOSS,
        calorie_multiplier=0.8,
        protein_percent=35,
        carbs_percent=35,
        fat_percent=30,
    ),
    DietType.MAINTENANCE: DietPreset(
        name="Maintenance",
        description="Balanced nutrition for maintaining weight",
        type=DietType.MAINTENANCE,
        calorie_multiplier=1.0,
        protein_percent=30,
        carbs_percent=40,
        fat_percent=30,
    ),
    DietType.MUSCLE_GAIN: DietPreset(
        name="Muscle Gain",
        description="Calorie surplus with high protein",
        type=DietType.MUSCLE_GAIN,
        calorie_multiplier=1.15,
        protein_percent=35,
        carbs_percent=45,
        fat_percent=20,
    ),
    DietType.CUSTOM: DietPreset(
        name="Custom",
        description="Set your own goals",
        type=DietType.CUSTOM,
        calorie_multiplier=1.0,
        protein_percent=30,
        carbs_percent=40,
        fat_percent=30,
    ),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def calories_from_macros(protein: float, carbs: float, fat: float) -> float:
    """Return the calories supplied by the given macro grams."""
    return (
        protein * PROTEIN_KCAL_PER_G
        + carbs * CARBS_KCAL_PER_G
        + fat * FAT_KCAL_PER_G
    )


def macros_from_calories(
    total_calories: float,
    protein_percent: float,
    carbs_percent: float,
    fat_percent: float,
) -> Macros:
    """Split a calorie budget into whole macro grams by percentage."""
    protein_kcal = total_calories * protein_percent / 100
    carbs_kcal = total_calories * carbs_percent / 100
    fat_kcal = total_calories * fat_percent / 100
    return Macros(
        protein=round_half_up(protein_kcal / PROTEIN_KCAL_PER_G),
        carbs=round_half_up(carbs_kcal / CARBS_KCAL_PER_G),
        fat=round_half_up(fat_kcal / FAT_KCAL_PER_G),
    )


def plan_from_preset(
    diet_type: DietType, base_calories: float, start_date: dt.date
) -> DietPlan:
    """Build an active plan from a preset and the user's base calories."""
    preset = DIET_PRESETS[diet_type]
    daily_calories = round_half_up(base_calories * preset.calorie_multiplier)
    return DietPlan(
        daily_calories=daily_calories,
        macros=macros_from_calories(
            daily_calories,
            preset.protein_percent,
            preset.carbs_percent,
            preset.fat_percent,
        ),
        diet_type=diet_type,
        start_date=start_date,
        is_active=True,
    )
