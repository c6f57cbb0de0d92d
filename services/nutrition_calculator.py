"""Nutrition calculation helpers.

Provides BMI, calorie, macro and hydration targets used by the AI layer, the
daily aggregator and the badge engine. All functions are pure.
"""

from enum import Enum
from typing import Dict, Iterable

from core.logger import get_logger
from schemas.nutrition_schema import NutritionInfo
from schemas.profile_schema import ActivityLevel, UserProfile

logger = get_logger("services.nutrition_calculator")

MIN_DAILY_CALORIES = 1200
WATER_ML_PER_KG = 35
DEFAULT_FIBER_G = 25
DEFAULT_SUGAR_G = 50
DEFAULT_SODIUM_MG = 2300

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# applied once per matching goal, in the order the profile lists them
GOAL_CALORIE_ADJUSTMENTS = {
    "weight_loss": -500,
    "weight_gain": 500,
    "muscle_gain": 300,
}

DEFAULT_MACRO_RATIOS = {"protein": 0.25, "carbs": 0.45, "fat": 0.30}
MUSCLE_GAIN_MACRO_RATIOS = {"protein": 0.30, "carbs": 0.40, "fat": 0.30}
WEIGHT_LOSS_MACRO_RATIOS = {"protein": 0.30, "carbs": 0.35, "fat": 0.35}


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def bmi(self, weight_kg: float, height_cm: float) -> float:
        """Calculate BMI from weight in kg and height in cm."""
        h_m = height_cm / 100.0
        if h_m <= 0:
            return 0.0
        return weight_kg / (h_m * h_m)

    def bmi_category(self, bmi: float) -> BMICategory:
        if bmi < 18.5:
            return BMICategory.UNDERWEIGHT
        if bmi < 25:
            return BMICategory.NORMAL
        if bmi < 30:
            return BMICategory.OVERWEIGHT
        return BMICategory.OBESE

    def bmr(self, age: int, height_cm: float, weight_kg: float) -> float:
        """Basal metabolic rate, Mifflin-St Jeor with the +5 constant."""
        return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5

    def activity_multiplier(self, activity_level) -> float:
        try:
            level = ActivityLevel(activity_level)
        except ValueError:
            logger.warning("Unknown activity level %r, using sedentary multiplier", activity_level)
            level = ActivityLevel.SEDENTARY
        return ACTIVITY_MULTIPLIERS[level]

    def daily_calorie_target(self, profile: UserProfile) -> int:
        """Daily calorie need for a profile, never below 1200 kcal.

        BMR is scaled by the activity multiplier, then every weight-loss,
        weight-gain and muscle-gain goal adjusts the figure cumulatively.
        """
        calories = self.bmr(profile.age, profile.height, profile.weight)
        calories *= self.activity_multiplier(profile.activity_level)
        for goal in profile.health_goals:
            calories += GOAL_CALORIE_ADJUSTMENTS.get(goal, 0)
        target = max(MIN_DAILY_CALORIES, round(calories))
        logger.debug("Daily calorie target for profile %s: %s", profile.id, target)
        return target

    def macro_ratios(self, goals: Iterable[str]) -> Dict[str, float]:
        # muscle gain takes precedence over weight loss; the ratios never stack
        goals = set(goals or [])
        if "muscle_gain" in goals:
            return MUSCLE_GAIN_MACRO_RATIOS
        if "weight_loss" in goals:
            return WEIGHT_LOSS_MACRO_RATIOS
        return DEFAULT_MACRO_RATIOS

    def macro_targets(self, calories: float, goals: Iterable[str] = ()) -> Dict[str, int]:
        """Allocate macronutrient targets (grams) from a calorie figure.

        Args:
            calories: Daily calorie target.
            goals: Health goals of the user.

        Returns:
            Dictionary with rounded gram targets for 'protein', 'carbs', 'fat'.
        """
        ratios = self.macro_ratios(goals)
        macros = {
            key: round(calories * ratios[key] / KCAL_PER_GRAM[key])
            for key in ("protein", "carbs", "fat")
        }
        logger.debug("Macros calculated: %s", macros)
        return macros

    def daily_water_target_ml(self, weight_kg: float) -> int:
        return round(weight_kg * WATER_ML_PER_KG)

    def nutrition_targets(self, calories: float, goals: Iterable[str] = ()) -> NutritionInfo:
        """Full daily target record for a calorie figure."""
        macros = self.macro_targets(calories, goals)
        return NutritionInfo(
            calories=calories,
            protein=macros["protein"],
            carbs=macros["carbs"],
            fat=macros["fat"],
            fiber=DEFAULT_FIBER_G,
            sugar=DEFAULT_SUGAR_G,
            sodium=DEFAULT_SODIUM_MG,
        )

    def daily_targets(self, profile: UserProfile) -> NutritionInfo:
        """Profile-specific daily targets."""
        return self.nutrition_targets(self.daily_calorie_target(profile), profile.health_goals)


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "BMICategory", "nutrition_calculator"]
