"""Tests for the nutrition calculator."""

import itertools

import pytest

from schemas.profile_schema import ActivityLevel, UserProfile
from services.nutrition_calculator import BMICategory, MIN_DAILY_CALORIES, nutrition_calculator


def _profile(**overrides):
    data = dict(id="u1", age=30, weight=70.0, height=175.0, activity_level=ActivityLevel.MODERATE, health_goals=[])
    data.update(overrides)
    return UserProfile(**data)


def test_bmi_and_category():
    bmi = nutrition_calculator.bmi(70, 175)
    assert bmi == pytest.approx(22.857, rel=1e-3)
    assert nutrition_calculator.bmi_category(bmi) == BMICategory.NORMAL
    assert nutrition_calculator.bmi_category(17.0) == BMICategory.UNDERWEIGHT
    assert nutrition_calculator.bmi_category(27.0) == BMICategory.OVERWEIGHT
    assert nutrition_calculator.bmi_category(31.0) == BMICategory.OBESE


def test_bmi_zero_height_returns_zero():
    assert nutrition_calculator.bmi(70, 0) == 0.0


def test_daily_calorie_target_moderate_profile():
    # (10*70 + 6.25*175 - 5*30 + 5) * 1.55 = 1648.75 * 1.55
    assert nutrition_calculator.daily_calorie_target(_profile()) == 2556


def test_weight_loss_reduces_target_by_500():
    base = nutrition_calculator.daily_calorie_target(_profile())
    assert nutrition_calculator.daily_calorie_target(_profile(health_goals=["weight_loss"])) == base - 500


def test_goal_adjustments_stack():
    base = nutrition_calculator.daily_calorie_target(_profile())
    target = nutrition_calculator.daily_calorie_target(_profile(health_goals=["weight_gain", "muscle_gain"]))
    assert target == base + 800


def test_calorie_target_never_below_floor():
    tiny = _profile(age=100, weight=30.0, height=100.0, activity_level=ActivityLevel.SEDENTARY, health_goals=["weight_loss"])
    assert nutrition_calculator.daily_calorie_target(tiny) == MIN_DAILY_CALORIES


def test_unknown_activity_level_uses_sedentary():
    assert nutrition_calculator.activity_multiplier("couch") == 1.2


@pytest.mark.parametrize("goals", [[], ["weight_loss"], ["muscle_gain"], ["weight_loss", "muscle_gain"]])
def test_macro_targets_add_up_to_calories(goals):
    macros = nutrition_calculator.macro_targets(2000, goals)
    kcal = macros["protein"] * 4 + macros["carbs"] * 4 + macros["fat"] * 9
    assert kcal == pytest.approx(2000, abs=15)


def test_muscle_gain_ratios_win_over_weight_loss():
    both = nutrition_calculator.macro_targets(2000, ["weight_loss", "muscle_gain"])
    assert both == nutrition_calculator.macro_targets(2000, ["muscle_gain"])
    assert both == {"protein": 150, "carbs": 200, "fat": 67}


def test_default_macro_split():
    assert nutrition_calculator.macro_targets(2000) == {"protein": 125, "carbs": 225, "fat": 67}


def test_daily_targets_include_micro_defaults():
    targets = nutrition_calculator.daily_targets(_profile())
    assert targets.calories == 2556
    assert (targets.fiber, targets.sugar, targets.sodium) == (25, 50, 2300)


def test_water_target():
    assert nutrition_calculator.daily_water_target_ml(70) == 2450


EXTREME_BODIES = list(itertools.product((13, 30, 100), (30.0, 70.0, 300.0), (100.0, 175.0, 250.0)))
GOAL_SETS = ([], ["weight_loss"], ["weight_gain"], ["muscle_gain"], ["weight_loss", "maintenance"])


@pytest.mark.parametrize("activity_level", list(ActivityLevel))
@pytest.mark.parametrize("goals", GOAL_SETS)
def test_calorie_target_floor_holds_for_every_profile(activity_level, goals):
    for age, weight, height in EXTREME_BODIES:
        profile = _profile(age=age, weight=weight, height=height, activity_level=activity_level, health_goals=goals)
        assert nutrition_calculator.daily_calorie_target(profile) >= MIN_DAILY_CALORIES


@pytest.mark.parametrize("weight, height", [(w, h) for _, w, h in EXTREME_BODIES] + [(0.1, 300.0), (500.0, 50.0)])
def test_bmi_is_positive_for_positive_inputs(weight, height):
    assert nutrition_calculator.bmi(weight, height) > 0
