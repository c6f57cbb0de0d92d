"""Tests for the fallback meal plan."""

from datetime import datetime

from services.fallback_policy import FALLBACK_PLAN_NAME, default_meal_plan


def test_fallback_plan_shape(profile):
    now = datetime(2026, 1, 5, 10, 0)
    plan = default_meal_plan(profile, days=7, now=now)
    assert plan.is_fallback
    assert plan.name == FALLBACK_PLAN_NAME
    assert plan.meals == []
    assert plan.user_id == profile.id
    assert plan.start_date == now
    assert (plan.end_date - plan.start_date).days == 6


def test_fallback_targets_are_generic(profile):
    target = default_meal_plan(profile).target_nutrition
    assert target.calories == 2000
    assert (target.protein, target.carbs, target.fat) == (125, 225, 67)
    assert (target.fiber, target.sugar, target.sodium) == (25, 50, 2300)


def test_fallback_plan_total_is_zero(profile):
    assert default_meal_plan(profile, days=1).total_nutrition.calories == 0
