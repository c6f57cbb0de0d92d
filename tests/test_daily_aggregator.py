"""Tests for daily aggregation of the food log."""

import random
from datetime import date

import pytest

from schemas.food_schema import FoodCategory, MealType
from services.daily_aggregator import daily_aggregator

DAY = date(2026, 4, 10)
OTHER_DAY = date(2026, 4, 11)


def test_aggregate_sums_only_the_requested_day(make_log):
    logs = [
        make_log(DAY, calories=400, protein=20),
        make_log(DAY, calories=250, protein=10, quantity=2),
        make_log(OTHER_DAY, calories=999),
    ]
    total = daily_aggregator.aggregate(logs, DAY)
    assert total.calories == pytest.approx(900)
    assert total.protein == pytest.approx(40)
    assert total.sugar == 0


def test_aggregate_is_order_independent(make_log):
    logs = [make_log(DAY, calories=c, protein=c / 7, fat=c / 13) for c in (101.1, 33.3, 0.7, 250.25, 87.9)]
    first = daily_aggregator.aggregate(logs, DAY)
    shuffled = list(logs)
    random.Random(7).shuffle(shuffled)
    assert daily_aggregator.aggregate(shuffled, DAY) == first
    assert daily_aggregator.aggregate(logs, DAY) == first


def test_aggregate_of_empty_day_is_zero(make_log):
    total = daily_aggregator.aggregate([make_log(OTHER_DAY)], DAY)
    assert total.calories == 0
    assert total.sodium == 0


def test_water_counts_beverages_only(make_log):
    logs = [
        make_log(DAY, name="Green tea", category=FoodCategory.BEVERAGES, quantity=2),
        make_log(DAY, name="Water bottle", category=FoodCategory.BEVERAGES, volume_ml=500),
        make_log(DAY, name="Soup"),
    ]
    assert daily_aggregator.water_intake_ml(logs, DAY) == 1000


def test_logged_dates(make_log):
    logs = [make_log(DAY), make_log(DAY), make_log(OTHER_DAY)]
    assert daily_aggregator.logged_dates(logs) == {DAY, OTHER_DAY}


def test_daily_summary_reports_progress(profile, make_log):
    logs = [
        make_log(DAY, meal_type=MealType.BREAKFAST, calories=639, protein=40),
        make_log(DAY, name="Water", category=FoodCategory.BEVERAGES, calories=0, protein=0, carbs=0, fat=0),
    ]
    summary = daily_aggregator.daily_summary(logs, DAY, profile)
    assert summary.for_date == DAY
    assert summary.log_count == 2
    assert summary.totals.calories == 639
    assert summary.water_ml == 250
    assert summary.targets.calories == 2556
    assert summary.water_target_ml == 2450
    assert summary.progress.calories == pytest.approx(25.0)
    assert summary.progress.water == pytest.approx(10.2)
