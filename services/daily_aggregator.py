"""Daily aggregation of food-log entries.

Folds the entries attributed to one calendar day into total nutrition and
water intake and compares them against the profile's targets. Pure and
order-independent: fields are summed with `math.fsum`, so shuffling the input
never changes the result.
"""

import math
from datetime import date, datetime
from typing import Iterable, List, Set, Union

from core.logger import get_logger
from schemas.food_schema import DailyProgress, DailySummary, FoodCategory, FoodLog
from schemas.nutrition_schema import NutritionInfo
from schemas.profile_schema import UserProfile
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.daily_aggregator")

DEFAULT_BEVERAGE_ML = 250
NUTRITION_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")

DateLike = Union[date, datetime]


def _calendar_day(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def _percent(value: float, target: float) -> float:
    if not target:
        return 0.0
    return round(value / target * 100, 1)


class DailyAggregator:
    """Class-based aggregator over food-log collections."""

    def logs_for_date(self, food_logs: Iterable[FoodLog], for_date: DateLike) -> List[FoodLog]:
        """Entries whose for-date is the given calendar day."""
        day = _calendar_day(for_date)
        return [log for log in food_logs if _calendar_day(log.for_date) == day]

    def logged_dates(self, food_logs: Iterable[FoodLog]) -> Set[date]:
        return {_calendar_day(log.for_date) for log in food_logs}

    def total(self, food_logs: Iterable[FoodLog]) -> NutritionInfo:
        """Pointwise sum of effective nutrition; missing sugar/sodium count as 0."""
        values = [log.effective_nutrition for log in food_logs]
        return NutritionInfo(**{
            field: math.fsum((getattr(n, field) or 0.0) for n in values)
            for field in NUTRITION_FIELDS
        })

    def aggregate(self, food_logs: Iterable[FoodLog], for_date: DateLike) -> NutritionInfo:
        """Total nutrition of the entries attributed to `for_date`."""
        return self.total(self.logs_for_date(food_logs, for_date))

    def water_intake_ml(self, food_logs: Iterable[FoodLog], for_date: DateLike) -> int:
        """Water from beverages: explicit volume, else 250 ml, times quantity."""
        volumes = [
            (log.food.volume_ml if log.food.volume_ml is not None else DEFAULT_BEVERAGE_ML) * log.quantity
            for log in self.logs_for_date(food_logs, for_date)
            if log.food.category == FoodCategory.BEVERAGES
        ]
        return round(math.fsum(volumes))

    def daily_summary(self, food_logs: Iterable[FoodLog], for_date: DateLike, profile: UserProfile) -> DailySummary:
        """Totals for one day side by side with the profile's targets."""
        food_logs = list(food_logs)
        day_logs = self.logs_for_date(food_logs, for_date)
        totals = self.total(day_logs)
        water_ml = self.water_intake_ml(day_logs, for_date)
        targets = nutrition_calculator.daily_targets(profile)
        water_target = nutrition_calculator.daily_water_target_ml(profile.weight)
        summary = DailySummary(
            for_date=_calendar_day(for_date),
            log_count=len(day_logs),
            totals=totals.rounded(),
            water_ml=water_ml,
            targets=targets,
            water_target_ml=water_target,
            progress=DailyProgress(
                calories=_percent(totals.calories, targets.calories),
                protein=_percent(totals.protein, targets.protein),
                carbs=_percent(totals.carbs, targets.carbs),
                fat=_percent(totals.fat, targets.fat),
                water=_percent(water_ml, water_target),
            ),
        )
        logger.debug("Daily summary for %s on %s: %s entries", profile.id, summary.for_date, summary.log_count)
        return summary


# export a default instance
daily_aggregator = DailyAggregator()
