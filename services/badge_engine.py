"""Badge progress engine.

Progress is derived on every read from the food-log history and never
stored. Earned badges are pinned at 100; unearned badges are scored from
their criteria:

- streak: current streak for the metric * (100 / target), capped at 100
- total: qualifying count for the metric * (100 / target), capped at 100
- achievement: a yes/no check over today's aggregate, 0 or 100

Achievements without a derivation report 0 with `measured=False`.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from core.logger import get_logger
from data.badges import BADGE_DATA
from schemas.badge_schema import ActivityContext, Badge, BadgeCategory, BadgeProgress, CriteriaKind, UserBadge
from schemas.food_schema import FoodCategory, FoodLog, MealType
from schemas.profile_schema import UserProfile
from services.daily_aggregator import daily_aggregator
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.badge_engine")

BADGE_CATALOG: Tuple[Badge, ...] = tuple(Badge.model_validate(item) for item in BADGE_DATA)

CALORIE_ACCURACY_KCAL = 100
MACRO_TOLERANCE = 0.10
EARLY_BREAKFAST_CUTOFF = time(9, 0)
MAIN_MEALS = {MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER}


def _streak(qualifying_days: Set[date], today: date) -> int:
    """Consecutive qualifying days ending today."""
    count = 0
    day = today
    while day in qualifying_days:
        count += 1
        day -= timedelta(days=1)
    return count


def _within(value: float, target: float, tolerance: float) -> bool:
    if target <= 0:
        return False
    return abs(value - target) <= target * tolerance


class BadgeProgressEngine:
    """Evaluates catalog badges against a user's activity."""

    def __init__(self):
        self._achievements: Dict[str, Callable[[ActivityContext], Optional[bool]]] = {
            "macro_balance": self._macro_balance,
        }

    def catalog(self) -> List[Badge]:
        return list(BADGE_CATALOG)

    def _macro_balance(self, context: ActivityContext) -> Optional[bool]:
        # protein, carbs and fat all within 10% of target today
        if context.targets is None:
            return None
        today, targets = context.today, context.targets
        return all(
            _within(getattr(today, macro), getattr(targets, macro), MACRO_TOLERANCE)
            for macro in ("protein", "carbs", "fat")
        )

    def criterion_progress(self, badge: Badge, context: ActivityContext) -> Tuple[float, bool]:
        """Progress (0-100) of an unearned badge and whether it could be measured."""
        criteria = badge.criteria
        step = 100.0 / criteria.target
        if criteria.kind == CriteriaKind.STREAK:
            streak = context.streaks.get(criteria.metric, context.current_streak_days)
            return min(streak * step, 100.0), True
        if criteria.kind == CriteriaKind.TOTAL:
            return min(context.totals.get(criteria.metric, 0) * step, 100.0), True

        evaluator = self._achievements.get(criteria.metric)
        achieved = evaluator(context) if evaluator else None
        if achieved is None:
            return 0.0, False
        return (100.0 if achieved else 0.0), True

    def evaluate(
        self,
        catalog: Iterable[Badge],
        earned_records: Iterable[UserBadge],
        context: ActivityContext,
    ) -> List[BadgeProgress]:
        """Progress for every catalog badge, in catalog order."""
        earned = {record.badge_id: record for record in earned_records}
        results = []
        for badge in catalog:
            record = earned.get(badge.id)
            if record is not None:
                results.append(BadgeProgress(badge=badge, progress=100.0, earned=True, earned_at=record.earned_at))
                continue
            progress, measured = self.criterion_progress(badge, context)
            results.append(BadgeProgress(badge=badge, progress=progress, earned=False, measured=measured))
        return results

    def filter_by_category(self, results: Iterable[BadgeProgress], category: Optional[BadgeCategory]) -> List[BadgeProgress]:
        if category is None:
            return list(results)
        return [item for item in results if item.badge.category == category]

    def total_points(self, results: Iterable[BadgeProgress]) -> float:
        """100 points per earned badge plus the partial progress of the rest."""
        return round(sum(100.0 if item.earned else item.progress for item in results), 1)

    def newly_earned(self, results: Iterable[BadgeProgress]) -> List[Badge]:
        """Unearned badges whose criteria are now fully met."""
        return [item.badge for item in results if not item.earned and item.measured and item.progress >= 100.0]

    def build_activity_context(
        self,
        food_logs: Iterable[FoodLog],
        profile: UserProfile,
        today: Optional[date] = None,
        recipes_tried: int = 0,
    ) -> ActivityContext:
        """Derive metric streaks and totals from the food-log history."""
        food_logs = list(food_logs)
        today = today or datetime.utcnow().date()
        targets = nutrition_calculator.daily_targets(profile)
        water_target = nutrition_calculator.daily_water_target_ml(profile.weight)

        by_day: Dict[date, List[FoodLog]] = defaultdict(list)
        for log in food_logs:
            by_day[log.for_date].append(log)

        qualifying: Dict[str, Set[date]] = defaultdict(set)
        qualifying["daily_logging"] = daily_aggregator.logged_dates(food_logs)
        for day, logs in by_day.items():
            totals = daily_aggregator.total(logs)
            meal_types = {log.meal_type for log in logs}
            if MAIN_MEALS <= meal_types:
                qualifying["complete_logging"].add(day)
            if daily_aggregator.water_intake_ml(logs, day) >= water_target:
                qualifying["water_goal"].add(day)
            if abs(totals.calories - targets.calories) <= CALORIE_ACCURACY_KCAL:
                qualifying["calorie_accuracy"].add(day)
            if totals.protein >= targets.protein:
                qualifying["protein_goal"].add(day)
            if any(log.meal_type == MealType.BREAKFAST and log.logged_at.time() < EARLY_BREAKFAST_CUTOFF for log in logs):
                qualifying["early_breakfast"].add(day)

        metrics = ("daily_logging", "complete_logging", "water_goal", "calorie_accuracy", "protein_goal", "early_breakfast")
        streaks = {metric: _streak(qualifying[metric], today) for metric in metrics}
        totals = {metric: len(qualifying[metric]) for metric in metrics}
        totals["vegetable_meals"] = sum(1 for log in food_logs if log.food.category == FoodCategory.VEGETABLES)
        totals["recipes_tried"] = recipes_tried

        context = ActivityContext(
            current_streak_days=streaks["daily_logging"],
            streaks=streaks,
            totals=totals,
            today=daily_aggregator.total(by_day.get(today, [])),
            targets=targets,
        )
        logger.debug("Activity context for %s: streak=%s totals=%s", profile.id, context.current_streak_days, totals)
        return context


# export a default instance
badge_engine = BadgeProgressEngine()
