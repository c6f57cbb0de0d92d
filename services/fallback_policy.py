"""Deterministic substitutes for unusable model output.

Only the meal plan has a structural fallback: an empty calendar is still a
coherent plan, whereas an empty recipe or chat answer is not.
"""

import uuid
from datetime import datetime, timedelta
from typing import Optional

from core.logger import get_logger
from schemas.meal_schema import MealPlan
from schemas.profile_schema import UserProfile
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.fallback_policy")

FALLBACK_PLAN_NAME = "Basic Healthy Plan (Fallback)"
# generic target, independent of the profile
GENERIC_DAILY_CALORIES = 2000


def default_meal_plan(profile: UserProfile, days: int = 7, now: Optional[datetime] = None) -> MealPlan:
    """Schema-valid plan with no meals and a generic 2000 kcal target."""
    start = now or datetime.utcnow()
    plan = MealPlan(
        id=f"fallback_plan_{uuid.uuid4().hex[:12]}",
        user_id=profile.id,
        name=FALLBACK_PLAN_NAME,
        start_date=start,
        end_date=start + timedelta(days=max(days - 1, 0)),
        meals=[],
        target_nutrition=nutrition_calculator.nutrition_targets(GENERIC_DAILY_CALORIES),
        created_at=start,
        is_fallback=True,
    )
    logger.info("Built fallback meal plan %s for user %s", plan.id, profile.id)
    return plan
