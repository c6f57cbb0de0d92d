"""Meal plan API router.

Generates a multi-day plan for the profile and keeps it as the user's
current plan; a newer plan replaces the older one.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from database.repositories import MealPlanRepository, ProfileRepository
from schemas.meal_schema import MealPlan, MealPlanRequest
from services.ai_orchestrator import AIOrchestrator, get_orchestrator

logger = get_logger("api.meal_plans")
router = APIRouter(prefix="/api", tags=["meal-plans"])


@router.post("/profiles/{profile_id}/meal-plans", response_model=MealPlan, status_code=201)
async def create_meal_plan(
    profile_id: str,
    payload: MealPlanRequest,
    db: Session = Depends(get_db_write),
    orchestrator: AIOrchestrator = Depends(get_orchestrator),
):
    """Generate and store a meal plan.

    A failed generation still answers 201 with the fallback plan, marked
    with `is_fallback`.

    Raises:
        NotFoundError: If the profile does not exist.
        ConfigurationError: If the completion service has no credential.
    """
    profile = ProfileRepository(db).get(profile_id)
    plan = await orchestrator.generate_meal_plan(profile, days=payload.days, extra_preferences=payload.extra_preferences)
    plan = MealPlanRepository(db).replace(plan)
    logger.info("Stored %s-day plan %s for %s (fallback=%s)", len(plan.meals), plan.id, profile_id, plan.is_fallback)
    return plan


@router.get("/profiles/{profile_id}/meal-plans/current", response_model=MealPlan)
def current_meal_plan(profile_id: str, db: Session = Depends(get_db_read)):
    """Return the user's current plan.

    Raises:
        NotFoundError: If the profile or its plan does not exist.
    """
    ProfileRepository(db).get(profile_id)
    plan = MealPlanRepository(db).current(profile_id)
    if plan is None:
        raise NotFoundError("MealPlan", profile_id)
    return plan
