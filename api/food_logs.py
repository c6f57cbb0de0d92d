"""Food log API router.

Manual and AI-assisted food logging, plus the per-day summary that folds
the log into totals against the profile's targets.
"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from database.repositories import FoodLogRepository, ProfileRepository
from schemas.food_schema import (
    DailySummary,
    FoodAnalysisRequest,
    FoodAnalysisResponse,
    FoodLog,
    FoodLogCreateRequest,
)
from services.ai_orchestrator import AIOrchestrator, get_orchestrator
from services.daily_aggregator import daily_aggregator

logger = get_logger("api.food_logs")
router = APIRouter(prefix="/api", tags=["food-logs"])


@router.post("/profiles/{profile_id}/food-logs", response_model=FoodLog, status_code=201)
def create_food_log(profile_id: str, payload: FoodLogCreateRequest, db: Session = Depends(get_db_write)):
    """Log a food for the profile.

    The entry is attributed to `for_date` when given, otherwise to the day it
    is logged.

    Raises:
        NotFoundError: If the profile does not exist.
    """
    ProfileRepository(db).get(profile_id)
    now = datetime.utcnow()
    entry = FoodLog(
        user_id=profile_id,
        food=payload.food,
        quantity=payload.quantity,
        meal_type=payload.meal_type,
        logged_at=now,
        for_date=payload.for_date or now.date(),
    )
    entry = FoodLogRepository(db).create(entry)
    logger.info("Logged %s (%s) for %s on %s", entry.food.name, entry.meal_type.value, profile_id, entry.for_date)
    return entry


@router.post("/profiles/{profile_id}/food-logs/analyze", response_model=FoodAnalysisResponse)
async def analyze_food(
    profile_id: str,
    payload: FoodAnalysisRequest,
    db: Session = Depends(get_db_write),
    orchestrator: AIOrchestrator = Depends(get_orchestrator),
):
    """Estimate nutrition for a described food and optionally log it.

    When the estimate fails the analysis carries zero nutrition under the
    described name. With `meal_type` set the result is logged right away.

    Raises:
        NotFoundError: If the profile does not exist.
        ConfigurationError: If the completion service has no credential.
    """
    ProfileRepository(db).get(profile_id)
    analysis = await orchestrator.analyze_food(payload.description, is_image_derived=payload.is_image_derived)
    if payload.meal_type is None:
        return FoodAnalysisResponse(analysis=analysis)

    now = datetime.utcnow()
    entry = FoodLogRepository(db).create(FoodLog(
        user_id=profile_id,
        food=analysis.to_food(),
        quantity=payload.quantity,
        meal_type=payload.meal_type,
        logged_at=now,
        for_date=payload.for_date or now.date(),
    ))
    return FoodAnalysisResponse(analysis=analysis, food_log=entry)


@router.get("/profiles/{profile_id}/daily-summary", response_model=DailySummary)
def daily_summary(
    profile_id: str,
    for_date: Optional[date] = Query(None, description="Calendar day, defaults to today"),
    db: Session = Depends(get_db_read),
):
    """Totals and target progress for one day of the food log.

    Raises:
        NotFoundError: If the profile does not exist.
    """
    profile = ProfileRepository(db).get(profile_id)
    logs = FoodLogRepository(db).list_for_user(profile_id)
    return daily_aggregator.daily_summary(logs, for_date or datetime.utcnow().date(), profile)
