"""Badge API router.

Progress is computed on every read from the food log; badges whose
criteria are fully met are recorded as earned before the response is built.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_write
from database.repositories import FoodLogRepository, ProfileRepository, RecipeRepository, UserBadgeRepository
from schemas.badge_schema import BadgeCategory, BadgeListResponse
from services.badge_engine import badge_engine

logger = get_logger("api.badges")
router = APIRouter(prefix="/api", tags=["badges"])


@router.get("/profiles/{profile_id}/badges", response_model=BadgeListResponse)
def list_badges(
    profile_id: str,
    category: Optional[BadgeCategory] = Query(None, description="Only badges of this category"),
    db: Session = Depends(get_db_write),
):
    """Return progress for every catalog badge, earned ones pinned at 100.

    Raises:
        NotFoundError: If the profile does not exist.
    """
    profile = ProfileRepository(db).get(profile_id)
    badges = UserBadgeRepository(db)
    context = badge_engine.build_activity_context(
        FoodLogRepository(db).list_for_user(profile_id),
        profile,
        recipes_tried=RecipeRepository(db).count_for_user(profile_id),
    )
    catalog = badge_engine.catalog()
    results = badge_engine.evaluate(catalog, badges.earned(profile_id), context)

    newly = badge_engine.newly_earned(results)
    if newly:
        badges.award(profile_id, [badge.id for badge in newly])
        results = badge_engine.evaluate(catalog, badges.earned(profile_id), context)

    results = badge_engine.filter_by_category(results, category)
    return BadgeListResponse(
        badges=results,
        earned_count=sum(1 for item in results if item.earned),
        total_points=badge_engine.total_points(results),
    )
