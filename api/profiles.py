"""Profile API router.

Creates, updates and reads the user profile together with the metrics
derived from it (BMI, calorie, macro and water targets).
"""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from database.repositories import ProfileRepository
from schemas.profile_schema import (
    MacroTargets,
    ProfileCreateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserProfile,
)
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("api.profiles")
router = APIRouter(prefix="/api", tags=["profiles"])


def profile_response(profile: UserProfile) -> ProfileResponse:
    """Attach the derived metrics to a profile."""
    bmi = nutrition_calculator.bmi(profile.weight, profile.height)
    calories = nutrition_calculator.daily_calorie_target(profile)
    return ProfileResponse(
        profile=profile,
        bmi=round(bmi, 1),
        bmi_category=nutrition_calculator.bmi_category(bmi).value,
        daily_calorie_target=calories,
        macro_targets=MacroTargets(**nutrition_calculator.macro_targets(calories, profile.health_goals)),
        daily_water_target_ml=nutrition_calculator.daily_water_target_ml(profile.weight),
    )


@router.post("/profiles", response_model=ProfileResponse, status_code=201)
def create_profile(payload: ProfileCreateRequest, db: Session = Depends(get_db_write)):
    """Create a profile from the onboarding answers.

    Args:
        payload: `ProfileCreateRequest` with body metrics and preferences.
        db: SQLAlchemy session (write) injected by dependency.

    Returns:
        `ProfileResponse` with the stored profile and its targets.
    """
    now = datetime.utcnow()
    profile = UserProfile(
        id=f"user_{uuid.uuid4().hex[:12]}",
        created_at=now,
        updated_at=now,
        **payload.model_dump(),
    )
    profile = ProfileRepository(db).create(profile)
    return profile_response(profile)


@router.put("/profiles/{profile_id}", response_model=ProfileResponse)
def update_profile(profile_id: str, payload: ProfileUpdateRequest, db: Session = Depends(get_db_write)):
    """Apply a partial update; omitted fields keep their stored values.

    Raises:
        NotFoundError: If the profile does not exist.
    """
    repo = ProfileRepository(db)
    current = repo.get(profile_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    updated = current.model_copy(update={**changes, "updated_at": datetime.utcnow()})
    logger.info("Updating profile %s fields %s", profile_id, sorted(changes))
    return profile_response(repo.update(updated))


@router.get("/profiles/{profile_id}", response_model=ProfileResponse)
def get_profile(profile_id: str, db: Session = Depends(get_db_read)):
    """Return a profile with its derived targets.

    Raises:
        NotFoundError: If the profile does not exist.
    """
    return profile_response(ProfileRepository(db).get(profile_id))
