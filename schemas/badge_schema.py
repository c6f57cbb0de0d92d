"""Schemas for the badge catalog, earned badges and badge progress."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .nutrition_schema import NutritionInfo


class BadgeCategory(str, Enum):
    NUTRITION = "nutrition"
    HYDRATION = "hydration"
    CONSISTENCY = "consistency"
    GOALS = "goals"


class CriteriaKind(str, Enum):
    STREAK = "streak"
    TOTAL = "total"
    ACHIEVEMENT = "achievement"


class BadgeCriteria(BaseModel):
    kind: CriteriaKind
    target: int = Field(..., gt=0)
    metric: str


class Badge(BaseModel):
    """A static catalog entry; never mutated."""

    model_config = {"frozen": True}

    id: str
    name: str
    description: str
    icon: str
    category: BadgeCategory
    criteria: BadgeCriteria


class UserBadge(BaseModel):
    """Join record: a user earned a badge at a given time."""

    badge_id: str
    earned_at: datetime


class ActivityContext(BaseModel):
    """Historical activity the badge criteria are evaluated against.

    `streaks` and `totals` are keyed by criteria metric. `current_streak_days`
    is the generic logging streak used for streak metrics without their own
    entry.
    """

    current_streak_days: int = 0
    streaks: Dict[str, int] = Field(default_factory=dict)
    totals: Dict[str, int] = Field(default_factory=dict)
    today: NutritionInfo = Field(default_factory=NutritionInfo.zero)
    targets: Optional[NutritionInfo] = None


class BadgeProgress(BaseModel):
    badge: Badge
    progress: float = Field(..., ge=0, le=100)
    earned: bool
    earned_at: Optional[datetime] = None
    measured: bool = True


class BadgeListResponse(BaseModel):
    badges: List[BadgeProgress]
    earned_count: int
    total_points: float
