"""Schemas for the user profile and profile-related requests and responses."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ActivityLevel(str, Enum):
    """Five ordered activity tiers, least to most active."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class HealthGoal(str, Enum):
    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"


class UserProfile(BaseModel):
    """A user's body metrics and dietary context.

    Range checks live on the request schemas; the core accepts any values and
    only produces implausible results for implausible input.
    """

    id: str
    name: Optional[str] = None
    age: int
    weight: float = Field(..., description="Weight in kilograms")
    height: float = Field(..., description="Height in centimeters")
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    dietary_preferences: List[str] = Field(default_factory=list)
    health_goals: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class ProfileCreateRequest(BaseModel):
    """Request payload for creating a profile during onboarding."""

    name: Optional[str] = Field(None, examples=["Jane Doe"], description="Display name")
    age: int = Field(..., ge=13, le=100, examples=[30], description="Age in years (13-100)")
    weight: float = Field(..., ge=30, le=300, examples=[70.0], description="Weight in kilograms (30-300)")
    height: float = Field(..., ge=100, le=250, examples=[175.0], description="Height in centimeters (100-250)")
    activity_level: ActivityLevel = Field(..., examples=["moderate"], description="sedentary, light, moderate, active, very_active")
    dietary_preferences: List[str] = Field(default_factory=list, examples=[["vegetarian"]])
    health_goals: List[str] = Field(default_factory=list, examples=[["weight_loss"]], description="weight_loss, weight_gain, muscle_gain, maintenance")
    allergies: List[str] = Field(default_factory=list, examples=[["peanuts"]])


class ProfileUpdateRequest(BaseModel):
    """Partial update; only provided fields are changed."""

    name: Optional[str] = None
    age: Optional[int] = Field(None, ge=13, le=100)
    weight: Optional[float] = Field(None, ge=30, le=300)
    height: Optional[float] = Field(None, ge=100, le=250)
    activity_level: Optional[ActivityLevel] = None
    dietary_preferences: Optional[List[str]] = None
    health_goals: Optional[List[str]] = None
    allergies: Optional[List[str]] = None


class MacroTargets(BaseModel):
    protein: int
    carbs: int
    fat: int


class ProfileResponse(BaseModel):
    """Profile together with the metrics derived from it."""

    profile: UserProfile
    bmi: float
    bmi_category: str
    daily_calorie_target: int
    macro_targets: MacroTargets
    daily_water_target_ml: int
