"""Schemas for meals, daily meal slots and multi-day meal plans."""

import datetime as dt
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from .food_schema import Food, MealType
from .nutrition_schema import NutritionInfo, sum_nutrition


class Meal(BaseModel):
    """A single meal; `foods` is usually empty when the meal came from the model."""

    id: Optional[str] = None
    name: str
    meal_type: MealType
    foods: List[Food] = Field(default_factory=list)
    nutrition: NutritionInfo = Field(default_factory=NutritionInfo.zero)
    preparation_time: int = Field(0, ge=0, description="Minutes")
    instructions: List[str] = Field(default_factory=list)


class DailyMeals(BaseModel):
    """Meals for one day of a plan. Any of the main slots may be empty."""

    day: int = Field(..., ge=1, description="1-based day index within the plan")
    date: dt.date
    breakfast: Optional[Meal] = None
    lunch: Optional[Meal] = None
    dinner: Optional[Meal] = None
    snacks: List[Meal] = Field(default_factory=list)

    def all_meals(self) -> List[Meal]:
        main = [m for m in (self.breakfast, self.lunch, self.dinner) if m is not None]
        return main + list(self.snacks)

    @computed_field
    @property
    def total_nutrition(self) -> NutritionInfo:
        return sum_nutrition(m.nutrition for m in self.all_meals())


class MealPlan(BaseModel):
    """A generated plan. `meals` may be empty for the degraded fallback plan."""

    id: str
    user_id: str
    name: str
    start_date: datetime
    end_date: datetime
    meals: List[DailyMeals] = Field(default_factory=list)
    target_nutrition: NutritionInfo
    created_at: datetime = Field(default_factory=datetime.utcnow)
    is_fallback: bool = False

    @computed_field
    @property
    def total_nutrition(self) -> NutritionInfo:
        return sum_nutrition(day.total_nutrition for day in self.meals)


class MealPlanRequest(BaseModel):
    """Payload for generating a new meal plan."""

    days: int = Field(7, ge=1, le=14, examples=[7], description="Plan duration in days")
    extra_preferences: List[str] = Field(default_factory=list, examples=[["quick breakfasts"]])
