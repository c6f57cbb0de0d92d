"""Schemas for foods, food-log entries, AI food analysis and daily summaries."""

import re
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .nutrition_schema import NutritionInfo

BEVERAGE_PATTERN = re.compile(r"\b(?:water|teas?|coffees?|juices?|sodas?|bev|beverages?|drinks?|milk|smoothies?)\b")


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class FoodCategory(str, Enum):
    BEVERAGES = "beverages"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    PROTEIN = "protein"
    GRAINS = "grains"
    DAIRY = "dairy"
    SNACKS = "snacks"
    OTHER = "other"


def infer_food_category(name: str) -> FoodCategory:
    """Classify a free-text food name as a beverage or 'other'."""
    if BEVERAGE_PATTERN.search((name or "").lower()):
        return FoodCategory.BEVERAGES
    return FoodCategory.OTHER


class Food(BaseModel):
    """A food item with its per-serving nutrition."""

    name: str = Field(..., min_length=1, examples=["Greek yogurt"])
    nutrition: NutritionInfo = Field(default_factory=NutritionInfo)
    serving_size: str = Field("1 serving", examples=["1 cup"])
    serving_weight: float = Field(100.0, ge=0, description="Serving weight in grams")
    category: FoodCategory = FoodCategory.OTHER
    volume_ml: Optional[float] = Field(None, ge=0, description="Explicit serving volume for beverages")


class FoodLog(BaseModel):
    """An immutable record of food eaten, attributed to a calendar day."""

    id: Optional[int] = None
    user_id: str
    food: Food
    quantity: float = Field(1.0, gt=0, description="Serving multiplier")
    meal_type: MealType
    logged_at: datetime = Field(default_factory=datetime.utcnow)
    for_date: date

    @property
    def effective_nutrition(self) -> NutritionInfo:
        return self.food.nutrition.scaled(self.quantity)


class FoodAnalysisNutrition(BaseModel):
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


class FoodAnalysis(BaseModel):
    """Model estimate of a described or photographed food."""

    food_name: str
    estimated_calories: float = 0.0
    nutrition: FoodAnalysisNutrition = Field(default_factory=FoodAnalysisNutrition)
    serving_size: str = "1 serving"

    def to_food(self) -> Food:
        """Turn the estimate into a loggable `Food`."""
        return Food(
            name=self.food_name,
            nutrition=NutritionInfo(
                calories=self.estimated_calories,
                protein=self.nutrition.protein,
                carbs=self.nutrition.carbs,
                fat=self.nutrition.fat,
                fiber=self.nutrition.fiber,
                sugar=0.0,
                sodium=0.0,
            ),
            serving_size=self.serving_size,
            category=infer_food_category(self.food_name),
        )


class FoodLogCreateRequest(BaseModel):
    """Payload for logging a food manually."""

    food: Food
    quantity: float = Field(1.0, gt=0, examples=[1.5])
    meal_type: MealType = Field(..., examples=["lunch"])
    for_date: Optional[date] = Field(None, description="Defaults to the day the entry is logged")


class FoodAnalysisRequest(BaseModel):
    """Payload for AI-assisted logging from a description."""

    description: str = Field(..., min_length=1, examples=["a bowl of oatmeal with banana"])
    is_image_derived: bool = Field(False, description="True when the description came from a photo")
    meal_type: Optional[MealType] = Field(None, description="When set, the analysis is logged immediately")
    quantity: float = Field(1.0, gt=0)
    for_date: Optional[date] = None


class FoodAnalysisResponse(BaseModel):
    analysis: FoodAnalysis
    food_log: Optional[FoodLog] = None


class DailyProgress(BaseModel):
    """Percentage of each daily target reached (uncapped)."""

    calories: float
    protein: float
    carbs: float
    fat: float
    water: float


class DailySummary(BaseModel):
    """Aggregated intake for one calendar day compared against targets."""

    for_date: date
    log_count: int
    totals: NutritionInfo
    water_ml: int
    targets: NutritionInfo
    water_target_ml: int
    progress: DailyProgress
