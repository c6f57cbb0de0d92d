"""Schemas for AI-generated recipes."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .nutrition_schema import NutritionInfo


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class RecipeIngredient(BaseModel):
    name: str
    amount: float = 0.0
    unit: str = ""
    optional: bool = False


class Recipe(BaseModel):
    """A recipe with per-serving nutrition."""

    id: str
    name: str
    description: str
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    preparation_time: int = Field(15, description="Minutes")
    cooking_time: int = Field(15, description="Minutes")
    servings: int = 4
    difficulty: Difficulty = Difficulty.MEDIUM
    nutrition: NutritionInfo = Field(default_factory=NutritionInfo.zero)
    tags: List[str] = Field(default_factory=list)


class RecipeRequest(BaseModel):
    """Payload for generating a recipe from available ingredients."""

    ingredients: List[str] = Field(..., min_length=1, examples=[["chicken", "rice", "broccoli"]])
    dietary_preferences: List[str] = Field(default_factory=list, examples=[["gluten_free"]])
    servings: int = Field(4, ge=1, le=12, examples=[4])
    user_id: Optional[str] = Field(None, description="Profile that requested the recipe, if any")
