"""Pydantic schema package: domain model plus request and response models."""

from .nutrition_schema import NutritionInfo, sum_nutrition
from .profile_schema import ActivityLevel, HealthGoal, UserProfile
from .food_schema import Food, FoodCategory, FoodLog, FoodAnalysis, MealType, DailySummary
from .meal_schema import Meal, DailyMeals, MealPlan
from .recipe_schema import Recipe, RecipeIngredient, Difficulty
from .badge_schema import Badge, BadgeCategory, BadgeCriteria, CriteriaKind, UserBadge, ActivityContext, BadgeProgress
from .chat_schema import ChatMessage, ChatRole, ChatSession

__all__ = [
    "NutritionInfo",
    "sum_nutrition",
    "ActivityLevel",
    "HealthGoal",
    "UserProfile",
    "Food",
    "FoodCategory",
    "FoodLog",
    "FoodAnalysis",
    "MealType",
    "DailySummary",
    "Meal",
    "DailyMeals",
    "MealPlan",
    "Recipe",
    "RecipeIngredient",
    "Difficulty",
    "Badge",
    "BadgeCategory",
    "BadgeCriteria",
    "CriteriaKind",
    "UserBadge",
    "ActivityContext",
    "BadgeProgress",
    "ChatMessage",
    "ChatRole",
    "ChatSession",
]
