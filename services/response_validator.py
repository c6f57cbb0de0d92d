"""Validation of free-form model replies into typed domain objects.

Replies must be a JSON object. Structural problems (not JSON, not an object,
no `meals` array for a plan) raise `ParseError`; missing or malformed fields
inside an otherwise usable reply are filled with typed defaults instead.
"""

import json
import math
import re
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from core.exceptions import ParseError
from core.logger import get_logger
from schemas.food_schema import FoodAnalysis, FoodAnalysisNutrition, MealType
from schemas.meal_schema import DailyMeals, Meal, MealPlan
from schemas.nutrition_schema import NutritionInfo
from schemas.profile_schema import UserProfile
from schemas.recipe_schema import Difficulty, Recipe, RecipeIngredient
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.response_validator")

_FENCE_RE = re.compile(r"^\s*```(?:json|JSON)?\s*(.*?)\s*```\s*$", re.DOTALL)
_LEADING_NUMBER_RE = re.compile(r"^\s*(-?(?:\d+(?:\.\d*)?|\.\d+))")
_THOUSANDS_SEP_RE = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")

NUTRITION_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")
MAIN_SLOTS = ("breakfast", "lunch", "dinner")

DEFAULT_PLAN_NAME = "AI Generated Plan"
DEFAULT_RECIPE_NAME = "Unknown Recipe"
DEFAULT_RECIPE_DESCRIPTION = "No description provided."
DEFAULT_SERVING_SIZE = "1 serving"


def _load_object(raw_text: str, schema: str) -> Dict[str, Any]:
    """Decode `raw_text` into a dict, tolerating a surrounding code fence."""
    if raw_text is None:
        raise ParseError("Empty model reply", schema=schema)
    text = raw_text.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Model reply is not valid JSON: {exc}", schema=schema) from exc
    if not isinstance(data, dict):
        raise ParseError("Model reply is not a JSON object", schema=schema)
    return data


def _number(value: Any, default: float = 0.0) -> float:
    """Coerce numbers and numeric strings ("25", "25g", "1,200 kcal", ".5").

    Anything else, including NaN and infinities, is `default`.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(_THOUSANDS_SEP_RE.sub("", value))
        if not match:
            return default
        number = float(match.group(1))
    else:
        return default
    if not math.isfinite(number):
        return default
    return number


def _non_negative(value: Any, default: float = 0.0) -> float:
    return max(0.0, _number(value, default))


def _int(value: Any, default: int) -> int:
    number = _number(value, float(default))
    return int(round(number)) if number > 0 else default


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return False


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def parse_nutrition(value: Any) -> NutritionInfo:
    """Nutrition block with every missing or malformed field set to 0."""
    if not isinstance(value, dict):
        return NutritionInfo.zero()
    return NutritionInfo(**{key: _non_negative(value.get(key)) for key in NUTRITION_FIELDS})


def _parse_meal(value: Any, slot_type: MealType, meal_id: str) -> Optional[Meal]:
    if isinstance(value, str) and value.strip():
        return Meal(id=meal_id, name=value.strip(), meal_type=slot_type)
    if not isinstance(value, dict):
        return None
    try:
        meal_type = MealType(str(value.get("type", slot_type.value)).lower())
    except ValueError:
        meal_type = slot_type
    nutrition = value.get("totalNutrition", value.get("nutrition"))
    return Meal(
        id=meal_id,
        name=_text(value.get("name"), slot_type.value.capitalize()),
        meal_type=meal_type,
        nutrition=parse_nutrition(nutrition),
        preparation_time=_int(value.get("preparationTime"), 0),
        instructions=_string_list(value.get("instructions")),
    )


def _parse_day(value: Any, index: int, day_date, plan_id: str) -> DailyMeals:
    day = value if isinstance(value, dict) else {}
    prefix = f"{plan_id}_d{index + 1}"
    slots = {
        slot: _parse_meal(day.get(slot), MealType(slot), f"{prefix}_{slot}")
        for slot in MAIN_SLOTS
    }
    raw_snacks = day.get("snacks")
    if isinstance(raw_snacks, dict):
        raw_snacks = [raw_snacks]
    snacks = []
    for position, raw in enumerate(raw_snacks if isinstance(raw_snacks, list) else []):
        snack = _parse_meal(raw, MealType.SNACK, f"{prefix}_snack{position}")
        if snack is not None:
            snacks.append(snack)
    return DailyMeals(day=index + 1, date=day_date, snacks=snacks, **slots)


def parse_meal_plan(
    raw_text: str,
    profile: UserProfile,
    days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> MealPlan:
    """Build a `MealPlan` from a model reply.

    When `days` is given the calendar is cut or padded with empty days to
    exactly that length.

    Raises:
        ParseError: If the reply is not a JSON object or has no `meals` array.
    """
    data = _load_object(raw_text, schema="meal_plan")
    raw_days = data.get("meals")
    if not isinstance(raw_days, list):
        raise ParseError("Meal plan reply has no 'meals' array", schema="meal_plan")
    if days is not None and len(raw_days) != days:
        logger.warning("Meal plan reply has %s days, expected %s", len(raw_days), days)
        raw_days = (raw_days + [{}] * days)[:days]

    start = now or datetime.utcnow()
    plan_id = f"plan_{uuid.uuid4().hex[:12]}"
    meals = [
        _parse_day(day, index, (start + timedelta(days=index)).date(), plan_id)
        for index, day in enumerate(raw_days)
    ]

    target = data.get("targetNutrition")
    if isinstance(target, dict):
        target_nutrition = parse_nutrition(target)
    else:
        target_nutrition = nutrition_calculator.daily_targets(profile)

    plan = MealPlan(
        id=plan_id,
        user_id=profile.id,
        name=_text(data.get("name"), DEFAULT_PLAN_NAME),
        start_date=start,
        end_date=start + timedelta(days=max(len(meals) - 1, 0)),
        meals=meals,
        target_nutrition=target_nutrition,
        created_at=start,
    )
    logger.info("Parsed meal plan %s with %s days for user %s", plan.id, len(meals), profile.id)
    return plan


def _parse_ingredient(value: Any) -> Optional[RecipeIngredient]:
    if isinstance(value, str):
        return RecipeIngredient(name=value.strip()) if value.strip() else None
    if not isinstance(value, dict):
        return None
    name = _text(value.get("name"), "")
    if not name:
        return None
    return RecipeIngredient(
        name=name,
        amount=_non_negative(value.get("amount")),
        unit=_text(value.get("unit"), ""),
        optional=_flag(value.get("optional")),
    )


def parse_recipe(raw_text: str, servings: int = 4) -> Recipe:
    """Build a `Recipe` from a model reply.

    Raises:
        ParseError: If the reply is not a JSON object.
    """
    data = _load_object(raw_text, schema="recipe")

    raw_ingredients = data.get("ingredients")
    ingredients = [
        ingredient
        for ingredient in (_parse_ingredient(item) for item in (raw_ingredients if isinstance(raw_ingredients, list) else []))
        if ingredient is not None
    ]

    try:
        difficulty = Difficulty(str(data.get("difficulty", "")).strip().lower())
    except ValueError:
        difficulty = Difficulty.MEDIUM

    recipe = Recipe(
        id=f"recipe_{uuid.uuid4().hex[:12]}",
        name=_text(data.get("name"), DEFAULT_RECIPE_NAME),
        description=_text(data.get("description"), DEFAULT_RECIPE_DESCRIPTION),
        ingredients=ingredients,
        instructions=_string_list(data.get("instructions")),
        preparation_time=_int(data.get("preparationTime"), 15),
        cooking_time=_int(data.get("cookingTime"), 15),
        servings=_int(data.get("servings"), servings),
        difficulty=difficulty,
        nutrition=parse_nutrition(data.get("nutrition")),
        tags=_string_list(data.get("tags")),
    )
    logger.info("Parsed recipe %s (%s ingredients)", recipe.name, len(recipe.ingredients))
    return recipe


def zero_food_analysis(food_name: str) -> FoodAnalysis:
    """Placeholder analysis: the given name with zero nutrition."""
    return FoodAnalysis(food_name=food_name, serving_size=DEFAULT_SERVING_SIZE)


def parse_food_analysis(raw_text: str, fallback_name: str) -> FoodAnalysis:
    """Build a `FoodAnalysis` from a model reply.

    Never raises: an unusable reply yields `zero_food_analysis(fallback_name)`
    so that logging is never blocked by a bad estimate.
    """
    try:
        data = _load_object(raw_text, schema="food_analysis")
    except ParseError as exc:
        logger.warning("Food analysis reply unusable, logging placeholder for %r: %s", fallback_name, exc.message)
        return zero_food_analysis(fallback_name)

    nutrition = data.get("nutrition")
    nutrition = nutrition if isinstance(nutrition, dict) else {}
    return FoodAnalysis(
        food_name=_text(data.get("foodName"), fallback_name),
        estimated_calories=_non_negative(data.get("estimatedCalories")),
        nutrition=FoodAnalysisNutrition(
            protein=_non_negative(nutrition.get("protein")),
            carbs=_non_negative(nutrition.get("carbs")),
            fat=_non_negative(nutrition.get("fat")),
            fiber=_non_negative(nutrition.get("fiber")),
        ),
        serving_size=_text(data.get("servingSize"), DEFAULT_SERVING_SIZE),
    )
