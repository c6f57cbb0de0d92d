"""Prompt construction for the completion service.

Every builder is a pure string function: identical input gives identical
output and nothing here performs I/O. Structured prompts end with the JSON
shape the response validator expects.
"""

from typing import Iterable, Optional

from schemas.profile_schema import UserProfile

MEAL_PLAN_SYSTEM_PROMPT = (
    "You are a professional nutritionist and meal planning expert. Generate detailed, "
    "healthy meal plans with accurate nutritional information. You MUST return valid JSON "
    "only, no markdown formatting."
)

RECIPE_SYSTEM_PROMPT = (
    "You are a creative chef and nutritionist. Create healthy, delicious recipes using "
    "available ingredients with accurate nutritional information and clear instructions. "
    "You MUST return valid JSON only, no markdown formatting."
)

FOOD_ANALYSIS_SYSTEM_PROMPT = (
    "You are a nutrition expert. Analyze food items and provide accurate nutritional "
    "information. You MUST return valid JSON only, no markdown formatting."
)

COACH_BASE_PROMPT = (
    "You are a friendly, knowledgeable AI nutrition coach. Provide helpful, evidence-based "
    "advice about healthy eating, nutrition, and wellness. Keep responses concise but "
    "informative. Always be encouraging and supportive."
)

NO_PROSE_RULE = (
    "Respond with the JSON object only. Do not wrap it in markdown, code fences or any "
    "explanatory text."
)

MEAL_SCHEMA = (
    '{ "name": "Meal Name", "type": "breakfast|lunch|dinner|snack", '
    '"preparationTime": 15, "instructions": ["step 1"], '
    '"totalNutrition": { "calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0 } }'
)

MEAL_PLAN_SCHEMA = """{
  "name": "Plan Name",
  "targetNutrition": { "calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0, "sugar": 0, "sodium": 0 },
  "meals": [
    {
      "day": 1,
      "breakfast": %(meal)s,
      "lunch": %(meal)s,
      "dinner": %(meal)s,
      "snacks": [ %(meal)s ]
    }
  ]
}""" % {"meal": MEAL_SCHEMA}

FOOD_ANALYSIS_SCHEMA = (
    '{ "foodName": "", "estimatedCalories": 0, '
    '"nutrition": { "protein": 0, "carbs": 0, "fat": 0, "fiber": 0 }, "servingSize": "" }'
)

UNITS_RULE = (
    "Units: calories in kcal; protein, carbs, fat, fiber and sugar in grams; sodium in "
    "milligrams; times in minutes. All nutrition values must be plain numbers without units."
)


def _join(values: Optional[Iterable[str]], empty: str = "None specified") -> str:
    items = [str(v) for v in (values or []) if str(v).strip()]
    return ", ".join(items) if items else empty


def build_meal_plan_prompt(profile: UserProfile, days: int, extra_preferences: Optional[Iterable[str]] = None) -> str:
    """Instruction for a `days`-long plan tailored to `profile`."""
    lines = [
        f"Create a {days}-day meal plan for a user with the following profile:",
        f"- Age: {profile.age}, Weight: {profile.weight}kg, Height: {profile.height}cm",
        f"- Activity Level: {profile.activity_level.value}",
        f"- Dietary Preferences: {_join(profile.dietary_preferences)}",
        f"- Health Goals: {_join(profile.health_goals)}",
        f"- Allergies (never include): {_join(profile.allergies, 'None')}",
    ]
    extra = _join(extra_preferences, "")
    if extra:
        lines.append(f"- Additional Preferences: {extra}")
    lines += [
        "",
        "Include breakfast, lunch, dinner, and 1-2 snacks per day.",
        f'The "meals" array MUST contain exactly {days} entries, one per day, with "day" numbered from 1.',
        "",
        "The output MUST be a valid JSON object with the following structure:",
        MEAL_PLAN_SCHEMA,
        "",
        UNITS_RULE,
        NO_PROSE_RULE,
    ]
    return "\n".join(lines)


def build_recipe_prompt(ingredients: Iterable[str], dietary_preferences: Optional[Iterable[str]] = None, servings: int = 4) -> str:
    """Instruction for one recipe built around the available ingredients."""
    schema = """{
  "name": "Recipe Name",
  "description": "Short description",
  "ingredients": [ { "name": "", "amount": 0, "unit": "", "optional": false } ],
  "instructions": [ "Step 1", "Step 2" ],
  "preparationTime": 0,
  "cookingTime": 0,
  "servings": %d,
  "difficulty": "easy|medium|hard",
  "nutrition": { "calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0, "sugar": 0, "sodium": 0 },
  "tags": [ "healthy", "dinner", "quick" ]
}""" % servings
    lines = [
        f"Create a healthy recipe using these ingredients: {_join(ingredients)}",
        "",
        "Requirements:",
        f"- Serves {servings} people",
        f"- Dietary preferences: {_join(dietary_preferences)}",
        "- Nutrition values are per serving",
        "",
        "The output MUST be a valid JSON object with the following structure:",
        schema,
        "",
        UNITS_RULE,
        NO_PROSE_RULE,
    ]
    return "\n".join(lines)


def build_food_analysis_prompt(description: str, is_image_derived: bool = False) -> str:
    """Instruction to estimate nutrition for a described (or photographed) food."""
    if is_image_derived:
        intro = f'Analyze this food image description and provide nutritional information: "{description}"'
    else:
        intro = f'Analyze this food item and provide nutritional information: "{description}"'
    return "\n".join([
        intro,
        "",
        "Return as JSON:",
        FOOD_ANALYSIS_SCHEMA,
        "",
        UNITS_RULE,
        NO_PROSE_RULE,
    ])


def build_coach_system_prompt(profile: Optional[UserProfile] = None) -> str:
    """Coach persona, personalised with the user's context when known."""
    if profile is None:
        return COACH_BASE_PROMPT
    return "\n".join([
        COACH_BASE_PROMPT,
        "",
        "User context:",
        f"- Dietary preferences: {_join(profile.dietary_preferences, 'None')}",
        f"- Health goals: {_join(profile.health_goals, 'None')}",
        f"- Allergies: {_join(profile.allergies, 'None')}",
        "",
        "Tailor your advice to their specific needs and restrictions.",
    ])
