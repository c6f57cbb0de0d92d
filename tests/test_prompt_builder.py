"""Tests for prompt construction."""

from services import prompt_builder


def test_meal_plan_prompt_carries_profile_and_day_count(profile):
    prompt = prompt_builder.build_meal_plan_prompt(profile, 3, ["quick breakfasts"])
    assert "Create a 3-day meal plan" in prompt
    assert "exactly 3 entries" in prompt
    assert "Age: 30" in prompt
    assert "moderate" in prompt
    assert "vegetarian" in prompt
    assert "peanuts" in prompt
    assert "quick breakfasts" in prompt
    assert prompt_builder.NO_PROSE_RULE in prompt


def test_meal_plan_prompt_without_preferences(profile):
    bare = profile.model_copy(update={"dietary_preferences": [], "allergies": []})
    prompt = prompt_builder.build_meal_plan_prompt(bare, 7)
    assert "Dietary Preferences: None specified" in prompt
    assert "Additional Preferences" not in prompt


def test_recipe_prompt_lists_ingredients_and_servings():
    prompt = prompt_builder.build_recipe_prompt(["chicken", "rice"], ["gluten_free"], servings=2)
    assert "chicken, rice" in prompt
    assert "Serves 2 people" in prompt
    assert '"servings": 2' in prompt
    assert "gluten_free" in prompt


def test_food_analysis_prompt_mentions_image_source():
    text_prompt = prompt_builder.build_food_analysis_prompt("an apple")
    image_prompt = prompt_builder.build_food_analysis_prompt("an apple", is_image_derived=True)
    assert '"an apple"' in text_prompt
    assert "image description" in image_prompt
    assert "image description" not in text_prompt


def test_coach_prompt_personalised_only_with_profile(profile):
    assert prompt_builder.build_coach_system_prompt() == prompt_builder.COACH_BASE_PROMPT
    personal = prompt_builder.build_coach_system_prompt(profile)
    assert personal.startswith(prompt_builder.COACH_BASE_PROMPT)
    assert "User context:" in personal
    assert "Allergies: peanuts" in personal
