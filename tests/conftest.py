"""Shared pytest fixtures.

The store is pointed at a throwaway SQLite file before any application
module is imported, since the engines are created at import time.
"""

import os
import tempfile
from datetime import date, datetime

_DB_DIR = tempfile.mkdtemp(prefix="nutrition-tests-")
_DB_URL = "sqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["WRITE_DATABASE_URL"] = _DB_URL
os.environ["READ_DATABASE_URL"] = _DB_URL
os.environ["OPENAI_API_KEY"] = ""

import pytest  # noqa: E402

from core.exceptions import TransportError  # noqa: E402
from schemas.food_schema import Food, FoodCategory, FoodLog, MealType  # noqa: E402
from schemas.nutrition_schema import NutritionInfo  # noqa: E402
from schemas.profile_schema import ActivityLevel, UserProfile  # noqa: E402


class FakeCompletionClient:
    """Completion collaborator returning canned replies in order.

    A reply that is an exception instance is raised instead of returned.
    Every call is recorded in `calls`.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def complete(self, messages, temperature=0.7, max_tokens=None, json_mode=False):
        self.calls.append({
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
        })
        if not self.replies:
            raise TransportError("no canned reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_client():
    return FakeCompletionClient


@pytest.fixture
def profile():
    return UserProfile(
        id="user_test",
        name="Test User",
        age=30,
        weight=70.0,
        height=175.0,
        activity_level=ActivityLevel.MODERATE,
        dietary_preferences=["vegetarian"],
        health_goals=[],
        allergies=["peanuts"],
    )


@pytest.fixture
def make_log():
    """Factory for food-log entries on a given day."""

    def _make(
        day: date,
        meal_type: MealType = MealType.LUNCH,
        calories: float = 500.0,
        protein: float = 30.0,
        carbs: float = 50.0,
        fat: float = 15.0,
        quantity: float = 1.0,
        name: str = "Test food",
        category: FoodCategory = FoodCategory.OTHER,
        volume_ml=None,
        at_hour: int = 12,
        user_id: str = "user_test",
    ) -> FoodLog:
        return FoodLog(
            user_id=user_id,
            food=Food(
                name=name,
                nutrition=NutritionInfo(calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=2.0),
                category=category,
                volume_ml=volume_ml,
            ),
            quantity=quantity,
            meal_type=meal_type,
            logged_at=datetime.combine(day, datetime.min.time()).replace(hour=at_hour),
            for_date=day,
        )

    return _make
