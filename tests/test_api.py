"""End-to-end tests of the HTTP routes against the temporary SQLite store.

The orchestrator dependency is overridden with one driven by canned replies.
"""

import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from core.exceptions import TransportError
from main import app
from services.ai_orchestrator import COACH_APOLOGY, AIOrchestrator, get_orchestrator

PROFILE = {
    "name": "Jane",
    "age": 30,
    "weight": 70,
    "height": 175,
    "activity_level": "moderate",
    "dietary_preferences": ["vegetarian"],
    "health_goals": [],
    "allergies": ["peanuts"],
}

PLAN_REPLY = json.dumps({
    "name": "Veggie Days",
    "meals": [
        {"day": 1, "breakfast": {"name": "Oats", "totalNutrition": {"calories": 350}}},
        {"day": 2, "lunch": {"name": "Lentil soup", "totalNutrition": {"calories": 450}}},
    ],
})


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_replies(fake_client):
    """Route the orchestrator dependency to canned replies; returns the fake."""

    def _use(*replies):
        fake = fake_client(*replies)
        app.dependency_overrides[get_orchestrator] = lambda: AIOrchestrator(fake)
        return fake

    return _use


@pytest.fixture
def profile_id(client):
    response = client.post("/api/profiles", json=PROFILE)
    assert response.status_code == 201
    return response.json()["profile"]["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "database": "connected"}


def test_create_profile_returns_targets(client):
    response = client.post("/api/profiles", json=PROFILE)
    body = response.json()
    assert response.status_code == 201
    assert body["daily_calorie_target"] == 2556
    assert body["bmi"] == 22.9
    assert body["bmi_category"] == "Normal"
    assert body["macro_targets"] == {"protein": 160, "carbs": 288, "fat": 85}
    assert body["daily_water_target_ml"] == 2450
    assert body["profile"]["allergies"] == ["peanuts"]


def test_create_profile_rejects_out_of_range_age(client):
    response = client.post("/api/profiles", json={**PROFILE, "age": 8})
    assert response.status_code == 422
    assert response.json()["error"]["message"] == "Validation error"


def test_update_profile_changes_only_given_fields(client, profile_id):
    response = client.put(f"/api/profiles/{profile_id}", json={"health_goals": ["weight_loss"]})
    body = response.json()
    assert response.status_code == 200
    assert body["daily_calorie_target"] == 2056
    assert body["profile"]["weight"] == 70
    assert client.get(f"/api/profiles/{profile_id}").json()["profile"]["health_goals"] == ["weight_loss"]


def test_unknown_profile_is_404(client):
    response = client.get("/api/profiles/user_nope")
    assert response.status_code == 404
    assert response.json()["error"]["status_code"] == 404


def test_food_log_and_daily_summary(client, profile_id):
    day = "2026-02-14"
    food = {"name": "Greek yogurt", "nutrition": {"calories": 150, "protein": 15, "carbs": 8, "fat": 4}}
    assert client.post(
        f"/api/profiles/{profile_id}/food-logs",
        json={"food": food, "quantity": 2, "meal_type": "breakfast", "for_date": day},
    ).status_code == 201
    client.post(
        f"/api/profiles/{profile_id}/food-logs",
        json={"food": {"name": "Sparkling water", "category": "beverages"}, "meal_type": "snack", "for_date": day},
    )

    summary = client.get(f"/api/profiles/{profile_id}/daily-summary", params={"for_date": day}).json()
    assert summary["log_count"] == 2
    assert summary["totals"]["calories"] == 300
    assert summary["totals"]["protein"] == 30
    assert summary["water_ml"] == 250

    empty = client.get(f"/api/profiles/{profile_id}/daily-summary", params={"for_date": "2026-02-15"}).json()
    assert empty["log_count"] == 0


def test_analyze_and_log_food(client, profile_id, use_replies):
    use_replies(json.dumps({"foodName": "Banana", "estimatedCalories": 105, "nutrition": {"carbs": 27}}))
    response = client.post(
        f"/api/profiles/{profile_id}/food-logs/analyze",
        json={"description": "a banana", "meal_type": "snack"},
    )
    body = response.json()
    assert response.status_code == 200
    assert body["analysis"]["food_name"] == "Banana"
    assert body["food_log"]["food"]["nutrition"]["calories"] == 105
    assert body["food_log"]["for_date"] == datetime.utcnow().date().isoformat()


def test_analyze_failure_still_answers_with_placeholder(client, profile_id, use_replies):
    use_replies(TransportError("down"))
    body = client.post(f"/api/profiles/{profile_id}/food-logs/analyze", json={"description": "odd stew"}).json()
    assert body["analysis"]["food_name"] == "odd stew"
    assert body["analysis"]["estimated_calories"] == 0
    assert body["food_log"] is None


def test_meal_plan_is_generated_and_replaced(client, profile_id, use_replies):
    use_replies(PLAN_REPLY)
    first = client.post(f"/api/profiles/{profile_id}/meal-plans", json={"days": 2}).json()
    assert first["name"] == "Veggie Days"
    assert len(first["meals"]) == 2
    assert first["meals"][0]["total_nutrition"]["calories"] == 350

    use_replies(json.dumps({"name": "no meals here"}))
    second = client.post(f"/api/profiles/{profile_id}/meal-plans", json={"days": 3}).json()
    assert second["is_fallback"] is True
    assert second["meals"] == []

    current = client.get(f"/api/profiles/{profile_id}/meal-plans/current").json()
    assert current["id"] == second["id"]


def test_current_meal_plan_missing_is_404(client, profile_id):
    assert client.get(f"/api/profiles/{profile_id}/meal-plans/current").status_code == 404


def test_recipe_success_and_failure(client, profile_id, use_replies):
    use_replies(json.dumps({"name": "Bean Chili", "ingredients": ["beans"]}))
    response = client.post("/api/recipes", json={"ingredients": ["beans"], "servings": 2, "user_id": profile_id})
    assert response.status_code == 201
    assert response.json()["tags"] == []
    assert response.json()["servings"] == 2

    use_replies(TransportError("down"))
    failed = client.post("/api/recipes", json={"ingredients": ["beans"]})
    assert failed.status_code == 502
    assert failed.json()["error"]["status_code"] == 502


def test_coach_conversation_keeps_session(client, profile_id, use_replies):
    fake = use_replies("Try adding legumes.", TransportError("down"))
    first = client.post(f"/api/profiles/{profile_id}/coach", json={"message": "More protein?"}).json()
    assert first["reply"]["content"] == "Try adding legumes."
    assert first["reply"]["role"] == "assistant"

    second = client.post(
        f"/api/profiles/{profile_id}/coach",
        json={"message": "And snacks?", "session_id": first["session_id"]},
    )
    assert second.status_code == 200
    assert second.json()["session_id"] == first["session_id"]
    assert second.json()["reply"]["content"] == COACH_APOLOGY
    context = fake.calls[1]["messages"]
    assert {"role": "assistant", "content": "Try adding legumes."} in context


def test_coach_unknown_session_is_404(client, profile_id, use_replies):
    use_replies("hi")
    response = client.post(f"/api/profiles/{profile_id}/coach", json={"message": "Hi", "session_id": "chat_nope"})
    assert response.status_code == 404


def test_badges_progress_and_filter(client, profile_id):
    today = datetime.utcnow().date().isoformat()
    for meal_type in ("breakfast", "lunch", "dinner"):
        client.post(
            f"/api/profiles/{profile_id}/food-logs",
            json={"food": {"name": "Veg bowl", "category": "vegetables"}, "meal_type": meal_type, "for_date": today},
        )

    body = client.get(f"/api/profiles/{profile_id}/badges").json()
    assert len(body["badges"]) == 10
    by_id = {item["badge"]["id"]: item for item in body["badges"]}
    assert by_id["veggie_lover"]["progress"] == pytest.approx(20)
    assert by_id["goal_crusher"]["measured"] is False

    goals = client.get(f"/api/profiles/{profile_id}/badges", params={"category": "goals"}).json()
    assert {item["badge"]["category"] for item in goals["badges"]} == {"goals"}
