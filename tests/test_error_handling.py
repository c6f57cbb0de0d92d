"""Test error handling functionality.

Verifies that custom exceptions carry the right status codes and that
endpoint functions raise them for unknown resources.
"""

import pytest

from api.meal_plans import current_meal_plan
from api.profiles import get_profile
from core.exceptions import (
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    ParseError,
    TransportError,
)
from database import init_db
from database.database import ReadSessionLocal


@pytest.fixture(scope="module", autouse=True)
def setup_db():
    """Initialize database before tests."""
    init_db()


def test_profile_not_found_raises_404():
    db = ReadSessionLocal()
    try:
        with pytest.raises(NotFoundError) as exc_info:
            get_profile(profile_id="user_missing", db=db)
        assert "Profile" in exc_info.value.message
        assert exc_info.value.status_code == 404
    finally:
        db.close()


def test_meal_plan_of_unknown_profile_raises_404():
    db = ReadSessionLocal()
    try:
        with pytest.raises(NotFoundError):
            current_meal_plan(profile_id="user_missing", db=db)
    finally:
        db.close()


def test_exception_classes_have_proper_attributes():
    exc = NotFoundError("Profile", "user_1")
    assert exc.status_code == 404
    assert "user_1" in exc.message

    assert DatabaseError("boom", operation="save").status_code == 500

    exc = ConfigurationError("missing", config_key="OPENAI_API_KEY")
    assert exc.status_code == 500
    assert exc.details == {"config_key": "OPENAI_API_KEY"}


def test_ai_failures_map_to_bad_gateway():
    transport = TransportError("late", operation="recipe", cause="timeout")
    assert transport.status_code == 502
    assert transport.details == {"operation": "recipe", "cause": "timeout"}
    assert ParseError("bad", schema="recipe").status_code == 502
