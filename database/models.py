"""SQLAlchemy ORM models for the nutrition assistant store.

Collections (preferences, goals, allergies, plan days, recipe bodies, chat
messages) are stored as JSON-encoded text. Models stay behavior-free; the
conversion to domain schemas lives in `database.repositories`.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class Profile(Base):
    """ORM model for the single user profile created during onboarding."""

    __tablename__ = "profiles"
    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=True)
    age = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    activity_level = Column(String, nullable=False)
    dietary_preferences = Column(Text, nullable=True)
    health_goals = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class FoodLogEntry(Base):
    """Immutable food-log entry; `food` holds the JSON-encoded Food."""

    __tablename__ = "food_logs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    food = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False, default=1.0)
    meal_type = Column(String, nullable=False)
    logged_at = Column(DateTime, default=datetime.utcnow)
    for_date = Column(Date, nullable=False, index=True)


class MealPlanRecord(Base):
    """The current meal plan of a user; a new plan replaces the row."""

    __tablename__ = "meal_plans"
    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, unique=True)
    name = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_fallback = Column(Boolean, default=False)
    payload = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class RecipeRecord(Base):
    """A generated recipe; `payload` holds the JSON-encoded Recipe."""

    __tablename__ = "recipes"
    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=True, index=True)
    name = Column(String, nullable=False)
    payload = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class UserBadgeRecord(Base):
    """Join record between a user and an earned catalog badge."""

    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_user_badge"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    badge_id = Column(String, nullable=False)
    earned_at = Column(DateTime, default=datetime.utcnow)


class ChatSessionRecord(Base):
    """Coach conversation; `messages` holds the JSON-encoded message list."""

    __tablename__ = "chat_sessions"
    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    messages = Column(Text, nullable=False, default="[]")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
