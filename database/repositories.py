"""Domain repositories for the nutrition assistant store.

Each repository maps one table to its pydantic schema. List-valued and
nested fields are stored as JSON text and decoded on read.
"""

import json
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import BaseRepository
from database import models
from schemas.badge_schema import UserBadge
from schemas.chat_schema import ChatMessage, ChatSession
from schemas.food_schema import Food, FoodLog
from schemas.meal_schema import MealPlan
from schemas.profile_schema import UserProfile
from schemas.recipe_schema import Recipe

logger = get_logger("database.repositories")


def _dump_list(values: Optional[Iterable[str]]) -> str:
    return json.dumps(list(values or []))


def _load_list(raw: Optional[str]) -> List[str]:
    return json.loads(raw) if raw else []


class ProfileRepository(BaseRepository[models.Profile]):
    def __init__(self, session: Session):
        super().__init__(models.Profile, session)

    @staticmethod
    def to_schema(row: models.Profile) -> UserProfile:
        return UserProfile(
            id=row.id,
            name=row.name,
            age=row.age,
            weight=row.weight,
            height=row.height,
            activity_level=row.activity_level,
            dietary_preferences=_load_list(row.dietary_preferences),
            health_goals=_load_list(row.health_goals),
            allergies=_load_list(row.allergies),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _apply(row: models.Profile, profile: UserProfile) -> models.Profile:
        row.name = profile.name
        row.age = profile.age
        row.weight = profile.weight
        row.height = profile.height
        row.activity_level = profile.activity_level.value
        row.dietary_preferences = _dump_list(profile.dietary_preferences)
        row.health_goals = _dump_list(profile.health_goals)
        row.allergies = _dump_list(profile.allergies)
        row.created_at = profile.created_at
        row.updated_at = profile.updated_at
        return row

    def create(self, profile: UserProfile) -> UserProfile:
        row = self.add(self._apply(models.Profile(id=profile.id), profile))
        logger.info("Profile %s created", row.id)
        return self.to_schema(row)

    def get(self, profile_id: str) -> UserProfile:
        """Load a profile.

        Raises:
            NotFoundError: If no profile has `profile_id`.
        """
        row = self.get_by_id(profile_id)
        if row is None:
            raise NotFoundError("Profile", profile_id)
        return self.to_schema(row)

    def update(self, profile: UserProfile) -> UserProfile:
        row = self.get_by_id(profile.id)
        if row is None:
            raise NotFoundError("Profile", profile.id)
        return self.to_schema(self.add(self._apply(row, profile)))


class FoodLogRepository(BaseRepository[models.FoodLogEntry]):
    def __init__(self, session: Session):
        super().__init__(models.FoodLogEntry, session)

    @staticmethod
    def to_schema(row: models.FoodLogEntry) -> FoodLog:
        return FoodLog(
            id=row.id,
            user_id=row.user_id,
            food=Food.model_validate_json(row.food),
            quantity=row.quantity,
            meal_type=row.meal_type,
            logged_at=row.logged_at,
            for_date=row.for_date,
        )

    def create(self, entry: FoodLog) -> FoodLog:
        row = self.add(models.FoodLogEntry(
            user_id=entry.user_id,
            food=entry.food.model_dump_json(),
            quantity=entry.quantity,
            meal_type=entry.meal_type.value,
            logged_at=entry.logged_at,
            for_date=entry.for_date,
        ))
        return self.to_schema(row)

    def list_for_user(self, user_id: str) -> List[FoodLog]:
        rows = self.list_by(order_by=models.FoodLogEntry.logged_at, user_id=user_id)
        return [self.to_schema(row) for row in rows]


class MealPlanRepository(BaseRepository[models.MealPlanRecord]):
    def __init__(self, session: Session):
        super().__init__(models.MealPlanRecord, session)

    def replace(self, plan: MealPlan) -> MealPlan:
        """Store `plan` as the user's current plan, superseding any earlier one."""
        removed = self.delete_by(user_id=plan.user_id)
        if removed:
            logger.info("Replacing meal plan of user %s", plan.user_id)
        self.add(models.MealPlanRecord(
            id=plan.id,
            user_id=plan.user_id,
            name=plan.name,
            start_date=plan.start_date,
            end_date=plan.end_date,
            is_fallback=plan.is_fallback,
            payload=plan.model_dump_json(),
            created_at=plan.created_at,
        ))
        return plan

    def current(self, user_id: str) -> Optional[MealPlan]:
        row = self.first_by(user_id=user_id)
        return MealPlan.model_validate_json(row.payload) if row else None


class RecipeRepository(BaseRepository[models.RecipeRecord]):
    def __init__(self, session: Session):
        super().__init__(models.RecipeRecord, session)

    def create(self, recipe: Recipe, user_id: Optional[str] = None) -> Recipe:
        self.add(models.RecipeRecord(
            id=recipe.id,
            user_id=user_id,
            name=recipe.name,
            payload=recipe.model_dump_json(),
        ))
        return recipe

    def count_for_user(self, user_id: str) -> int:
        return self.count(user_id=user_id)


class UserBadgeRepository(BaseRepository[models.UserBadgeRecord]):
    def __init__(self, session: Session):
        super().__init__(models.UserBadgeRecord, session)

    def earned(self, user_id: str) -> List[UserBadge]:
        rows = self.list_by(order_by=models.UserBadgeRecord.earned_at, user_id=user_id)
        return [UserBadge(badge_id=row.badge_id, earned_at=row.earned_at) for row in rows]

    def award(self, user_id: str, badge_ids: Iterable[str], now: Optional[datetime] = None) -> List[UserBadge]:
        """Record newly earned badges; already-earned ids are skipped."""
        now = now or datetime.utcnow()
        held = {record.badge_id for record in self.earned(user_id)}
        awarded = []
        for badge_id in badge_ids:
            if badge_id in held:
                continue
            self.add(models.UserBadgeRecord(user_id=user_id, badge_id=badge_id, earned_at=now))
            held.add(badge_id)
            awarded.append(UserBadge(badge_id=badge_id, earned_at=now))
        if awarded:
            logger.info("User %s earned badges %s", user_id, [b.badge_id for b in awarded])
        return awarded


class ChatSessionRepository(BaseRepository[models.ChatSessionRecord]):
    def __init__(self, session: Session):
        super().__init__(models.ChatSessionRecord, session)

    @staticmethod
    def to_schema(row: models.ChatSessionRecord) -> ChatSession:
        return ChatSession(
            id=row.id,
            user_id=row.user_id,
            messages=[ChatMessage.model_validate(item) for item in json.loads(row.messages or "[]")],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def get(self, session_id: str, user_id: str) -> ChatSession:
        """Load a session owned by `user_id`.

        Raises:
            NotFoundError: If the session does not exist or belongs to another user.
        """
        row = self.get_by_id(session_id)
        if row is None or row.user_id != user_id:
            raise NotFoundError("ChatSession", session_id)
        return self.to_schema(row)

    def store(self, chat: ChatSession) -> ChatSession:
        """Insert or overwrite the stored copy of `chat`."""
        row = self.get_by_id(chat.id) or models.ChatSessionRecord(
            id=chat.id, user_id=chat.user_id, created_at=chat.created_at,
        )
        row.messages = json.dumps([message.model_dump(mode="json") for message in chat.messages])
        row.updated_at = chat.updated_at
        return self.to_schema(self.add(row))
