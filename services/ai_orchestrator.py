"""AI orchestration service.

Builds prompts, calls the completion collaborator once, validates the reply
and applies the failure policy of each operation:

- meal plan: any failure other than configuration -> fallback plan
- recipe: every failure propagates to the caller
- coach chat: every failure -> fixed apology message
- food analysis: any failure other than configuration -> zero-nutrition placeholder

A missing credential (`ConfigurationError`) is never masked, except by the
coach chat which always answers with a message. Cancellation always
propagates.
"""

import asyncio
import math
from functools import lru_cache
from typing import Iterable, List, Optional

from core.config import get_settings
from core.exceptions import AppException, ConfigurationError, ParseError, TransportError
from core.logger import get_logger
from schemas.food_schema import FoodAnalysis
from schemas.meal_schema import MealPlan
from schemas.profile_schema import UserProfile
from schemas.recipe_schema import Recipe
from services import prompt_builder
from services.completion_client import ChatCompletionClient, Message, OpenAICompletionClient
from services.fallback_policy import default_meal_plan
from services.response_validator import parse_food_analysis, parse_meal_plan, parse_recipe, zero_food_analysis

logger = get_logger("services.ai_orchestrator")

COACH_APOLOGY = (
    "I'm sorry, I'm having trouble connecting right now. "
    "Please check your internet connection and try again."
)
MAX_CONTEXT_TURNS = 5


class AIOrchestrator:
    """Facade over prompt building, completion and reply validation.

    Holds no per-call state; the collaborator and default deadline are
    injected so every operation can be exercised with a fake client.

    Every operation accepts `timeout` (seconds; overrides the default
    deadline, expiry is handled as a transport failure) and `cancel_event`
    (setting it abandons the pending call and raises
    `asyncio.CancelledError`).
    """

    def __init__(self, client: ChatCompletionClient, timeout: Optional[float] = None):
        self.client = client
        self.timeout = timeout

    async def _complete(
        self,
        operation: str,
        messages: List[Message],
        temperature: float,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        deadline = timeout if timeout is not None else self.timeout
        call = asyncio.ensure_future(asyncio.wait_for(
            self.client.complete(messages, temperature=temperature, max_tokens=max_tokens, json_mode=json_mode),
            timeout=deadline,
        ))
        waiters = {call}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)
        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if not call.done():
                call.cancel()

        if call not in done:
            logger.info("%s request cancelled by caller", operation)
            raise asyncio.CancelledError(f"{operation} cancelled")
        try:
            return call.result()
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"Completion service did not answer within {deadline}s",
                operation=operation,
                cause="timeout",
            ) from exc

    async def generate_meal_plan(
        self,
        profile: UserProfile,
        days: float = 7,
        extra_preferences: Optional[Iterable[str]] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> MealPlan:
        """Generate a `days`-long plan; degrades to the fallback plan on failure.

        Raises:
            ConfigurationError: If the completion credential is missing.
        """
        days = max(1, int(math.floor(days)))
        messages = [
            {"role": "system", "content": prompt_builder.MEAL_PLAN_SYSTEM_PROMPT},
            {"role": "user", "content": prompt_builder.build_meal_plan_prompt(profile, days, extra_preferences)},
        ]
        try:
            raw = await self._complete(
                "meal_plan", messages, temperature=0.7, json_mode=True,
                timeout=timeout, cancel_event=cancel_event,
            )
            return parse_meal_plan(raw, profile, days=days)
        except ConfigurationError:
            logger.error("Meal plan generation misconfigured for user %s", profile.id)
            raise
        except (TransportError, ParseError) as exc:
            logger.warning("Meal plan generation failed for user %s, using fallback: %s", profile.id, exc.message)
            return default_meal_plan(profile, days)
        except Exception:
            logger.exception("Unexpected meal plan failure for user %s, using fallback", profile.id)
            return default_meal_plan(profile, days)

    async def generate_recipe(
        self,
        ingredients: Iterable[str],
        dietary_preferences: Optional[Iterable[str]] = None,
        servings: int = 4,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Recipe:
        """Generate one recipe from the available ingredients.

        Raises:
            ConfigurationError, TransportError, ParseError: Propagated unchanged.
        """
        ingredients = list(ingredients)
        messages = [
            {"role": "system", "content": prompt_builder.RECIPE_SYSTEM_PROMPT},
            {"role": "user", "content": prompt_builder.build_recipe_prompt(ingredients, dietary_preferences, servings)},
        ]
        try:
            raw = await self._complete(
                "recipe", messages, temperature=0.8, json_mode=True,
                timeout=timeout, cancel_event=cancel_event,
            )
            return parse_recipe(raw, servings=servings)
        except AppException as exc:
            logger.error("Recipe generation failed for ingredients %s: %s", ingredients, exc.message)
            raise

    async def get_coach_reply(
        self,
        message: str,
        profile: Optional[UserProfile] = None,
        recent_assistant_turns: Optional[Iterable[str]] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Answer a coaching question; returns an apology instead of raising."""
        context = list(recent_assistant_turns or [])[-MAX_CONTEXT_TURNS:]
        messages = [{"role": "system", "content": prompt_builder.build_coach_system_prompt(profile)}]
        messages += [{"role": "assistant", "content": turn} for turn in context]
        messages.append({"role": "user", "content": message})
        try:
            return await self._complete(
                "coach", messages, temperature=0.7, max_tokens=800,
                timeout=timeout, cancel_event=cancel_event,
            )
        except ConfigurationError as exc:
            logger.error("Coach reply unavailable, completion service misconfigured: %s", exc.message)
        except AppException as exc:
            logger.warning("Coach reply failed: %s", exc.message)
        except Exception:
            logger.exception("Unexpected coach reply failure")
        return COACH_APOLOGY

    async def analyze_food(
        self,
        description: str,
        is_image_derived: bool = False,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> FoodAnalysis:
        """Estimate nutrition for a food; degrades to a zero-nutrition record.

        Raises:
            ConfigurationError: If the completion credential is missing.
        """
        messages = [
            {"role": "system", "content": prompt_builder.FOOD_ANALYSIS_SYSTEM_PROMPT},
            {"role": "user", "content": prompt_builder.build_food_analysis_prompt(description, is_image_derived)},
        ]
        try:
            raw = await self._complete(
                "food_analysis", messages, temperature=0.3, max_tokens=300, json_mode=True,
                timeout=timeout, cancel_event=cancel_event,
            )
        except ConfigurationError:
            logger.error("Food analysis misconfigured")
            raise
        except (TransportError, ParseError) as exc:
            logger.warning("Food analysis failed for %r, logging placeholder: %s", description, exc.message)
            return zero_food_analysis(description)
        except Exception:
            logger.exception("Unexpected food analysis failure for %r, logging placeholder", description)
            return zero_food_analysis(description)
        return parse_food_analysis(raw, fallback_name=description)


@lru_cache(maxsize=1)
def get_orchestrator() -> AIOrchestrator:
    """Default orchestrator wired to OpenAI, for FastAPI dependency injection."""
    settings = get_settings()
    return AIOrchestrator(OpenAICompletionClient(), timeout=settings.ai_timeout_seconds)
