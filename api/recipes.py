"""Recipe API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_write
from database.repositories import ProfileRepository, RecipeRepository
from schemas.recipe_schema import Recipe, RecipeRequest
from services.ai_orchestrator import AIOrchestrator, get_orchestrator

logger = get_logger("api.recipes")
router = APIRouter(prefix="/api", tags=["recipes"])


@router.post("/recipes", response_model=Recipe, status_code=201)
async def create_recipe(
    payload: RecipeRequest,
    db: Session = Depends(get_db_write),
    orchestrator: AIOrchestrator = Depends(get_orchestrator),
):
    """Generate a recipe from the given ingredients.

    There is no fallback recipe: transport and parse failures surface as a
    502 error response.

    Raises:
        NotFoundError: If `user_id` names an unknown profile.
        ConfigurationError, TransportError, ParseError: From generation.
    """
    if payload.user_id:
        ProfileRepository(db).get(payload.user_id)
    recipe = await orchestrator.generate_recipe(
        payload.ingredients,
        dietary_preferences=payload.dietary_preferences,
        servings=payload.servings,
    )
    RecipeRepository(db).create(recipe, user_id=payload.user_id)
    logger.info("Generated recipe %s (%s)", recipe.id, recipe.name)
    return recipe
