"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from eatmefirst.api.dependencies import get_inventory_service, get_recipe_service
from eatmefirst.schemas.recipe import RecipeDetail, RecipeSearchResponse
from eatmefirst.services.inventory_service import InventoryService
from eatmefirst.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


@router.get("", response_model=RecipeSearchResponse)
async def search_recipes(
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
    ingredient: list[str] | None = Query(default=None, description="Search terms"),
    limit: int = Query(default=5, ge=1, le=20, description="Max inventory items searched"),
):
    """Find recipes for the given ingredients, or for what is in the inventory.

    Items expiring soonest are searched first.
    """
    terms = ingredient or inventory.active_ingredient_names()[:limit]
    recipes = await recipe_service.search_for_ingredients(terms)
    return RecipeSearchResponse(ingredients=terms, recipes=recipes)


@router.get("/{recipe_id}", response_model=RecipeDetail)
async def get_recipe(
    recipe_id: str,
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a recipe with its ingredients and instructions."""
    recipe = await recipe_service.get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe
