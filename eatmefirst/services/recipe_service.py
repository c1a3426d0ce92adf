"""Recipe lookups against TheMealDB."""

import logging
from typing import Any

import httpx

from eatmefirst.config import get_settings
from eatmefirst.schemas.recipe import RecipeDetail, RecipeSummary

logger = logging.getLogger(__name__)

# TheMealDB numbers ingredient/measure pairs strIngredient1..strIngredient20
MAX_INGREDIENTS = 20


class RecipeService:
    """Thin client for finding recipes by ingredient."""

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.mealdb_base_url.rstrip("/")
        self.timeout = settings.http_timeout_seconds

    async def _get_meals(self, endpoint: str, params: dict[str, str]) -> list[dict[str, Any]]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(f"{self.base_url}/{endpoint}", params=params)
            response.raise_for_status()
            data = response.json()
        return data.get("meals") or []

    async def filter_by_ingredient(self, ingredient: str) -> list[RecipeSummary]:
        """Recipes using an ingredient. Only id, title and image are known."""
        try:
            meals = await self._get_meals("filter.php", {"i": ingredient})
        except httpx.HTTPError as e:
            logger.error(f"Error fetching recipes for '{ingredient}': {e}")
            return []

        return [
            RecipeSummary(id=meal["idMeal"], title=meal["strMeal"], image=meal.get("strMealThumb"))
            for meal in meals
        ]

    async def search_for_ingredients(self, ingredients: list[str]) -> list[RecipeSummary]:
        """Recipes for any of the ingredients, first occurrence of each recipe kept."""
        seen: set[str] = set()
        results = []
        for ingredient in ingredients:
            for recipe in await self.filter_by_ingredient(ingredient):
                if recipe.id not in seen:
                    seen.add(recipe.id)
                    results.append(recipe)
        return results

    async def get_recipe(self, recipe_id: str) -> RecipeDetail | None:
        try:
            meals = await self._get_meals("lookup.php", {"i": recipe_id})
        except httpx.HTTPError as e:
            logger.error(f"Error fetching recipe details for {recipe_id}: {e}")
            return None

        if not meals:
            return None
        meal = meals[0]

        ingredients = []
        measures = []
        for i in range(1, MAX_INGREDIENTS + 1):
            ingredient = meal.get(f"strIngredient{i}")
            measure = meal.get(f"strMeasure{i}")
            if ingredient and ingredient.strip():
                ingredients.append(ingredient.strip())
                measures.append(measure.strip() if measure else "")

        return RecipeDetail(
            id=meal["idMeal"],
            title=meal["strMeal"],
            image=meal.get("strMealThumb"),
            instructions=meal.get("strInstructions") or "",
            ingredients=ingredients,
            measures=measures,
            youtube_url=meal.get("strYoutube") or None,
            source_url=meal.get("strSource") or None,
        )


def get_recipe_service() -> RecipeService:
    """Get a recipe service instance."""
    return RecipeService()
