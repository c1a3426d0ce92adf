"""Recipe schemas for the remote recipe catalogue."""

from pydantic import BaseModel


class RecipeSummary(BaseModel):
    """Recipe as returned by an ingredient search (no details)."""

    id: str
    title: str
    image: str | None = None


class RecipeDetail(RecipeSummary):
    """Full recipe with ingredients and instructions."""

    instructions: str = ""
    ingredients: list[str] = []
    measures: list[str] = []
    youtube_url: str | None = None
    source_url: str | None = None


class RecipeSearchResponse(BaseModel):
    """Recipes found for a set of search terms."""

    ingredients: list[str]
    recipes: list[RecipeSummary]
