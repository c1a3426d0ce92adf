"""Pydantic schemas for API requests and responses."""

from eatmefirst.schemas.lookup import ProductPrefill
from eatmefirst.schemas.product import (
    DashboardResponse,
    InventoryStats,
    NutritionFacts,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ProductWithExpiry,
)
from eatmefirst.schemas.recipe import RecipeDetail, RecipeSearchResponse, RecipeSummary

__all__ = [
    "NutritionFacts",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductWithExpiry",
    "InventoryStats",
    "DashboardResponse",
    "ProductPrefill",
    "RecipeSummary",
    "RecipeDetail",
    "RecipeSearchResponse",
]
