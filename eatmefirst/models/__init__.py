"""SQLAlchemy models."""

from eatmefirst.models.enums import Category, ExpiryLevel, ItemStatus
from eatmefirst.models.nutrition import ProductNutrition
from eatmefirst.models.product import InventoryItem

__all__ = [
    "Category",
    "ExpiryLevel",
    "ItemStatus",
    "InventoryItem",
    "ProductNutrition",
]
