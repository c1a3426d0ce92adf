"""Barcode lookup schemas."""

from pydantic import BaseModel

from eatmefirst.models.enums import Category
from eatmefirst.schemas.product import NutritionFacts


class ProductPrefill(BaseModel):
    """Fields found for a barcode, ready to be merged into a create request."""

    barcode: str
    name: str
    image: str | None = None
    quantity: str | None = None
    category: Category = Category.FRIDGE
    nutrition: NutritionFacts | None = None

    def to_create_fields(self) -> dict:
        """Fields accepted by ``InventoryService.add_item`` (expiry date still needed)."""
        return self.model_dump(exclude={"barcode"})
