"""Inventory item schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eatmefirst.models.enums import Category, ExpiryLevel, ItemStatus


def _parse_iso_date(value: Any) -> Any:
    """Accept only ISO calendar dates (YYYY-MM-DD) when given as text."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"'{value}' is not an ISO date (YYYY-MM-DD)") from None
    return value


def _default_quantity(value: str | None) -> str:
    if value is None or not value.strip():
        return "1"
    return value.strip()


class NutritionFacts(BaseModel):
    """Nutrition values per 100g."""

    model_config = ConfigDict(from_attributes=True)

    calories: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)


class ProductCreate(BaseModel):
    """Create an inventory item."""

    name: str = Field(..., max_length=255)
    image: str | None = None
    expiry_date: date
    category: Category
    quantity: str | None = Field("1", max_length=100)
    notes: str | None = Field(None, max_length=2000)
    nutrition: NutritionFacts | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be empty")
        return value

    @field_validator("expiry_date", mode="before")
    @classmethod
    def parse_expiry_date(cls, value: Any) -> Any:
        return _parse_iso_date(value)

    @field_validator("quantity")
    @classmethod
    def quantity_default(cls, value: str | None) -> str:
        return _default_quantity(value)


class ProductUpdate(BaseModel):
    """Update an inventory item. Only supplied fields are changed."""

    name: str | None = Field(None, max_length=255)
    image: str | None = None
    expiry_date: date | None = None
    category: Category | None = None
    quantity: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=2000)
    nutrition: NutritionFacts | None = None

    @field_validator("name", "expiry_date", "category", mode="before")
    @classmethod
    def required_fields_not_null(cls, value: Any) -> Any:
        # These may be omitted but never cleared
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be empty")
        return value

    @field_validator("expiry_date", mode="before")
    @classmethod
    def parse_expiry_date(cls, value: Any) -> Any:
        return _parse_iso_date(value)

    @field_validator("quantity")
    @classmethod
    def quantity_default(cls, value: str | None) -> str:
        return _default_quantity(value)


class ProductResponse(BaseModel):
    """Inventory item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str | None
    expiry_date: date
    category: Category
    quantity: str | None
    notes: str | None
    created_at: datetime | None
    consumed_at: datetime | None
    status: ItemStatus
    nutrition: NutritionFacts | None = None


class ProductWithExpiry(ProductResponse):
    """Inventory item with its expiry classification as of the request."""

    days_remaining: int
    expiry_level: ExpiryLevel


class InventoryStats(BaseModel):
    """Summary counts over the whole inventory."""

    total_active: int = 0
    expiring_soon: int = 0
    consumed: int = 0
    expired: int = 0


class DashboardResponse(BaseModel):
    """Home screen payload: stats plus the items that need attention."""

    stats: InventoryStats
    expiring_soon: list[ProductWithExpiry]
