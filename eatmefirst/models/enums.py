"""Enums for model fields."""

from enum import Enum


class Category(str, Enum):
    """Where an item is stored."""

    FRIDGE = "Fridge"
    PANTRY = "Pantry"
    FREEZER = "Freezer"


class ItemStatus(str, Enum):
    """Lifecycle status of an inventory item."""

    ACTIVE = "active"
    CONSUMED = "consumed"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Consumed and expired items never change status again."""
        return self != ItemStatus.ACTIVE


class ExpiryLevel(str, Enum):
    """Urgency tier derived from the days remaining before expiry."""

    CRITICAL = "critical"
    WARNING = "warning"
    SAFE = "safe"
