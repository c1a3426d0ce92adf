"""FastAPI dependencies for the inventory services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from eatmefirst.database import get_db
from eatmefirst.services.inventory_service import InventoryService
from eatmefirst.services.item_store import ItemStore
from eatmefirst.services.product_lookup import get_product_lookup_service
from eatmefirst.services.recipe_service import get_recipe_service


def get_inventory_service(db: Annotated[Session, Depends(get_db)]) -> InventoryService:
    """Inventory facade bound to the request's session.

    Tables are created at application startup, so only the read models are
    built here (which sweeps overdue items first).
    """
    service = InventoryService(ItemStore(lambda: db))
    service.initialize(create_schema=False)
    return service


__all__ = ["get_inventory_service", "get_product_lookup_service", "get_recipe_service"]
