"""Inventory item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from eatmefirst.api.dependencies import get_inventory_service
from eatmefirst.models import Category
from eatmefirst.schemas.product import (
    DashboardResponse,
    InventoryStats,
    ProductCreate,
    ProductUpdate,
    ProductWithExpiry,
)
from eatmefirst.services.inventory_service import InventoryService
from eatmefirst.services.lifecycle import expiring_threshold

router = APIRouter(prefix="/api/v1/products", tags=["products"])

Inventory = Annotated[InventoryService, Depends(get_inventory_service)]


@router.get("", response_model=list[ProductWithExpiry])
def list_products(
    inventory: Inventory,
    category: Category | None = Query(default=None, description="Only items stored here"),
):
    """List active items, soonest expiry first."""
    items = inventory.products if category is None else inventory.products_in(category)
    now = inventory.clock()
    return [inventory.with_expiry(item, now) for item in items]


@router.get("/expiring", response_model=list[ProductWithExpiry])
def list_expiring_products(
    inventory: Inventory,
    days: int | None = Query(default=None, ge=0, description="Window in days (default: 3)"),
):
    """List active items expiring within the window, overdue ones included."""
    now = inventory.clock()
    if days is None:
        items = inventory.expiring_soon
    else:
        items = inventory.list_expiring_by(expiring_threshold(now, days))
    return [inventory.with_expiry(item, now) for item in items]


@router.get("/stats", response_model=InventoryStats)
def get_stats(inventory: Inventory):
    """Get active / expiring-soon / consumed / expired counts."""
    return inventory.stats


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(inventory: Inventory):
    """Stats plus the expiring-soon list in one call."""
    now = inventory.clock()
    return DashboardResponse(
        stats=inventory.stats,
        expiring_soon=[inventory.with_expiry(item, now) for item in inventory.expiring_soon],
    )


@router.post("", response_model=ProductWithExpiry, status_code=status.HTTP_201_CREATED)
def create_product(item_data: ProductCreate, inventory: Inventory):
    """Add an item to the inventory.

    An item created with a past expiry date is expired by the sweep that
    follows creation.
    """
    item_id = inventory.add_item(item_data)
    return inventory.with_expiry(inventory.get_item(item_id))


@router.get("/{item_id}", response_model=ProductWithExpiry)
def get_product(item_id: int, inventory: Inventory):
    """Get a specific item, whatever its status."""
    return inventory.with_expiry(inventory.get_item(item_id))


@router.patch("/{item_id}", response_model=ProductWithExpiry)
def update_product(item_id: int, item_data: ProductUpdate, inventory: Inventory):
    """Update the supplied fields of an item."""
    inventory.edit_item(item_id, item_data)
    return inventory.with_expiry(inventory.get_item(item_id))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(item_id: int, inventory: Inventory):
    """Permanently remove an item."""
    inventory.delete_item(item_id)


@router.post("/{item_id}/consume", response_model=ProductWithExpiry)
def consume_product(item_id: int, inventory: Inventory):
    """Mark an active item as consumed."""
    inventory.consume_item(item_id)
    return inventory.with_expiry(inventory.get_item(item_id))


@router.post("/{item_id}/waste", response_model=ProductWithExpiry)
def waste_product(item_id: int, inventory: Inventory):
    """Mark an active item as wasted (expired without being consumed)."""
    inventory.waste_item(item_id)
    return inventory.with_expiry(inventory.get_item(item_id))
