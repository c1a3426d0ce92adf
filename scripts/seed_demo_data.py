#!/usr/bin/env python3
"""Seed demo data for screenshots.

Fills the inventory with a representative spread of items: some critical,
some in the warning window, some safe, plus one consumed and one wasted item
so every stats counter is non-zero.

Usage:
    # From project root:
    python scripts/seed_demo_data.py

    # Or against another database:
    DATABASE_URL=sqlite:///./demo.db python scripts/seed_demo_data.py
"""

import os
import sys
from datetime import timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eatmefirst.models import InventoryItem
from eatmefirst.services.inventory_service import InventoryService, local_now
from eatmefirst.services.item_store import ItemStore

IMAGE_BASE = "https://images.unsplash.com"


def future(days: int) -> str:
    return (local_now().date() + timedelta(days=days)).isoformat()


DEMO_ITEMS = [
    {
        "name": "Fresh Milk",
        "image": f"{IMAGE_BASE}/photo-1563636619-e9143da7973b",
        "expiry_date": future(1),
        "category": "Fridge",
        "quantity": "1L",
        "nutrition": {"calories": 64, "protein": 3.3, "carbs": 4.8, "fat": 3.6},
    },
    {
        "name": "Avocados",
        "image": f"{IMAGE_BASE}/photo-1523049673856-42848c51a7d3",
        "expiry_date": future(2),
        "category": "Pantry",
        "quantity": "3 pcs",
    },
    {
        "name": "Spinach",
        "image": f"{IMAGE_BASE}/photo-1576045057995-568f588f82fb",
        "expiry_date": future(2),
        "category": "Fridge",
        "quantity": "1 bag",
    },
    {
        "name": "Greek Yogurt",
        "image": f"{IMAGE_BASE}/photo-1488477181946-6428a0291777",
        "expiry_date": future(5),
        "category": "Fridge",
        "quantity": "500g",
        "notes": "Plain, unsweetened",
    },
    {
        "name": "Chicken Breast",
        "image": f"{IMAGE_BASE}/photo-1604503468506-a8da13d82791",
        "expiry_date": future(6),
        "category": "Fridge",
        "quantity": "2 packs",
    },
    {
        "name": "Pasta",
        "image": f"{IMAGE_BASE}/photo-1551462147-37885acc36f1",
        "expiry_date": future(365),
        "category": "Pantry",
        "quantity": "2 boxes",
    },
    {
        "name": "Frozen Peas",
        "image": f"{IMAGE_BASE}/photo-1516684732162-7988587c6777",
        "expiry_date": future(180),
        "category": "Freezer",
        "quantity": "1 bag",
    },
]

CONSUMED_ITEM = {"name": "Cheddar", "expiry_date": future(10), "category": "Fridge"}
WASTED_ITEM = {"name": "Strawberries", "expiry_date": future(1), "category": "Fridge"}


def seed_demo_data():
    """Seed the demo database with representative data."""
    store = ItemStore()
    inventory = InventoryService(store)

    try:
        inventory.initialize()

        existing = store.db.query(InventoryItem).count()
        if existing:
            print(f"Clearing {existing} existing item(s) and re-seeding...")
            for item in store.db.query(InventoryItem).all():
                store.delete(item.id)

        print("Creating inventory items...")
        for fields in DEMO_ITEMS:
            inventory.add_item(fields)

        inventory.consume_item(inventory.add_item(CONSUMED_ITEM))
        inventory.waste_item(inventory.add_item(WASTED_ITEM))

        stats = inventory.stats
        print(
            f"Done: {stats.total_active} active, {stats.expiring_soon} expiring soon, "
            f"{stats.consumed} consumed, {stats.expired} expired"
        )
    finally:
        store.close()


if __name__ == "__main__":
    seed_demo_data()
