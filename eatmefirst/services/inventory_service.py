"""Inventory facade: commands plus the read models they refresh."""

import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError

from eatmefirst.config import get_settings
from eatmefirst.models import Category, InventoryItem
from eatmefirst.schemas.product import (
    InventoryStats,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ProductWithExpiry,
)
from eatmefirst.services.item_store import ItemStore
from eatmefirst.services.lifecycle import (
    LifecycleEngine,
    classify,
    days_remaining,
    expiring_threshold,
)
from eatmefirst.services.stats import StatsAggregator

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(ZoneInfo(get_settings().timezone))


class InventoryService:
    """Entry point for every inventory command.

    Each successful mutation is followed, before the command returns, by a
    sweep of overdue items, a reload of the active and expiring-soon lists,
    and a stats recomputation. A failed mutation raises and skips all three,
    so the read models keep describing the unchanged store.
    """

    def __init__(
        self,
        store: ItemStore,
        clock: Callable[[], datetime] | None = None,
        expiring_soon_days: int | None = None,
    ):
        self.store = store
        self.lifecycle = LifecycleEngine(store)
        self.stats_aggregator = StatsAggregator(self.lifecycle)
        self.clock = clock or local_now
        if expiring_soon_days is None:
            expiring_soon_days = get_settings().expiring_soon_days
        self.expiring_soon_days = expiring_soon_days

        self._products: list[InventoryItem] = []
        self._expiring_soon: list[InventoryItem] = []
        self._stats = InventoryStats()

    # --- Read models ---

    @property
    def is_initialized(self) -> bool:
        return self.store.is_initialized

    @property
    def products(self) -> list[InventoryItem]:
        """Active items, soonest expiry first."""
        return self._products

    @property
    def expiring_soon(self) -> list[InventoryItem]:
        return self._expiring_soon

    @property
    def stats(self) -> InventoryStats:
        return self._stats

    # --- Lifecycle of the facade itself ---

    def initialize(self, create_schema: bool = True) -> None:
        """Open the store, sweep overdue items and build the read models."""
        self.store.initialize(create_schema=create_schema)
        self.refresh()

    def refresh(self) -> None:
        now = self.clock()
        self.load_items(now)
        self.refresh_stats(now, sweep=False)

    def load_items(self, now: datetime | None = None) -> None:
        """Sweep, then reload the active and expiring-soon lists."""
        now = now or self.clock()
        self.lifecycle.sweep_expired(now)
        self._products = self.store.list_active(sort_by_expiry_ascending=True)
        self._expiring_soon = self.store.list_expiring_by(
            expiring_threshold(now, self.expiring_soon_days)
        )

    def refresh_stats(self, now: datetime | None = None, sweep: bool = True) -> InventoryStats:
        """Recompute stats. Read failures keep the previous snapshot."""
        now = now or self.clock()
        try:
            self._stats = self.stats_aggregator.snapshot(
                now, self.expiring_soon_days, sweep=sweep
            )
        except SQLAlchemyError as e:
            self.store.db.rollback()
            logger.warning(f"Stats refresh failed, keeping previous snapshot: {e}")
        return self._stats

    # --- Commands ---

    def add_item(self, fields: ProductCreate | Mapping[str, Any]) -> int:
        item_id = self.store.create(fields, created_at=self.clock())
        self.refresh()
        return item_id

    def edit_item(self, item_id: int, fields: ProductUpdate | Mapping[str, Any]) -> None:
        self.store.update(item_id, fields)
        self.refresh()

    def delete_item(self, item_id: int) -> None:
        self.store.delete(item_id)
        self.refresh()

    def waste_item(self, item_id: int) -> None:
        self.lifecycle.mark_wasted(item_id)
        self.refresh()

    def consume_item(self, item_id: int) -> None:
        self.lifecycle.mark_consumed(item_id, self.clock())
        self.refresh()

    # --- Queries for collaborators ---

    def get_item(self, item_id: int) -> InventoryItem:
        return self.store.get_or_raise(item_id)

    def products_in(self, category: Category) -> list[InventoryItem]:
        self.lifecycle.sweep_expired(self.clock())
        return self.store.list_by_category(category)

    def list_expiring_by(self, threshold_date: date | None = None) -> list[InventoryItem]:
        """Active items expiring on or before the threshold (default: soon window).

        Polled by the reminder scheduler, so it sweeps first.
        """
        now = self.clock()
        self.lifecycle.sweep_expired(now)
        if threshold_date is None:
            threshold_date = expiring_threshold(now, self.expiring_soon_days)
        return self.store.list_expiring_by(threshold_date)

    def active_ingredient_names(self) -> list[str]:
        """Distinct active item names, used as recipe search terms."""
        names: list[str] = []
        for item in self._products:
            if item.name not in names:
                names.append(item.name)
        return names

    def with_expiry(self, item: InventoryItem, now: datetime | None = None) -> ProductWithExpiry:
        """Item read model with days remaining and urgency tier."""
        now = now or self.clock()
        remaining = days_remaining(item.expiry_date, now)
        return ProductWithExpiry(
            **ProductResponse.model_validate(item).model_dump(),
            days_remaining=remaining,
            expiry_level=classify(remaining),
        )
