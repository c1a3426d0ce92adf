"""Summary counts derived from the item store."""

from datetime import date, datetime

from eatmefirst.config import get_settings
from eatmefirst.schemas.product import InventoryStats
from eatmefirst.services.lifecycle import LifecycleEngine, expiring_threshold


class StatsAggregator:
    """Recomputes inventory statistics on demand. Nothing is cached."""

    def __init__(self, lifecycle: LifecycleEngine):
        self.lifecycle = lifecycle
        self.store = lifecycle.store

    def snapshot(
        self,
        now: date | datetime,
        expiring_soon_threshold_days: int | None = None,
        sweep: bool = True,
    ) -> InventoryStats:
        """Counts as of ``now``.

        ``expiring_soon`` includes active items with days remaining at or
        below the threshold, today's and overdue ones included. Pass
        ``sweep=False`` only when the caller has just swept with the same
        ``now``.
        """
        if expiring_soon_threshold_days is None:
            expiring_soon_threshold_days = get_settings().expiring_soon_days
        if sweep:
            self.lifecycle.sweep_expired(now)

        counts = self.store.count_by_status()
        expiring = self.store.count_expiring_by(
            expiring_threshold(now, expiring_soon_threshold_days)
        )
        return InventoryStats(
            total_active=counts.active,
            expiring_soon=expiring,
            consumed=counts.consumed,
            expired=counts.expired,
        )
