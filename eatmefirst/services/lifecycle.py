"""Expiry lifecycle rules for inventory items.

This module is the single place that decides what "expired" and "expiring
soon" mean, and the only code allowed to move an item between statuses:

    active --(sweep / waste)--> expired
    active --(consume)--------> consumed

Consumed and expired are terminal.
"""

import logging
import math
from datetime import date, datetime, time, timedelta

from eatmefirst.config import get_settings
from eatmefirst.models import ExpiryLevel, ItemStatus
from eatmefirst.services.item_store import ItemStore

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def to_date(now: date | datetime) -> date:
    """Calendar date of ``now``."""
    if isinstance(now, datetime):
        return now.date()
    return now


def days_remaining(expiry_date: date, now: date | datetime) -> int:
    """Whole days until ``expiry_date``, rounded up.

    Zero means the item expires today; negative values mean it already has.
    ``expiry_date`` is taken as midnight in ``now``'s timezone.
    """
    if isinstance(now, datetime):
        expires_at = datetime.combine(expiry_date, time.min, tzinfo=now.tzinfo)
        delta = expires_at - now
    else:
        delta = expiry_date - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def classify(
    remaining: int,
    critical_days: int | None = None,
    warning_days: int | None = None,
) -> ExpiryLevel:
    """Urgency tier for a number of days remaining."""
    settings = get_settings()
    if critical_days is None:
        critical_days = settings.critical_days
    if warning_days is None:
        warning_days = settings.warning_days

    if remaining <= critical_days:
        return ExpiryLevel.CRITICAL
    if remaining <= warning_days:
        return ExpiryLevel.WARNING
    return ExpiryLevel.SAFE


def expiring_threshold(now: date | datetime, days: int) -> date:
    """Last expiry date that still counts as expiring within ``days``."""
    return to_date(now) + timedelta(days=days)


class LifecycleEngine:
    """Drives status transitions against an item store."""

    def __init__(self, store: ItemStore):
        self.store = store

    def sweep_expired(self, now: date | datetime) -> int:
        """Expire every active item whose expiry date is before today.

        Returns the number of items transitioned; a second sweep with the
        same ``now`` returns 0.
        """
        today = to_date(now)
        swept = self.store.expire_overdue(today)
        if swept:
            logger.info(f"Swept {swept} item(s) past their expiry date as of {today}")
        return swept

    def mark_consumed(self, item_id: int, now: datetime) -> None:
        self.store.set_status(item_id, ItemStatus.CONSUMED, consumed_at=now)
        logger.info(f"Item {item_id} consumed")

    def mark_wasted(self, item_id: int) -> None:
        self.store.set_status(item_id, ItemStatus.EXPIRED)
        logger.info(f"Item {item_id} wasted")
