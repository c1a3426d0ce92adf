"""Celery task sending the daily expiry reminder."""

import logging

from eatmefirst.celery_app import app as celery_app
from eatmefirst.database import SessionLocal
from eatmefirst.services.inventory_service import InventoryService
from eatmefirst.services.item_store import ItemStore
from eatmefirst.services.reminders import ExpiryReminderService, get_notification_backend

logger = logging.getLogger(__name__)


@celery_app.task
def send_expiry_reminder() -> dict:
    """Sweep overdue items and send one reminder for everything expiring soon.

    Runs daily via celery-beat at REMINDER_HOUR:REMINDER_MINUTE.

    Returns:
        dict with the reminder buckets (empty when nothing was due)
    """
    store = ItemStore(SessionLocal)
    try:
        inventory = InventoryService(store)
        inventory.initialize(create_schema=False)
        reminder = ExpiryReminderService(inventory, get_notification_backend()).send_daily_reminder()
    finally:
        store.close()

    if reminder is None:
        return {"sent": False, "today": 0, "tomorrow": 0, "soon": 0}

    logger.info(f"Reminder processed: {reminder.title}")
    return {
        "sent": reminder.delivered,
        "today": len(reminder.today),
        "tomorrow": len(reminder.tomorrow),
        "soon": len(reminder.soon),
    }
