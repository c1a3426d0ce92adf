"""Daily expiry reminder composition and delivery."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

import httpx

from eatmefirst.config import get_settings
from eatmefirst.models import InventoryItem
from eatmefirst.services.inventory_service import InventoryService
from eatmefirst.services.lifecycle import days_remaining

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "🍎 Food Expiry Alert"
TODAY_TITLE = "⚠️ Food Expiring Today!"
MAX_NAMES = 3


@dataclass
class ExpiryReminder:
    """One reminder covering every item that expires soon."""

    title: str
    body: str
    today: list[str] = field(default_factory=list)
    tomorrow: list[str] = field(default_factory=list)
    soon: list[str] = field(default_factory=list)
    delivered: bool = False


class NotificationBackend(Protocol):
    """Delivers a notification to the user's device."""

    def send(self, title: str, body: str, data: dict[str, Any] | None = None) -> bool: ...


class NullNotificationBackend:
    """Backend used when no delivery channel is configured."""

    def send(self, title: str, body: str, data: dict[str, Any] | None = None) -> bool:
        logger.info("Push notifications not configured, reminder not delivered")
        return False


class ExpoPushBackend:
    """Sends notifications through the Expo push service."""

    def __init__(self, push_token: str, push_url: str, timeout: float = 30.0) -> None:
        self.push_token = push_token
        self.push_url = push_url
        self.timeout = timeout

    def send(self, title: str, body: str, data: dict[str, Any] | None = None) -> bool:
        message = {
            "to": self.push_token,
            "title": title,
            "body": body,
            "data": data or {},
            "sound": "default",
            "channelId": "expiry-reminders",
            "priority": "high",
        }
        try:
            response = httpx.post(self.push_url, json=message, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Expo push request failed: {e}")
            return False

        ticket = response.json().get("data", {})
        if isinstance(ticket, dict) and ticket.get("status") == "error":
            logger.error(f"Expo push rejected: {ticket.get('message')}")
            return False
        return True


def get_notification_backend() -> NotificationBackend:
    """Expo push when a device token is configured, otherwise a no-op."""
    settings = get_settings()
    if settings.expo_push_token:
        return ExpoPushBackend(
            settings.expo_push_token,
            settings.expo_push_url,
            timeout=settings.http_timeout_seconds,
        )
    return NullNotificationBackend()


def _summarize(names: list[str]) -> str:
    text = ", ".join(names[:MAX_NAMES])
    if len(names) > MAX_NAMES:
        text += f" and {len(names) - MAX_NAMES} more"
    return text


def compose_reminder(items: list[InventoryItem], now: datetime) -> ExpiryReminder | None:
    """Group items into today / tomorrow / soon and build the message.

    Returns None when there is nothing to remind about.
    """
    reminder = ExpiryReminder(title=DEFAULT_TITLE, body="")
    for item in items:
        remaining = days_remaining(item.expiry_date, now)
        if remaining <= 0:
            reminder.today.append(item.name)
        elif remaining == 1:
            reminder.tomorrow.append(item.name)
        else:
            reminder.soon.append(item.name)

    if reminder.today:
        reminder.title = TODAY_TITLE
        reminder.body = f"{_summarize(reminder.today)} expire today!"
    elif reminder.tomorrow:
        reminder.body = f"{_summarize(reminder.tomorrow)} expire tomorrow."
    elif reminder.soon:
        count = len(reminder.soon)
        plural = "s" if count > 1 else ""
        reminder.body = f"{count} item{plural} expiring soon. Check your kitchen!"
    else:
        return None
    return reminder


class ExpiryReminderService:
    """Polls the inventory for expiring items and sends one daily reminder."""

    def __init__(
        self,
        inventory: InventoryService,
        backend: NotificationBackend | None = None,
    ) -> None:
        self.inventory = inventory
        self.backend = backend or NullNotificationBackend()

    def build_reminder(self) -> ExpiryReminder | None:
        items = self.inventory.list_expiring_by()
        return compose_reminder(items, self.inventory.clock())

    def send_daily_reminder(self) -> ExpiryReminder | None:
        """Build and deliver today's reminder. Delivery failures are only logged."""
        reminder = self.build_reminder()
        if reminder is None:
            logger.info("No items expiring soon, no reminder sent")
            return None

        try:
            sent = self.backend.send(
                reminder.title,
                reminder.body,
                data={"type": "expiry-reminder"},
            )
        except Exception as e:
            logger.error(f"Failed to deliver expiry reminder: {e}")
            sent = False

        reminder.delivered = sent
        if sent:
            logger.info(f"Expiry reminder sent: {reminder.body}")
        return reminder
