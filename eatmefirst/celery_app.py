"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from eatmefirst.config import get_settings

settings = get_settings()

app = Celery(
    "eatmefirst",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["eatmefirst.tasks.reminders"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.timezone,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,  # 4 minutes soft limit
    beat_schedule={
        "daily-expiry-reminder": {
            "task": "eatmefirst.tasks.reminders.send_expiry_reminder",
            "schedule": crontab(hour=settings.reminder_hour, minute=settings.reminder_minute),
        },
    },
)
