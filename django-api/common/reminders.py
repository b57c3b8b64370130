"""Reminder offsets offered to creators and attendees."""

from datetime import datetime, timedelta

from django.db import models


class ReminderOffset(models.TextChoices):
    ONE_HOUR = "1_hour", "1 Hour Before"
    ONE_DAY = "1_day", "1 Day Before"
    THREE_DAYS = "3_days", "3 Days Before"
    ONE_WEEK = "1_week", "1 Week Before"
    TWO_WEEKS = "2_weeks", "2 Weeks Before"


OFFSETS = {
    ReminderOffset.ONE_HOUR: timedelta(hours=1),
    ReminderOffset.ONE_DAY: timedelta(days=1),
    ReminderOffset.THREE_DAYS: timedelta(days=3),
    ReminderOffset.ONE_WEEK: timedelta(weeks=1),
    ReminderOffset.TWO_WEEKS: timedelta(weeks=2),
}


def reminder_time(starts_at: datetime, reminder: str) -> datetime:
    """Return when a reminder for an event starting at ``starts_at`` is due."""
    return starts_at - OFFSETS[ReminderOffset(reminder)]
