"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from common.reminders import ReminderOffset


class EventStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"
    ONGOING = "ongoing", "Ongoing"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class EventType(models.TextChoices):
    CONCERT = "concert", "Concert"
    THEATER = "theater", "Theater"
    SPORTS = "sports", "Sports"
    CONFERENCE = "conference", "Conference"
    MEETUP = "meetup", "Meetup"
    WORKSHOP = "workshop", "Workshop"
    FESTIVAL = "festival", "Festival"
    OTHER = "other", "Other"


class Category(models.TextChoices):
    MUSIC = "music", "Music"
    SPORTS = "sports", "Sports"
    ENTERTAINMENT = "entertainment", "Entertainment"
    EDUCATION = "education", "Education"
    BUSINESS = "business", "Business"
    OTHER = "other", "Other"


class Event(models.Model):
    """Persistence model for events. Owns the ticket inventory counters."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="events"
    )
    title = models.CharField(max_length=150)
    description = models.TextField(max_length=5000)
    event_type = models.CharField(max_length=20, choices=EventType.choices)
    category = models.CharField(max_length=20, choices=Category.choices)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    venue = models.CharField(max_length=255, blank=True)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100)
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)
    capacity = models.PositiveIntegerField()
    tickets_available = models.PositiveIntegerField()
    ticket_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="NGN")
    tags = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    banner_url = models.URLField(max_length=500, blank=True, null=True)
    status = models.CharField(max_length=10, choices=EventStatus.choices, default=EventStatus.DRAFT)
    is_featured = models.BooleanField(default=False)
    default_reminder = models.CharField(
        max_length=10, choices=ReminderOffset.choices, default=ReminderOffset.ONE_DAY
    )
    attendee_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="events_created_idx"),
            models.Index(fields=["status", "starts_at"], name="events_status_start_idx"),
            models.Index(fields=["creator"], name="events_creator_idx"),
            models.Index(fields=["category"], name="events_category_idx"),
            models.Index(fields=["city"], name="events_city_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(tickets_available__lte=F("capacity")),
                name="events_available_within_capacity",
            ),
            models.CheckConstraint(
                condition=Q(ends_at__gt=F("starts_at")),
                name="events_ends_after_start",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class ReminderChannel(models.TextChoices):
    EMAIL = "email", "Email"
    SMS = "sms", "SMS"


class EventReminder(models.Model):
    """Persistence model for a creator's reminder about their own event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="reminders")
    channel = models.CharField(max_length=10, choices=ReminderChannel.choices, default=ReminderChannel.EMAIL)
    hours_before = models.PositiveIntegerField()
    sent = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-hours_before"]
        indexes = [
            models.Index(fields=["sent"], name="events_reminder_sent_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event.title} - {self.hours_before}h ({self.channel})"
