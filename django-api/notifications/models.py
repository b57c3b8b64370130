"""Django ORM models (persistence layer) for notifications.

A ``Notification`` is what the user sees; each ``NotificationChannel`` row
is one delivery of it (the outbox the scheduler drains).
"""

import uuid

from django.conf import settings
from django.db import models

from events.models import Event
from tickets.models import Ticket


class NotificationType(models.TextChoices):
    REMINDER = "reminder", "Reminder"
    STATUS_UPDATE = "status_update", "Status update"
    PAYMENT_CONFIRMATION = "payment_confirmation", "Payment confirmation"
    TICKET_CONFIRMATION = "ticket_confirmation", "Ticket confirmation"
    CANCELLATION = "cancellation", "Cancellation"


class Channel(models.TextChoices):
    EMAIL = "email", "Email"
    SMS = "sms", "SMS"
    IN_APP = "in_app", "In-app"


class DeliveryStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    SENT = "sent", "Sent"
    FAILED = "failed", "Failed"
    CANCELLED = "cancelled", "Cancelled"


class Notification(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="notifications")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="notifications")
    ticket = models.ForeignKey(
        Ticket, on_delete=models.PROTECT, related_name="notifications", blank=True, null=True
    )
    type = models.CharField(max_length=20, choices=NotificationType.choices)
    title = models.CharField(max_length=200)
    message = models.TextField(max_length=1000)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(blank=True, null=True)
    scheduled_for = models.DateTimeField(blank=True, null=True)
    sent_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
            models.Index(fields=["user", "-created_at"], name="notif_user_created_idx"),
            models.Index(fields=["scheduled_for"], name="notif_scheduled_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.type}: {self.title}"


class NotificationChannel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    notification = models.ForeignKey(Notification, on_delete=models.CASCADE, related_name="channels")
    channel = models.CharField(max_length=10, choices=Channel.choices)
    status = models.CharField(max_length=10, choices=DeliveryStatus.choices, default=DeliveryStatus.PENDING)
    attempts = models.PositiveSmallIntegerField(default=0)
    sent_at = models.DateTimeField(blank=True, null=True)
    error = models.TextField(blank=True)
    next_attempt_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["status", "next_attempt_at"], name="notif_channel_due_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["notification", "channel"], name="notif_one_row_per_channel"),
        ]

    def __str__(self) -> str:
        return f"{self.channel} ({self.status})"
