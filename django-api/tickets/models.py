"""Django ORM models (persistence layer) for tickets."""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from common.reminders import ReminderOffset
from events.models import Event


class TicketStatus(models.TextChoices):
    ISSUED = "issued", "Issued"
    PAID = "paid", "Paid"
    USED = "used", "Used"
    CANCELLED = "cancelled", "Cancelled"
    REFUNDED = "refunded", "Refunded"


class Ticket(models.Model):
    """Persistence model for an admission ticket."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ticket_number = models.CharField(max_length=20, unique=True)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="tickets")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="tickets")
    status = models.CharField(max_length=10, choices=TicketStatus.choices, default=TicketStatus.ISSUED)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="NGN")
    qr_code_data = models.TextField()
    reminder = models.CharField(max_length=10, choices=ReminderOffset.choices, blank=True, null=True)
    purchased_at = models.DateTimeField(default=timezone.now)
    scanned_at = models.DateTimeField(blank=True, null=True)
    scanned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="scanned_tickets",
        blank=True,
        null=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event", "status"], name="tickets_event_status_idx"),
            models.Index(fields=["user", "-created_at"], name="tickets_user_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "event"],
                condition=~Q(status=TicketStatus.CANCELLED),
                name="tickets_one_active_per_user_event",
            ),
        ]

    def __str__(self) -> str:
        return self.ticket_number
