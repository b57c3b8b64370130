"""Django ORM models (persistence layer) for payments.

A Payment is created pending when checkout starts and is completed only
after the gateway confirms the charge; the ticket link is filled in then.
"""

import uuid

from django.conf import settings
from django.db import models

from common.reminders import ReminderOffset
from events.models import Event
from tickets.models import Ticket


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


class PaymentMethod(models.TextChoices):
    PAYSTACK = "paystack", "Paystack"
    CARD = "card", "Card"
    BANK_TRANSFER = "bank_transfer", "Bank transfer"


class Payment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="payments")
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="payments")
    ticket = models.ForeignKey(Ticket, on_delete=models.PROTECT, related_name="payments", blank=True, null=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default="NGN")
    payment_method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.PAYSTACK
    )
    status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    transaction_id = models.CharField(max_length=20, unique=True)
    gateway_reference = models.CharField(max_length=100, blank=True)
    authorization_url = models.URLField(max_length=500, blank=True)
    access_code = models.CharField(max_length=100, blank=True)
    description = models.CharField(max_length=255)
    reminder = models.CharField(max_length=10, choices=ReminderOffset.choices, blank=True, null=True)
    paid_at = models.DateTimeField(blank=True, null=True)
    refunded_at = models.DateTimeField(blank=True, null=True)
    refund_reason = models.CharField(max_length=500, blank=True)
    failure_reason = models.CharField(max_length=500, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    gateway_response = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["payer", "-created_at"], name="payments_payer_created_idx"),
            models.Index(fields=["event", "status"], name="payments_event_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.transaction_id} ({self.status})"
