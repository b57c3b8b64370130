"""Payment domain models.

Amounts are ``Money`` in major units; gateways speak minor units and the
conversion happens at the gateway boundary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from common.domain import EntityId, Money, UserId
from events.domain import EventId
from tickets.domain import TicketId


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Unique identifier for a Payment."""


class PaymentStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


@dataclass(frozen=True)
class Payment:
    id: PaymentId
    transaction_id: str
    payer_id: UserId
    payer_email: str
    event_id: EventId
    event_title: str
    creator_id: UserId
    ticket_id: TicketId | None
    amount: Money
    payment_method: str
    status: PaymentStatus
    gateway_reference: str
    authorization_url: str
    access_code: str
    description: str
    reminder: str | None
    paid_at: datetime | None
    refunded_at: datetime | None
    refund_reason: str
    failure_reason: str
    created_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED

    def is_made_by(self, user_id: UserId) -> bool:
        return self.payer_id == user_id

    def is_for_event_of(self, creator_id: UserId) -> bool:
        return self.creator_id == creator_id


@dataclass(frozen=True)
class NewPayment:
    transaction_id: str
    payer_id: UserId
    event_id: EventId
    amount: Money
    description: str
    reminder: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentStats:
    """Completed-payment rollup for one event."""

    total_revenue: Decimal
    completed_payments: int
    refunded_payments: int
    refunded_amount: Decimal

    @property
    def average_payment(self) -> Decimal:
        if not self.completed_payments:
            return Decimal("0.00")
        return (self.total_revenue / self.completed_payments).quantize(Decimal("0.01"))
