"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from common.domain import UserId
from events.domain import EventId
from payments.domain import NewPayment, Payment, PaymentId, PaymentStats
from tickets.domain import TicketId


class PaymentStore(ABC):
    """Interface for payment persistence operations."""

    @abstractmethod
    def get_by_transaction(self, transaction_id: str) -> Payment | None:
        """Return a payment by its transaction ID, or None if not found."""
        ...

    @abstractmethod
    def lock_by_transaction(self, transaction_id: str) -> Payment | None:
        """Like get_by_transaction, holding a row lock until the surrounding
        transaction ends. Must be called inside ``transaction.atomic``."""
        ...

    @abstractmethod
    def create_payment(self, payment: NewPayment) -> Payment:
        """Persist a new pending payment."""
        ...

    @abstractmethod
    def attach_checkout(self, payment_id: PaymentId, authorization_url: str, access_code: str) -> Payment:
        """Record the hosted checkout the gateway opened for a payment."""
        ...

    @abstractmethod
    def mark_completed(
        self,
        payment_id: PaymentId,
        ticket_id: TicketId,
        paid_at: datetime,
        gateway_reference: str,
        gateway_response: dict[str, Any],
    ) -> Payment:
        """Transition a payment to completed and link the issued ticket."""
        ...

    @abstractmethod
    def mark_failed(
        self, payment_id: PaymentId, reason: str, gateway_response: dict[str, Any] | None = None
    ) -> Payment:
        """Transition a payment to failed."""
        ...

    @abstractmethod
    def mark_refunded(
        self,
        payment_id: PaymentId,
        reason: str,
        refunded_at: datetime,
        gateway_response: dict[str, Any] | None = None,
    ) -> Payment:
        """Transition a payment to refunded."""
        ...

    @abstractmethod
    def list_for_payer(self, payer_id: UserId) -> list[Payment]:
        """Return a user's payments, newest first."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Payment]:
        """Return an event's payments, newest first."""
        ...

    @abstractmethod
    def event_stats(self, event_id: EventId) -> PaymentStats:
        """Return revenue and refund counters for an event."""
        ...
