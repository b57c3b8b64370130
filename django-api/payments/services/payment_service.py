"""Payment-gated ticket issuance.

A purchase is two round trips: ``initialize_payment`` opens a hosted
checkout for a pending Payment, and ``verify_payment`` (called by the
client after redirect, or by the gateway webhook) asks the gateway for the
authoritative result and issues the ticket. Verification is idempotent:
the payment row is locked while the ticket is issued, so whichever caller
gets there second sees a completed payment and the same ticket.

If the charge went through but the ticket cannot be issued (the event sold
out or the buyer got a ticket meanwhile), the charge is refunded at the
gateway before the error reaches the caller.
"""

import json
import logging
import secrets

from django.db import transaction
from django.utils import timezone

from common.domain import DomainValidationError, UserId
from eventful.conf import get_setting
from events.domain.errors import EventNotFoundError, NotEventOwnerError
from events.services import parse_event_id
from events.stores.interfaces import EventStore
from notifications.services import NotificationService
from payments.domain import NewPayment, Payment, PaymentStats, PaymentStatus
from payments.domain.errors import (
    InvalidWebhookSignatureError,
    PaymentGatewayError,
    PaymentNotCompletedError,
    PaymentNotFoundError,
    PaymentVerificationError,
)
from payments.gateways import GatewayTransaction, PaymentGateway
from payments.stores.interfaces import PaymentStore
from tickets.domain import Ticket
from tickets.domain.errors import DuplicateTicketError, SoldOutError
from tickets.services import TicketIssuanceService
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

WEBHOOK_CHARGE_SUCCESS = "charge.success"


def generate_transaction_id() -> str:
    return f"TXN-{secrets.token_hex(6).upper()}"


class PaymentService:
    def __init__(
        self,
        store: PaymentStore,
        gateway: PaymentGateway,
        issuance: TicketIssuanceService,
        tickets: TicketStore,
        events: EventStore,
        notifications: NotificationService,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._issuance = issuance
        self._tickets = tickets
        self._events = events
        self._notifications = notifications

    def initialize_payment(
        self, user_id: UserId, event_id: str, email: str | None = None, reminder: str | None = None
    ) -> Payment:
        """Create a pending payment and open a checkout for it at the gateway.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            EventIsFreeError: If the event costs nothing.
            EventNotAvailableError: If the event is not published.
            SoldOutError: If no tickets are left.
            DuplicateTicketError: If the caller already holds a ticket.
            PaymentGatewayError: If the gateway refuses or cannot be reached;
                the payment is then marked failed.
        """
        user, event = self._issuance.prepare_purchase(user_id, event_id)
        transaction_id = generate_transaction_id()
        metadata = {
            "event_id": str(event.id),
            "user_id": str(user.id),
            "event_title": event.title,
            "reminder": reminder,
        }
        payment = self._store.create_payment(
            NewPayment(
                transaction_id=transaction_id,
                payer_id=user.id,
                event_id=event.id,
                amount=event.price,
                description=f"Ticket for {event.title}",
                reminder=reminder,
                metadata=metadata,
            )
        )
        try:
            session = self._gateway.initialize(
                reference=transaction_id,
                email=email or user.email,
                amount=event.price.minor_units,
                currency=event.price.currency,
                callback_url=get_setting("PAYMENT_CALLBACK_URL"),
                metadata=metadata,
            )
        except PaymentGatewayError as exc:
            self._store.mark_failed(payment.id, exc.message)
            logger.warning("Payment %s could not be initialized: %s", transaction_id, exc.message)
            raise
        payment = self._store.attach_checkout(payment.id, session.authorization_url, session.access_code)
        logger.info("Payment %s initialized by %s for event %s", transaction_id, user.id, event.id)
        return payment

    def verify_payment(self, reference: str, user_id: UserId | None = None) -> tuple[Payment, Ticket]:
        """Confirm a charge with the gateway and issue the ticket it paid for.

        ``user_id`` restricts the lookup to the caller's own payments; the
        webhook path passes None.

        Raises:
            PaymentNotFoundError: If there is no such payment (for this user).
            PaymentVerificationError: If the gateway does not report success,
                the charged amount differs, or the payment already failed.
            PaymentGatewayError: If the gateway cannot be reached.
            SoldOutError, DuplicateTicketError: If the ticket could not be
                issued; the charge has been refunded.
        """
        payment = self._store.get_by_transaction(reference)
        if payment is None or (user_id is not None and not payment.is_made_by(user_id)):
            raise PaymentNotFoundError()
        if payment.is_completed:
            return payment, self._ticket_of(payment)
        if payment.status != PaymentStatus.PENDING:
            raise PaymentVerificationError(payment.status, "This payment can no longer be verified")

        state = self._gateway.verify(reference)
        self._check_charge(payment, state)

        try:
            with transaction.atomic():
                locked = self._store.lock_by_transaction(reference)
                if locked.is_completed:
                    return locked, self._ticket_of(locked)
                if locked.status != PaymentStatus.PENDING:
                    raise PaymentVerificationError(locked.status, "This payment can no longer be verified")
                ticket = self._issuance.issue_paid_ticket(
                    locked.payer_id, locked.event_id, locked.amount, locked.reminder
                )
                completed = self._store.mark_completed(
                    locked.id,
                    ticket.id,
                    state.paid_at or timezone.now(),
                    state.gateway_reference,
                    state.raw,
                )
                self._notifications.payment_confirmation(ticket, completed.amount, completed.transaction_id)
        except (SoldOutError, DuplicateTicketError) as exc:
            current = self._store.get_by_transaction(reference)
            if current.is_completed:
                return current, self._ticket_of(current)
            self._refund_unfulfilled(current, exc.message)
            raise

        logger.info("Payment %s completed; ticket %s issued", reference, ticket.ticket_number)
        return completed, ticket

    def refund_payment(self, transaction_id: str, user_id: UserId, reason: str | None = None) -> Payment:
        """Refund a completed payment. Only the event's creator may do this.

        The ticket and the event inventory are left as they are.

        Raises:
            PaymentNotFoundError: If there is no such payment.
            NotEventOwnerError: If the caller did not create the event.
            PaymentNotCompletedError: If the payment is not completed.
            PaymentGatewayError: If the gateway refuses the refund.
        """
        with transaction.atomic():
            payment = self._store.lock_by_transaction(transaction_id)
            if payment is None:
                raise PaymentNotFoundError()
            if not payment.is_for_event_of(user_id):
                raise NotEventOwnerError()
            if not payment.is_completed:
                raise PaymentNotCompletedError(payment.status)
            refund = self._gateway.refund(payment.transaction_id, reason=reason or "")
            refunded = self._store.mark_refunded(
                payment.id, reason or "Refunded by the organiser", timezone.now(), refund.raw
            )
        logger.info("Payment %s refunded by %s", transaction_id, user_id)
        return refunded

    def list_my_payments(self, user_id: UserId) -> list[Payment]:
        return self._store.list_for_payer(user_id)

    def event_payments(self, creator_id: UserId, event_id: str) -> tuple[list[Payment], PaymentStats]:
        parsed = parse_event_id(event_id)
        event = self._events.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        if not event.is_owned_by(creator_id):
            raise NotEventOwnerError()
        return self._store.list_for_event(parsed), self._store.event_stats(parsed)

    def handle_webhook(self, body: bytes, signature: str) -> Payment | None:
        """Process a signed gateway callback.

        Only successful charges are acted on; other events are acknowledged
        and ignored.

        Raises:
            InvalidWebhookSignatureError: If the signature does not match.
        """
        if not self._gateway.verify_signature(body, signature):
            logger.warning("Rejected webhook with invalid signature")
            raise InvalidWebhookSignatureError()
        try:
            payload = json.loads(body)
        except ValueError:
            raise DomainValidationError("Malformed webhook payload")
        event_type = payload.get("event")
        if event_type != WEBHOOK_CHARGE_SUCCESS:
            logger.info("Ignoring webhook event %s", event_type)
            return None
        reference = (payload.get("data") or {}).get("reference")
        if not reference:
            raise DomainValidationError("Webhook payload has no transaction reference")
        payment, _ = self.verify_payment(reference)
        return payment

    def _check_charge(self, payment: Payment, state: GatewayTransaction) -> None:
        if not state.succeeded:
            if state.is_terminal_failure:
                self._store.mark_failed(payment.id, f"Gateway reported {state.status}", state.raw)
            logger.info("Payment %s not successful at gateway: %s", payment.transaction_id, state.status)
            raise PaymentVerificationError(state.status)
        expected = payment.amount
        if state.amount != expected.minor_units or state.currency.upper() != expected.currency.upper():
            self._store.mark_failed(
                payment.id,
                f"Charged {state.amount} {state.currency}, expected {expected.minor_units} {expected.currency}",
                state.raw,
            )
            logger.warning("Payment %s amount mismatch", payment.transaction_id)
            raise PaymentVerificationError(state.status, "Payment amount does not match the ticket price")

    def _refund_unfulfilled(self, payment: Payment, cause: str) -> None:
        reason = f"Automatic refund: {cause}"
        try:
            refund = self._gateway.refund(payment.transaction_id, reason=reason)
        except PaymentGatewayError as exc:
            logger.error("Automatic refund of payment %s failed: %s", payment.transaction_id, exc.message)
            self._store.mark_failed(payment.id, f"{cause}; automatic refund failed: {exc.message}")
            return
        self._store.mark_refunded(payment.id, reason, timezone.now(), refund.raw)
        logger.warning("Payment %s refunded because the ticket could not be issued: %s", payment.transaction_id, cause)

    def _ticket_of(self, payment: Payment) -> Ticket:
        return self._tickets.get_ticket(payment.ticket_id)
