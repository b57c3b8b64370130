"""Django ORM implementation of the PaymentStore."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from django.db.models import Count, DecimalField, Q, QuerySet, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from common.domain import Money, UserId
from events.domain import EventId
from payments import models as orm
from payments.domain import NewPayment, Payment, PaymentId, PaymentStats, PaymentStatus
from payments.stores.interfaces import PaymentStore
from tickets.domain import TicketId

ZERO = Value(Decimal("0.00"), output_field=DecimalField(max_digits=12, decimal_places=2))


def to_domain(row: orm.Payment) -> Payment:
    return Payment(
        id=PaymentId(row.id),
        transaction_id=row.transaction_id,
        payer_id=UserId(row.payer_id),
        payer_email=row.payer.email,
        event_id=EventId(row.event_id),
        event_title=row.event.title,
        creator_id=UserId(row.event.creator_id),
        ticket_id=TicketId(row.ticket_id) if row.ticket_id else None,
        amount=Money(Decimal(row.amount), row.currency),
        payment_method=row.payment_method,
        status=PaymentStatus(row.status),
        gateway_reference=row.gateway_reference,
        authorization_url=row.authorization_url,
        access_code=row.access_code,
        description=row.description,
        reminder=row.reminder,
        paid_at=row.paid_at,
        refunded_at=row.refunded_at,
        refund_reason=row.refund_reason,
        failure_reason=row.failure_reason,
        created_at=row.created_at,
    )


class DjangoPaymentStore(PaymentStore):
    """Relational payment store using Django ORM."""

    def _queryset(self) -> QuerySet[orm.Payment]:
        return orm.Payment.objects.select_related("payer", "event")

    def _get(self, payment_id: PaymentId) -> Payment:
        return to_domain(self._queryset().get(pk=payment_id.value))

    def _update(self, payment_id: PaymentId, **fields: Any) -> Payment:
        orm.Payment.objects.filter(pk=payment_id.value).update(updated_at=timezone.now(), **fields)
        return self._get(payment_id)

    def get_by_transaction(self, transaction_id: str) -> Payment | None:
        row = self._queryset().filter(transaction_id=transaction_id).first()
        return to_domain(row) if row else None

    def lock_by_transaction(self, transaction_id: str) -> Payment | None:
        # Lock only the payment row; the joined rows stay unlocked.
        row = (
            self._queryset()
            .select_for_update(of=("self",))
            .filter(transaction_id=transaction_id)
            .first()
        )
        return to_domain(row) if row else None

    def create_payment(self, payment: NewPayment) -> Payment:
        row = orm.Payment.objects.create(
            transaction_id=payment.transaction_id,
            payer_id=payment.payer_id.value,
            event_id=payment.event_id.value,
            amount=payment.amount.amount,
            currency=payment.amount.currency,
            description=payment.description,
            reminder=payment.reminder,
            metadata=payment.metadata,
        )
        return self._get(PaymentId(row.id))

    def attach_checkout(self, payment_id: PaymentId, authorization_url: str, access_code: str) -> Payment:
        return self._update(payment_id, authorization_url=authorization_url, access_code=access_code)

    def mark_completed(
        self,
        payment_id: PaymentId,
        ticket_id: TicketId,
        paid_at: datetime,
        gateway_reference: str,
        gateway_response: dict[str, Any],
    ) -> Payment:
        return self._update(
            payment_id,
            status=PaymentStatus.COMPLETED,
            ticket_id=ticket_id.value,
            paid_at=paid_at,
            gateway_reference=gateway_reference,
            gateway_response=gateway_response,
        )

    def mark_failed(
        self, payment_id: PaymentId, reason: str, gateway_response: dict[str, Any] | None = None
    ) -> Payment:
        fields: dict[str, Any] = {"status": PaymentStatus.FAILED, "failure_reason": reason[:500]}
        if gateway_response is not None:
            fields["gateway_response"] = gateway_response
        return self._update(payment_id, **fields)

    def mark_refunded(
        self,
        payment_id: PaymentId,
        reason: str,
        refunded_at: datetime,
        gateway_response: dict[str, Any] | None = None,
    ) -> Payment:
        fields: dict[str, Any] = {
            "status": PaymentStatus.REFUNDED,
            "refund_reason": reason[:500],
            "refunded_at": refunded_at,
        }
        if gateway_response is not None:
            fields["gateway_response"] = gateway_response
        return self._update(payment_id, **fields)

    def list_for_payer(self, payer_id: UserId) -> list[Payment]:
        return [to_domain(r) for r in self._queryset().filter(payer_id=payer_id.value).order_by("-created_at")]

    def list_for_event(self, event_id: EventId) -> list[Payment]:
        return [to_domain(r) for r in self._queryset().filter(event_id=event_id.value).order_by("-created_at")]

    def event_stats(self, event_id: EventId) -> PaymentStats:
        completed = Q(status=PaymentStatus.COMPLETED)
        refunded = Q(status=PaymentStatus.REFUNDED)
        totals = orm.Payment.objects.filter(event_id=event_id.value).aggregate(
            total_revenue=Coalesce(Sum("amount", filter=completed), ZERO),
            completed_payments=Count("pk", filter=completed),
            refunded_payments=Count("pk", filter=refunded),
            refunded_amount=Coalesce(Sum("amount", filter=refunded), ZERO),
        )
        return PaymentStats(**totals)
