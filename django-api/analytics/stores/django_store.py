"""Django ORM implementation of the AnalyticsStore.

Ticket and payment totals are correlated subqueries rather than joins so
that the two one-to-many relations do not multiply each other's rows.
"""

from decimal import Decimal

from django.db.models import Count, DecimalField, IntegerField, OuterRef, QuerySet, Subquery, Sum, Value
from django.db.models.functions import Coalesce

from analytics.domain import EventAnalytics
from analytics.stores.interfaces import AnalyticsStore
from common.domain import UserId
from events import models as events_orm
from events.domain import EventId, EventStatus
from payments.models import Payment, PaymentStatus
from tickets.models import Ticket, TicketStatus

SOLD = [TicketStatus.ISSUED, TicketStatus.PAID, TicketStatus.USED]
MONEY = DecimalField(max_digits=12, decimal_places=2)


def _ticket_count(*statuses: str) -> Coalesce:
    counts = (
        Ticket.objects.filter(event=OuterRef("pk"), status__in=statuses)
        .order_by()
        .values("event")
        .annotate(n=Count("pk"))
        .values("n")
    )
    return Coalesce(Subquery(counts, output_field=IntegerField()), Value(0))


def _payment_count(status: str) -> Coalesce:
    rows = (
        Payment.objects.filter(event=OuterRef("pk"), status=status)
        .order_by()
        .values("event")
        .annotate(n=Count("pk"))
        .values("n")
    )
    return Coalesce(Subquery(rows, output_field=IntegerField()), Value(0))


def _payment_total(status: str) -> Coalesce:
    rows = (
        Payment.objects.filter(event=OuterRef("pk"), status=status)
        .order_by()
        .values("event")
        .annotate(total=Sum("amount"))
        .values("total")
    )
    return Coalesce(Subquery(rows, output_field=MONEY), Value(Decimal("0.00"), output_field=MONEY))


def to_domain(row: events_orm.Event) -> EventAnalytics:
    return EventAnalytics(
        event_id=EventId(row.id),
        title=row.title,
        status=row.status,
        starts_at=row.starts_at,
        currency=row.currency,
        capacity=row.capacity,
        tickets_available=row.tickets_available,
        attendee_count=row.attendee_count,
        tickets_sold=row.sold,
        tickets_used=row.used,
        tickets_refunded=row.refunded_tickets,
        revenue=Decimal(row.revenue),
        completed_payments=row.completed_payments,
        refunds=row.refunds,
        refunded_amount=Decimal(row.refunded_amount),
    )


class DjangoAnalyticsStore(AnalyticsStore):
    """Relational analytics store using Django ORM."""

    def _queryset(self) -> QuerySet[events_orm.Event]:
        return events_orm.Event.objects.annotate(
            sold=_ticket_count(*SOLD),
            used=_ticket_count(TicketStatus.USED),
            refunded_tickets=_ticket_count(TicketStatus.REFUNDED),
            revenue=_payment_total(PaymentStatus.COMPLETED),
            completed_payments=_payment_count(PaymentStatus.COMPLETED),
            refunds=_payment_count(PaymentStatus.REFUNDED),
            refunded_amount=_payment_total(PaymentStatus.REFUNDED),
        )

    def for_event(self, event_id: EventId) -> EventAnalytics | None:
        row = self._queryset().filter(pk=event_id.value).first()
        return to_domain(row) if row else None

    def for_creator(self, creator_id: UserId) -> list[EventAnalytics]:
        rows = self._queryset().filter(creator_id=creator_id.value).order_by("-created_at")
        return [to_domain(r) for r in rows]

    def published_count(self, creator_id: UserId) -> int:
        return events_orm.Event.objects.filter(
            creator_id=creator_id.value, status=EventStatus.PUBLISHED
        ).count()
