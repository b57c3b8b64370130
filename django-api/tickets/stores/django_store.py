"""Django ORM implementation of the TicketStore."""

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from django.db import IntegrityError, transaction
from django.db.models import Count, Q, QuerySet

from common.domain import Money, UserId
from common.domain.pagination import Page, PageRequest
from events.domain import EventId
from events.stores.interfaces import EventStore
from tickets import models as orm
from tickets.domain import (
    EventSummary,
    NewTicket,
    Ticket,
    TicketHolder,
    TicketId,
    TicketStats,
    TicketStatus,
)
from tickets.domain.errors import DuplicateTicketError, SoldOutError
from tickets.stores.interfaces import TicketStore

SOLD_STATUSES = [TicketStatus.ISSUED, TicketStatus.PAID, TicketStatus.USED]


def to_domain(row: orm.Ticket) -> Ticket:
    event, user = row.event, row.user
    return Ticket(
        id=TicketId(row.id),
        ticket_number=row.ticket_number,
        event=EventSummary(
            id=EventId(event.id),
            creator_id=UserId(event.creator_id),
            title=event.title,
            starts_at=event.starts_at,
            ends_at=event.ends_at,
            venue=event.venue,
            city=event.city,
        ),
        holder=TicketHolder(
            id=UserId(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
        ),
        status=TicketStatus(row.status),
        price=Money(Decimal(row.price), row.currency),
        qr_code_data=row.qr_code_data,
        reminder=row.reminder,
        purchased_at=row.purchased_at,
        scanned_at=row.scanned_at,
        created_at=row.created_at,
    )


class DjangoTicketStore(TicketStore):
    """Relational ticket store using Django ORM.

    Inventory lives on the event, so issuance goes through the event
    store's atomic reservation.
    """

    def __init__(self, events: EventStore) -> None:
        self._events = events

    def _queryset(self) -> QuerySet[orm.Ticket]:
        return orm.Ticket.objects.select_related("event", "user")

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        row = self._queryset().filter(pk=ticket_id.value).first()
        return to_domain(row) if row else None

    def get_by_number(self, ticket_number: str) -> Ticket | None:
        row = self._queryset().filter(ticket_number=ticket_number.strip().upper()).first()
        return to_domain(row) if row else None

    def find_active(self, user_id: UserId, event_id: EventId) -> Ticket | None:
        row = (
            self._queryset()
            .filter(user_id=user_id.value, event_id=event_id.value)
            .exclude(status=TicketStatus.CANCELLED)
            .first()
        )
        return to_domain(row) if row else None

    def list_for_user(self, user_id: UserId, page: PageRequest) -> Page[Ticket]:
        qs = self._queryset().filter(user_id=user_id.value)
        total = qs.count()
        rows = qs.order_by("-created_at")[page.offset : page.offset + page.limit]
        return Page(items=tuple(to_domain(r) for r in rows), total=total, request=page)

    def list_for_event(self, event_id: EventId, statuses: Iterable[TicketStatus]) -> list[Ticket]:
        rows = (
            self._queryset()
            .filter(event_id=event_id.value, status__in=list(statuses))
            .order_by("-purchased_at")
        )
        return [to_domain(r) for r in rows]

    def issue_ticket(self, ticket: NewTicket) -> Ticket:
        with transaction.atomic():
            if not self._events.reserve_ticket(ticket.event_id):
                raise SoldOutError()
            try:
                with transaction.atomic():
                    row = orm.Ticket.objects.create(
                        ticket_number=ticket.ticket_number,
                        event_id=ticket.event_id.value,
                        user_id=ticket.user_id.value,
                        status=ticket.status,
                        price=ticket.price.amount,
                        currency=ticket.price.currency,
                        qr_code_data=ticket.qr_code_data,
                        reminder=ticket.reminder,
                    )
            except IntegrityError:
                existing = self.find_active(ticket.user_id, ticket.event_id)
                if existing is None:
                    raise
                # Leaving the outer block by exception rolls back the reservation.
                raise DuplicateTicketError(str(existing.id))
        return self.get_ticket(TicketId(row.id))

    def mark_used(self, ticket_id: TicketId, scanned_by: UserId, now: datetime) -> bool:
        updated = orm.Ticket.objects.filter(
            pk=ticket_id.value,
            status__in=[TicketStatus.ISSUED, TicketStatus.PAID],
        ).update(status=TicketStatus.USED, scanned_at=now, scanned_by_id=scanned_by.value, updated_at=now)
        return updated == 1

    def update_reminder(self, ticket_id: TicketId, reminder: str) -> Ticket:
        row = orm.Ticket.objects.get(pk=ticket_id.value)
        row.reminder = reminder
        row.save(update_fields=["reminder", "updated_at"])
        return self.get_ticket(ticket_id)

    def event_stats(self, event_id: EventId) -> TicketStats:
        counts = orm.Ticket.objects.filter(event_id=event_id.value).aggregate(
            sold=Count("pk", filter=Q(status__in=SOLD_STATUSES)),
            used=Count("pk", filter=Q(status=TicketStatus.USED)),
            refunded=Count("pk", filter=Q(status=TicketStatus.REFUNDED)),
            cancelled=Count("pk", filter=Q(status=TicketStatus.CANCELLED)),
        )
        return TicketStats(**counts)
