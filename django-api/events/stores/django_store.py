"""Django ORM implementation of the EventStore."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError
from django.db.models import F, QuerySet

from common.domain import UserId
from common.domain.pagination import Page, PageRequest
from events import models as orm
from events.domain import (
    Capacity,
    Event,
    EventFilters,
    EventId,
    EventReminder,
    EventStatus,
    Location,
    Money,
    Schedule,
)
from events.domain.errors import EventHasTicketsError
from events.stores.interfaces import EventStore


def to_domain(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.id),
        creator_id=UserId(row.creator_id),
        title=row.title,
        description=row.description,
        event_type=row.event_type,
        category=row.category,
        schedule=Schedule(starts_at=row.starts_at, ends_at=row.ends_at),
        location=Location(
            address=row.address,
            city=row.city,
            state=row.state,
            zip_code=row.zip_code,
            country=row.country,
            venue=row.venue,
            latitude=row.latitude,
            longitude=row.longitude,
        ),
        capacity=Capacity(row.capacity),
        tickets_available=row.tickets_available,
        price=Money(Decimal(row.ticket_price), row.currency),
        tags=tuple(row.tags or ()),
        image_url=row.image_url,
        banner_url=row.banner_url,
        status=EventStatus(row.status),
        is_featured=row.is_featured,
        default_reminder=row.default_reminder,
        attendee_count=row.attendee_count,
        created_at=row.created_at,
        updated_at=row.updated_at,
        reminders=tuple(
            EventReminder(id=r.id, channel=r.channel, hours_before=r.hours_before, sent=r.sent)
            for r in row.reminders.all()
        ),
    )


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    def _queryset(self) -> QuerySet[orm.Event]:
        return orm.Event.objects.prefetch_related("reminders")

    def list_published(self, filters: EventFilters, page: PageRequest) -> Page[Event]:
        qs = self._queryset().filter(status=EventStatus.PUBLISHED)
        if filters.category:
            qs = qs.filter(category=filters.category)
        if filters.city:
            qs = qs.filter(city__iexact=filters.city)
        if filters.event_type:
            qs = qs.filter(event_type=filters.event_type)
        if filters.search:
            qs = qs.filter(title__icontains=filters.search)
        total = qs.count()
        rows = qs.order_by("starts_at")[page.offset : page.offset + page.limit]
        return Page(items=tuple(to_domain(r) for r in rows), total=total, request=page)

    def list_by_creator(self, creator_id: UserId) -> list[Event]:
        rows = self._queryset().filter(creator_id=creator_id.value).order_by("-created_at")
        return [to_domain(r) for r in rows]

    def get_event(self, event_id: EventId) -> Event | None:
        row = self._queryset().filter(pk=event_id.value).first()
        return to_domain(row) if row else None

    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()

    @transaction.atomic
    def create_event(self, creator_id: UserId, fields: dict[str, Any], reminders: list[dict[str, Any]]) -> Event:
        row = orm.Event.objects.create(
            creator_id=creator_id.value,
            tickets_available=fields["capacity"],
            **fields,
        )
        orm.EventReminder.objects.bulk_create(orm.EventReminder(event=row, **r) for r in reminders)
        return self.get_event(EventId(row.id))

    @transaction.atomic
    def update_event(
        self, event_id: EventId, fields: dict[str, Any], reminders: list[dict[str, Any]] | None = None
    ) -> Event:
        row = orm.Event.objects.select_for_update().get(pk=event_id.value)
        if "capacity" in fields:
            sold = row.capacity - row.tickets_available
            fields = {**fields, "tickets_available": fields["capacity"] - sold}
        for name, value in fields.items():
            setattr(row, name, value)
        row.save()
        if reminders is not None:
            row.reminders.all().delete()
            orm.EventReminder.objects.bulk_create(orm.EventReminder(event=row, **r) for r in reminders)
        return self.get_event(event_id)

    def set_status(self, event_id: EventId, status: EventStatus) -> Event:
        row = orm.Event.objects.get(pk=event_id.value)
        row.status = status
        row.save(update_fields=["status", "updated_at"])
        return self.get_event(event_id)

    def delete_event(self, event_id: EventId) -> None:
        try:
            with transaction.atomic():
                orm.Event.objects.filter(pk=event_id.value).delete()
        except ProtectedError:
            raise EventHasTicketsError()

    def reserve_ticket(self, event_id: EventId) -> bool:
        updated = orm.Event.objects.filter(
            pk=event_id.value,
            status=EventStatus.PUBLISHED,
            tickets_available__gt=0,
        ).update(
            tickets_available=F("tickets_available") - 1,
            attendee_count=F("attendee_count") + 1,
        )
        return updated == 1

    @transaction.atomic
    def advance_lifecycle(self, now: datetime) -> list[Event]:
        ended = list(
            orm.Event.objects.filter(
                status__in=[EventStatus.PUBLISHED, EventStatus.ONGOING],
                ends_at__lte=now,
            ).values_list("pk", flat=True)
        )
        orm.Event.objects.filter(pk__in=ended).update(status=EventStatus.COMPLETED, updated_at=now)
        started = list(
            orm.Event.objects.filter(
                status=EventStatus.PUBLISHED,
                starts_at__lte=now,
            ).values_list("pk", flat=True)
        )
        orm.Event.objects.filter(pk__in=started).update(status=EventStatus.ONGOING, updated_at=now)
        return [to_domain(r) for r in self._queryset().filter(pk__in=[*ended, *started])]

    def due_creator_reminders(self, now: datetime) -> list[tuple[Event, EventReminder]]:
        rows = (
            orm.EventReminder.objects.select_related("event")
            .filter(
                sent=False,
                event__status=EventStatus.PUBLISHED,
                event__starts_at__gt=now,
            )
            .order_by("event__starts_at")
        )
        due = []
        for row in rows:
            if row.event.starts_at - timedelta(hours=row.hours_before) <= now:
                reminder = EventReminder(
                    id=row.id, channel=row.channel, hours_before=row.hours_before, sent=row.sent
                )
                due.append((to_domain(row.event), reminder))
        return due

    def mark_reminder_sent(self, reminder_id: UUID) -> None:
        orm.EventReminder.objects.filter(pk=reminder_id).update(sent=True)
