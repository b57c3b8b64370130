"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
import uuid
from datetime import datetime
from typing import Any
from urllib.parse import quote

from django.core.cache import cache
from django.utils import timezone

from common.domain import UserId
from common.domain.pagination import Page, PageRequest
from eventful.conf import get_setting
from events import cache as keys
from events.domain import Event, EventFilters, EventId, EventStatus, ShareLinks
from events.domain.errors import (
    EventHasTicketsError,
    EventLockedError,
    EventNotFoundError,
    InvalidCapacityError,
    InvalidEventIdError,
    InvalidScheduleError,
    InvalidStatusTransitionError,
    NotEventOwnerError,
)
from events.signals import event_cancelled, event_rescheduled
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_events(self, filters: EventFilters, page: PageRequest) -> Page[Event]:
        """Return one page of published events, cached per filter set."""
        key = keys.list_key(f"{filters.cache_fragment()}:p{page.page}:l{page.limit}")
        cached = cache.get(key)
        if cached is not None:
            return cached
        result = self._store.list_published(filters, page)
        cache.set(key, result, get_setting("EVENT_CACHE_TTL"))
        return result

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        key = keys.event_key(str(parsed))
        cached = cache.get(key)
        if cached is not None:
            return cached
        event = self._store.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        cache.set(key, event, get_setting("EVENT_CACHE_TTL"))
        return event

    def list_creator_events(self, creator_id: UserId) -> list[Event]:
        key = keys.creator_key(str(creator_id))
        cached = cache.get(key)
        if cached is not None:
            return cached
        events = self._store.list_by_creator(creator_id)
        cache.set(key, events, get_setting("EVENT_CACHE_TTL"))
        return events

    def create_event(self, creator_id: UserId, data: dict[str, Any]) -> Event:
        """Create a draft (or directly published) event.

        Raises:
            InvalidScheduleError: If the start is in the past or the end is not after it.
        """
        fields = dict(data)
        reminders = fields.pop("reminders", [])
        _check_schedule(fields["starts_at"], fields["ends_at"], require_future=True)
        event = self._store.create_event(creator_id, fields, reminders)
        logger.info("Event %s created by %s", event.id, creator_id)
        return event

    def update_event(self, event_id: str, creator_id: UserId, changes: dict[str, Any]) -> Event:
        """Apply changes to an event the caller owns.

        Raises:
            EventLockedError: If the event is cancelled or completed.
            InvalidScheduleError: If the new dates are inconsistent.
            InvalidCapacityError: If capacity drops below tickets already issued.
        """
        event = self._owned_event(event_id, creator_id)
        if event.status.is_final:
            raise EventLockedError(event.status)
        fields = dict(changes)
        reminders = fields.pop("reminders", None)
        if "starts_at" in fields or "ends_at" in fields:
            _check_schedule(
                fields.get("starts_at", event.schedule.starts_at),
                fields.get("ends_at", event.schedule.ends_at),
                require_future="starts_at" in fields,
            )
        if "capacity" in fields and fields["capacity"] < event.tickets_sold:
            raise InvalidCapacityError(
                f"Capacity cannot be lower than the {event.tickets_sold} tickets already issued"
            )
        updated = self._store.update_event(event.id, fields, reminders)
        logger.info("Event %s updated by %s", event.id, creator_id)
        if updated.schedule.starts_at != event.schedule.starts_at:
            event_rescheduled.send(sender=type(self), event=updated)
        return updated

    def publish_event(self, event_id: str, creator_id: UserId) -> Event:
        return self.change_status(event_id, creator_id, EventStatus.PUBLISHED)

    def cancel_event(self, event_id: str, creator_id: UserId) -> Event:
        return self.change_status(event_id, creator_id, EventStatus.CANCELLED)

    def change_status(self, event_id: str, creator_id: UserId, status: EventStatus | str) -> Event:
        """Move an owned event to ``status`` if the transition is legal.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed.
        """
        target = EventStatus(status)
        event = self._owned_event(event_id, creator_id)
        if not event.status.can_transition_to(target):
            raise InvalidStatusTransitionError(event.status, target)
        if target == EventStatus.PUBLISHED and event.schedule.has_started(timezone.now()):
            raise InvalidScheduleError("Events that have already started cannot be published")
        updated = self._store.set_status(event.id, target)
        logger.info("Event %s status %s -> %s", event.id, event.status, target)
        if target == EventStatus.CANCELLED:
            event_cancelled.send(sender=type(self), event=updated)
        return updated

    def delete_event(self, event_id: str, creator_id: UserId) -> None:
        """Delete an owned event that has never issued a ticket.

        Raises:
            EventHasTicketsError: If tickets were already issued.
        """
        event = self._owned_event(event_id, creator_id)
        if event.tickets_sold > 0:
            raise EventHasTicketsError()
        self._store.delete_event(event.id)
        logger.info("Event %s deleted by %s", event.id, creator_id)

    def share_links(self, event_id: str) -> ShareLinks:
        event = self.get_event(event_id)
        base = get_setting("FRONTEND_URL").rstrip("/")
        url = f"{base}/events/{event.id}?ref={uuid.uuid4().hex[:8]}"
        encoded = quote(url, safe="")
        text = quote(f"Check out {event.title} on Eventful!", safe="")
        return ShareLinks(
            url=url,
            facebook=f"https://www.facebook.com/sharer/sharer.php?u={encoded}",
            twitter=f"https://twitter.com/intent/tweet?url={encoded}&text={text}",
            whatsapp=f"https://wa.me/?text={text}%20{encoded}",
            linkedin=f"https://www.linkedin.com/sharing/share-offsite/?url={encoded}",
        )

    def refresh_lifecycle(self, now: datetime | None = None) -> list[Event]:
        """Advance started and finished events; returns the ones that changed."""
        changed = self._store.advance_lifecycle(now or timezone.now())
        for event in changed:
            keys.invalidate_event(str(event.id), str(event.creator_id))
        if changed:
            logger.info("Advanced lifecycle of %d events", len(changed))
        return changed

    def _owned_event(self, event_id: str, creator_id: UserId) -> Event:
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        if not event.is_owned_by(creator_id):
            raise NotEventOwnerError()
        return event


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except ValueError:
        raise InvalidEventIdError()


def _check_schedule(starts_at: datetime, ends_at: datetime, *, require_future: bool) -> None:
    if require_future and starts_at <= timezone.now():
        raise InvalidScheduleError("Start date must be in the future")
    if ends_at <= starts_at:
        raise InvalidScheduleError("End date must be after start date")
