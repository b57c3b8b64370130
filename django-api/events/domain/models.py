"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from common.domain import UserId
from events.domain.value_objects import Capacity, EventId, EventStatus, Location, Money, Schedule


@dataclass(frozen=True)
class EventReminder:
    """Domain representation of a creator reminder."""

    id: UUID
    channel: str
    hours_before: int
    sent: bool


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    creator_id: UserId
    title: str
    description: str
    event_type: str
    category: str
    schedule: Schedule
    location: Location
    capacity: Capacity
    tickets_available: int
    price: Money
    tags: tuple[str, ...]
    image_url: str | None
    banner_url: str | None
    status: EventStatus
    is_featured: bool
    default_reminder: str
    attendee_count: int
    created_at: datetime
    updated_at: datetime
    reminders: tuple[EventReminder, ...] = ()

    @property
    def is_free(self) -> bool:
        return self.price.is_zero

    @property
    def is_published(self) -> bool:
        return self.status == EventStatus.PUBLISHED

    @property
    def tickets_sold(self) -> int:
        return self.capacity.value - self.tickets_available

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.creator_id == user_id


@dataclass(frozen=True)
class EventFilters:
    """Catalog listing filters."""

    category: str | None = None
    city: str | None = None
    event_type: str | None = None
    search: str | None = None

    def cache_fragment(self) -> str:
        return ":".join(
            f"{name}={value}"
            for name, value in sorted(vars(self).items())
            if value
        )


@dataclass(frozen=True)
class ShareLinks:
    """Public links for sharing an event."""

    url: str
    facebook: str
    twitter: str
    whatsapp: str
    linkedin: str
