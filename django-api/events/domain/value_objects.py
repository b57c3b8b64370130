"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from common.domain import Capacity, EntityId, Money


@dataclass(frozen=True)
class EventId(EntityId):
    """Unique identifier for an Event."""


class EventStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def can_transition_to(self, target: "EventStatus") -> bool:
        return target in _TRANSITIONS[self]

    @property
    def is_final(self) -> bool:
        return not _TRANSITIONS[self]


_TRANSITIONS: dict[EventStatus, frozenset[EventStatus]] = {
    EventStatus.DRAFT: frozenset({EventStatus.PUBLISHED, EventStatus.CANCELLED}),
    EventStatus.PUBLISHED: frozenset({EventStatus.ONGOING, EventStatus.COMPLETED, EventStatus.CANCELLED}),
    EventStatus.ONGOING: frozenset({EventStatus.COMPLETED, EventStatus.CANCELLED}),
    EventStatus.COMPLETED: frozenset(),
    EventStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class Schedule:
    """Start/end window of an event."""

    starts_at: datetime
    ends_at: datetime

    def __post_init__(self) -> None:
        if self.ends_at <= self.starts_at:
            raise ValueError("End date must be after start date")

    def has_started(self, now: datetime) -> bool:
        return now >= self.starts_at


@dataclass(frozen=True)
class Location:
    """Where an event takes place."""

    address: str
    city: str
    state: str
    zip_code: str
    country: str
    venue: str = ""
    latitude: float | None = None
    longitude: float | None = None


__all__ = ["Capacity", "EventId", "EventStatus", "Location", "Money", "Schedule"]
