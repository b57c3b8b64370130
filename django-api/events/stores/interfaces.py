"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any
from uuid import UUID

from common.domain import UserId
from common.domain.pagination import Page, PageRequest
from events.domain import Event, EventFilters, EventId, EventReminder, EventStatus


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_published(self, filters: EventFilters, page: PageRequest) -> Page[Event]:
        """Return published events ordered by starts_at ascending."""
        ...

    @abstractmethod
    def list_by_creator(self, creator_id: UserId) -> list[Event]:
        """Return all events of a creator ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def create_event(self, creator_id: UserId, fields: dict[str, Any], reminders: list[dict[str, Any]]) -> Event:
        """Persist a new event. tickets_available starts at capacity."""
        ...

    @abstractmethod
    def update_event(
        self, event_id: EventId, fields: dict[str, Any], reminders: list[dict[str, Any]] | None = None
    ) -> Event:
        """Apply field changes; ``reminders`` replaces the reminder set when given."""
        ...

    @abstractmethod
    def set_status(self, event_id: EventId, status: EventStatus) -> Event:
        """Change the status of an event."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> None:
        """Remove an event."""
        ...

    @abstractmethod
    def reserve_ticket(self, event_id: EventId) -> bool:
        """Atomically take one ticket from the inventory.

        A single conditional update guarded by ``tickets_available > 0`` and
        ``status = published``; it also bumps ``attendee_count``. Returns
        False when the guard does not hold, in which case nothing changes.
        """
        ...

    @abstractmethod
    def advance_lifecycle(self, now: datetime) -> list[Event]:
        """Move published/ongoing events along by their schedule.

        Returns the events whose status changed, in their new state.
        """
        ...

    @abstractmethod
    def due_creator_reminders(self, now: datetime) -> list[tuple[Event, EventReminder]]:
        """Return unsent creator reminders whose time has come before the event starts."""
        ...

    @abstractmethod
    def mark_reminder_sent(self, reminder_id: UUID) -> None:
        """Flag a creator reminder as sent."""
        ...
