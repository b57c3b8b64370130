"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

from common.domain import UserId
from common.domain.pagination import Page, PageRequest
from events.domain import EventId
from tickets.domain import NewTicket, Ticket, TicketId, TicketStats, TicketStatus


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        """Return a ticket by ID, or None if not found."""
        ...

    @abstractmethod
    def get_by_number(self, ticket_number: str) -> Ticket | None:
        """Return a ticket by its printed number, or None if not found."""
        ...

    @abstractmethod
    def find_active(self, user_id: UserId, event_id: EventId) -> Ticket | None:
        """Return the user's non-cancelled ticket for an event, if any."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: UserId, page: PageRequest) -> Page[Ticket]:
        """Return the user's tickets, newest first."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId, statuses: Iterable[TicketStatus]) -> list[Ticket]:
        """Return an event's tickets in the given statuses, newest purchase first."""
        ...

    @abstractmethod
    def issue_ticket(self, ticket: NewTicket) -> Ticket:
        """Reserve one unit of the event's inventory and persist the ticket.

        Both writes happen in one transaction: if the ticket cannot be
        inserted the reservation is rolled back.

        Raises:
            SoldOutError: If the event has no tickets left or is not published.
            DuplicateTicketError: If the user already holds an active ticket.
        """
        ...

    @abstractmethod
    def mark_used(self, ticket_id: TicketId, scanned_by: UserId, now: datetime) -> bool:
        """Transition an issued/paid ticket to used.

        A conditional update: returns False (and changes nothing) when the
        ticket is not in an admissible status any more.
        """
        ...

    @abstractmethod
    def update_reminder(self, ticket_id: TicketId, reminder: str) -> Ticket:
        """Change the reminder offset of a ticket."""
        ...

    @abstractmethod
    def event_stats(self, event_id: EventId) -> TicketStats:
        """Return ticket counters for an event."""
        ...
