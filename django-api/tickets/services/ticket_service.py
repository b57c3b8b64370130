"""Ticket service: attendee views of their tickets and creator-side admission.

Admission is a small state machine: issued/paid tickets may be used once;
used, cancelled and refunded tickets are rejected. The transition itself is a
guarded update in the store, so of two concurrent scans exactly one wins and
the other reports the winner's scan time.
"""

import logging

from django.utils import timezone

from common.domain import UserId
from common.domain.pagination import Page, PageRequest
from events.domain.errors import EventNotFoundError, NotEventOwnerError
from events.services import parse_event_id
from events.stores.interfaces import EventStore
from notifications.services import NotificationService
from tickets import qr
from tickets.domain import Ticket, TicketId, TicketStats, TicketStatus
from tickets.domain.errors import (
    InvalidTicketIdError,
    TicketAlreadyUsedError,
    TicketNotFoundError,
    TicketNotValidError,
)
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

ATTENDEE_STATUSES = (TicketStatus.ISSUED, TicketStatus.PAID, TicketStatus.USED)


class TicketService:
    def __init__(self, tickets: TicketStore, events: EventStore, notifications: NotificationService) -> None:
        self._tickets = tickets
        self._events = events
        self._notifications = notifications

    def list_my_tickets(self, user_id: UserId, page: PageRequest) -> Page[Ticket]:
        return self._tickets.list_for_user(user_id, page)

    def get_my_ticket(self, user_id: UserId, ticket_id: str) -> Ticket:
        """Return one of the caller's tickets.

        Raises:
            InvalidTicketIdError: If the ticket_id is not a valid UUID.
            TicketNotFoundError: If it does not exist or belongs to someone else.
        """
        ticket = self._tickets.get_ticket(parse_ticket_id(ticket_id))
        if ticket is None or not ticket.is_held_by(user_id):
            raise TicketNotFoundError()
        return ticket

    def ticket_qr_png(self, user_id: UserId, ticket_id: str) -> bytes:
        return qr.render_png(self.get_my_ticket(user_id, ticket_id).qr_code_data)

    def update_reminder(self, user_id: UserId, ticket_id: str, reminder: str) -> Ticket:
        """Change a ticket's reminder and move its pending reminder notice."""
        ticket = self.get_my_ticket(user_id, ticket_id)
        updated = self._tickets.update_reminder(ticket.id, reminder)
        self._notifications.reschedule_ticket_reminder(updated, reminder)
        return updated

    def verify_ticket(self, creator_id: UserId, ticket_number: str, event_id: str | None = None) -> Ticket:
        """Check a ticket at the door without admitting it.

        Raises:
            TicketNotFoundError: If no such ticket exists (for that event).
            NotEventOwnerError: If the caller did not create the ticket's event.
            TicketAlreadyUsedError: If the ticket was already scanned.
            TicketNotValidError: If the ticket was cancelled or refunded.
        """
        ticket = self._creator_ticket(creator_id, ticket_number)
        if event_id is not None and ticket.event.id != parse_event_id(event_id):
            raise TicketNotFoundError()
        _check_admissible(ticket)
        return ticket

    def verify_qr(self, creator_id: UserId, payload: str) -> Ticket:
        scanned = qr.parse_payload(payload)
        return self.verify_ticket(creator_id, scanned.ticket_number, scanned.event_id)

    def scan_ticket(self, creator_id: UserId, ticket_number: str) -> Ticket:
        """Admit a ticket by number: issued/paid -> used."""
        return self._admit(creator_id, self._creator_ticket(creator_id, ticket_number))

    def mark_used(self, creator_id: UserId, ticket_id: str) -> Ticket:
        """Admit a ticket by ID."""
        ticket = self._tickets.get_ticket(parse_ticket_id(ticket_id))
        if ticket is None:
            raise TicketNotFoundError()
        if not ticket.is_for_event_of(creator_id):
            raise NotEventOwnerError()
        return self._admit(creator_id, ticket)

    def list_attendees(self, creator_id: UserId, event_id: str) -> tuple[list[Ticket], TicketStats]:
        """Return the holders of an owned event's tickets plus its ticket counters."""
        parsed = parse_event_id(event_id)
        event = self._events.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        if not event.is_owned_by(creator_id):
            raise NotEventOwnerError()
        return self._tickets.list_for_event(parsed, ATTENDEE_STATUSES), self._tickets.event_stats(parsed)

    def _creator_ticket(self, creator_id: UserId, ticket_number: str) -> Ticket:
        ticket = self._tickets.get_by_number(ticket_number)
        if ticket is None:
            raise TicketNotFoundError()
        if not ticket.is_for_event_of(creator_id):
            raise NotEventOwnerError()
        return ticket

    def _admit(self, creator_id: UserId, ticket: Ticket) -> Ticket:
        _check_admissible(ticket)
        if not self._tickets.mark_used(ticket.id, creator_id, timezone.now()):
            # Lost a race with another scan (or a status change); report what won.
            _check_admissible(self._tickets.get_ticket(ticket.id))
        admitted = self._tickets.get_ticket(ticket.id)
        logger.info("Ticket %s admitted by %s", admitted.ticket_number, creator_id)
        return admitted


def _check_admissible(ticket: Ticket) -> None:
    if ticket.status == TicketStatus.USED:
        raise TicketAlreadyUsedError(ticket.scanned_at)
    if not ticket.status.is_admissible:
        raise TicketNotValidError(ticket.status)


def parse_ticket_id(ticket_id: str) -> TicketId:
    try:
        return TicketId.from_string(ticket_id)
    except ValueError:
        raise InvalidTicketIdError()
