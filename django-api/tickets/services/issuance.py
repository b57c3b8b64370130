"""Ticket issuance workflow.

Both paths (free claim and paid purchase) end in the same step: reserve one
ticket from the event inventory and insert the ticket in one transaction,
then queue the reminder and confirmation notices. Preconditions are checked
up front so the caller gets a precise error; the store re-enforces the two
that can race (inventory and the one-ticket-per-user rule).
"""

import logging
import secrets

from django.db import transaction

from accounts.domain import User
from accounts.domain.errors import UserNotFoundError
from accounts.stores.interfaces import UserStore
from common.domain import Money, UserId
from events import cache as event_cache
from events.domain import Event, EventId
from events.domain.errors import EventNotFoundError
from events.services import parse_event_id
from events.stores.interfaces import EventStore
from notifications.services import NotificationService
from tickets import qr
from tickets.domain import NewTicket, Ticket, TicketStatus
from tickets.domain.errors import (
    DuplicateTicketError,
    EventIsFreeError,
    EventNotAvailableError,
    EventNotFreeError,
    SoldOutError,
)
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)


def generate_ticket_number() -> str:
    return f"TKT-{secrets.token_hex(5).upper()}"


class TicketIssuanceService:
    def __init__(
        self,
        tickets: TicketStore,
        events: EventStore,
        users: UserStore,
        notifications: NotificationService,
    ) -> None:
        self._tickets = tickets
        self._events = events
        self._users = users
        self._notifications = notifications

    def claim_free_ticket(self, user_id: UserId, event_id: str, reminder: str | None = None) -> Ticket:
        """Issue a ticket for a free, published event with tickets left.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            EventNotFreeError: If the event has a ticket price.
            EventNotAvailableError: If the event is not published.
            SoldOutError: If no tickets are left.
            UserNotFoundError: If the caller's account is gone.
            DuplicateTicketError: If the caller already holds a ticket.
        """
        event = self._load_event(event_id)
        if not event.is_free:
            raise EventNotFreeError()
        user = self._check_can_acquire(user_id, event)
        with transaction.atomic():
            ticket = self._issue(user, event, event.price, reminder)
        logger.info("Free ticket %s claimed by %s for event %s", ticket.ticket_number, user.id, event.id)
        return ticket

    def prepare_purchase(self, user_id: UserId, event_id: str) -> tuple[User, Event]:
        """Check that ``user_id`` may start paying for a ticket to a paid event.

        Raises the same errors as ``claim_free_ticket``, with EventIsFreeError
        in place of EventNotFreeError.
        """
        event = self._load_event(event_id)
        if event.is_free:
            raise EventIsFreeError()
        return self._check_can_acquire(user_id, event), event

    def issue_paid_ticket(
        self, user_id: UserId, event_id: EventId, amount: Money, reminder: str | None = None
    ) -> Ticket:
        """Issue the ticket a verified payment bought.

        Must run inside the caller's transaction. Only the racing
        preconditions are enforced here: the charge has already succeeded.

        Raises:
            SoldOutError: If the inventory ran out (or the event closed) meanwhile.
            DuplicateTicketError: If the user got a ticket meanwhile.
        """
        event = self._events.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        user = self._users.get_user(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        ticket = self._issue(user, event, amount, reminder)
        logger.info("Paid ticket %s issued to %s for event %s", ticket.ticket_number, user.id, event.id)
        return ticket

    def _load_event(self, event_id: str) -> Event:
        event = self._events.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _check_can_acquire(self, user_id: UserId, event: Event) -> User:
        if not event.is_published:
            raise EventNotAvailableError()
        if event.tickets_available <= 0:
            raise SoldOutError()
        user = self._users.get_user(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        existing = self._tickets.find_active(user.id, event.id)
        if existing is not None:
            raise DuplicateTicketError(str(existing.id))
        return user

    def _issue(self, user: User, event: Event, price: Money, reminder: str | None) -> Ticket:
        ticket_number = generate_ticket_number()
        offset = reminder or user.default_reminder or event.default_reminder
        ticket = self._tickets.issue_ticket(
            NewTicket(
                ticket_number=ticket_number,
                event_id=event.id,
                user_id=user.id,
                status=TicketStatus.PAID,
                price=price,
                qr_code_data=qr.build_payload(ticket_number, str(event.id), str(user.id), event.title),
                reminder=offset,
            )
        )
        # The reservation is a bulk update, so model signals never see it.
        transaction.on_commit(lambda: event_cache.invalidate_event(str(event.id), str(event.creator_id)))
        self._notifications.schedule_ticket_reminder(ticket, offset)
        self._notifications.ticket_confirmation(ticket)
        return ticket
