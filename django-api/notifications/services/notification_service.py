"""Notification service: user-facing inbox operations and the notices
other workflows raise (confirmations, reminders, cancellations).

New notifications are written in the caller's transaction; immediate ones
are handed to the dispatcher only after that transaction commits.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from django.db import transaction
from django.utils import timezone

from common.domain import Money, UserId
from common.reminders import reminder_time
from events.domain import Event, EventReminder
from events.domain.errors import EventNotFoundError
from events.services import parse_event_id
from events.stores.interfaces import EventStore
from notifications.domain import Channel, NewNotification, Notification, NotificationId, NotificationType
from notifications.domain.errors import InvalidNotificationIdError, NotificationNotFoundError
from notifications.services.dispatcher import Dispatcher
from notifications.stores.interfaces import NotificationStore
from tickets.domain import Ticket

logger = logging.getLogger(__name__)


def _when(moment: datetime) -> str:
    return f"{moment:%A, %d %B %Y at %H:%M} UTC"


class NotificationService:
    def __init__(self, store: NotificationStore, events: EventStore, dispatcher: Dispatcher) -> None:
        self._store = store
        self._events = events
        self._dispatcher = dispatcher

    # Inbox

    def create_notification(
        self,
        user_id: UserId,
        event_id: str,
        type: NotificationType | str,
        title: str,
        message: str,
        scheduled_for: datetime | None = None,
        channels: Iterable[str] | None = None,
    ) -> Notification:
        """Create a notification for the caller about an existing event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        if not self._events.event_exists(parsed):
            raise EventNotFoundError(event_id)
        new = NewNotification(
            user_id=user_id,
            event_id=parsed,
            type=NotificationType(type),
            title=title,
            message=message,
            scheduled_for=scheduled_for,
        )
        if channels:
            new = replace(new, channels=tuple(dict.fromkeys(Channel(c) for c in channels)))
        return self.notify(new)

    def list_notifications(self, user_id: UserId, limit: int, unread_only: bool = False) -> list[Notification]:
        return self._store.list_for_user(user_id, limit, unread_only)

    def get_notification(self, user_id: UserId, notification_id: str) -> Notification:
        notification = self._store.get(_parse_id(notification_id), user_id)
        if notification is None:
            raise NotificationNotFoundError()
        return notification

    def unread_count(self, user_id: UserId) -> int:
        return self._store.unread_count(user_id)

    def mark_read(self, user_id: UserId, notification_id: str) -> Notification:
        notification = self._store.mark_read(_parse_id(notification_id), user_id, timezone.now())
        if notification is None:
            raise NotificationNotFoundError()
        return notification

    def mark_all_read(self, user_id: UserId) -> int:
        return self._store.mark_all_read(user_id, timezone.now())

    def delete_notification(self, user_id: UserId, notification_id: str) -> None:
        if not self._store.delete(_parse_id(notification_id), user_id):
            raise NotificationNotFoundError()

    def delete_all(self, user_id: UserId) -> int:
        return self._store.delete_all(user_id)

    # Workflow notices

    def notify(self, new: NewNotification) -> Notification:
        """Store a notification and queue it for delivery once it is due."""
        notification = self._store.create(new)
        if new.scheduled_for is None or new.scheduled_for <= timezone.now():
            transaction.on_commit(lambda: self._dispatcher.dispatch_soon(notification.id))
        return notification

    def schedule_ticket_reminder(self, ticket: Ticket, reminder: str) -> Notification | None:
        """Schedule the attendee's reminder ``reminder`` before the event.

        Nothing is scheduled once the event has started; a reminder time
        already in the past is clamped to now.
        """
        now = timezone.now()
        if ticket.event.starts_at <= now:
            return None
        return self.notify(
            NewNotification(
                user_id=ticket.holder.id,
                event_id=ticket.event.id,
                ticket_id=ticket.id.value,
                type=NotificationType.REMINDER,
                title=f"Reminder: {ticket.event.title}",
                message=_reminder_message(ticket),
                scheduled_for=max(reminder_time(ticket.event.starts_at, reminder), now),
            )
        )

    def reschedule_ticket_reminder(self, ticket: Ticket, reminder: str) -> Notification | None:
        pending = self._store.pending_ticket_reminder(ticket.id.value)
        if pending is None:
            return self.schedule_ticket_reminder(ticket, reminder)
        now = timezone.now()
        if ticket.event.starts_at <= now:
            return pending
        at = max(reminder_time(ticket.event.starts_at, reminder), now)
        logger.info("Reminder %s for ticket %s moved to %s", pending.id, ticket.ticket_number, at)
        return self._store.reschedule(pending.id, at, _reminder_message(ticket))

    def event_rescheduled(self, event: Event, holders: Iterable[Ticket]) -> int:
        """Move the pending reminders of every holder to the event's new start."""
        count = 0
        for ticket in holders:
            if ticket.reminder and self.reschedule_ticket_reminder(ticket, ticket.reminder):
                count += 1
        logger.info("Rescheduled %d ticket reminders of event %s", count, event.id)
        return count

    def withdraw_reminders(self, event: Event) -> int:
        withdrawn = self._store.withdraw_reminders(event.id, f"{event.title} was cancelled")
        if withdrawn:
            logger.info("Withdrew %d pending reminders of cancelled event %s", withdrawn, event.id)
        return withdrawn

    def ticket_confirmation(self, ticket: Ticket) -> Notification:
        return self.notify(
            NewNotification(
                user_id=ticket.holder.id,
                event_id=ticket.event.id,
                ticket_id=ticket.id.value,
                type=NotificationType.TICKET_CONFIRMATION,
                title=f"Your ticket for {ticket.event.title}",
                message=f"Your ticket {ticket.ticket_number} for {ticket.event.title} "
                f"on {_when(ticket.event.starts_at)} is confirmed.",
            )
        )

    def payment_confirmation(self, ticket: Ticket, amount: Money, reference: str) -> Notification:
        return self.notify(
            NewNotification(
                user_id=ticket.holder.id,
                event_id=ticket.event.id,
                ticket_id=ticket.id.value,
                type=NotificationType.PAYMENT_CONFIRMATION,
                title=f"Payment received for {ticket.event.title}",
                message=f"We received your payment of {amount.currency} {amount} (reference {reference}). "
                f"Your ticket number is {ticket.ticket_number}.",
            )
        )

    def event_cancelled(self, event: Event, holders: Iterable[Ticket]) -> int:
        """Tell every holder of an active ticket that the event is off."""
        count = 0
        for ticket in holders:
            self.notify(
                NewNotification(
                    user_id=ticket.holder.id,
                    event_id=event.id,
                    ticket_id=ticket.id.value,
                    type=NotificationType.CANCELLATION,
                    title=f"Cancelled: {event.title}",
                    message=f"{event.title}, planned for {_when(event.schedule.starts_at)}, "
                    "has been cancelled by the organiser.",
                )
            )
            count += 1
        logger.info("Notified %d ticket holders of cancelled event %s", count, event.id)
        return count

    def creator_reminder(self, event: Event, reminder: EventReminder) -> Notification:
        return self.notify(
            NewNotification(
                user_id=event.creator_id,
                event_id=event.id,
                type=NotificationType.REMINDER,
                title=f"Your event {event.title} is coming up",
                message=f"{event.title} starts on {_when(event.schedule.starts_at)}. "
                f"{event.tickets_sold} of {event.capacity.value} tickets have been issued.",
                channels=(Channel(reminder.channel), Channel.IN_APP),
            )
        )


def _reminder_message(ticket: Ticket) -> str:
    return (
        f"{ticket.event.title} starts on {_when(ticket.event.starts_at)}. "
        f"Your ticket number is {ticket.ticket_number}."
    )


def _parse_id(notification_id: str) -> NotificationId:
    try:
        return NotificationId.from_string(notification_id)
    except ValueError:
        raise InvalidNotificationIdError()


