"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from common.domain import UserId
from events.domain import EventId
from notifications.domain import NewNotification, Notification, NotificationId, PendingDelivery


class NotificationStore(ABC):
    """Interface for notification and outbox persistence."""

    @abstractmethod
    def create(self, notification: NewNotification) -> Notification:
        """Persist a notification with one pending delivery per channel."""
        ...

    @abstractmethod
    def get(self, notification_id: NotificationId, user_id: UserId) -> Notification | None:
        """Return the user's notification, or None."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: UserId, limit: int, unread_only: bool = False) -> list[Notification]:
        """Return the user's notifications, newest first."""
        ...

    @abstractmethod
    def unread_count(self, user_id: UserId) -> int:
        ...

    @abstractmethod
    def mark_read(self, notification_id: NotificationId, user_id: UserId, now: datetime) -> Notification | None:
        ...

    @abstractmethod
    def mark_all_read(self, user_id: UserId, now: datetime) -> int:
        """Mark every unread notification read; returns how many changed."""
        ...

    @abstractmethod
    def delete(self, notification_id: NotificationId, user_id: UserId) -> bool:
        ...

    @abstractmethod
    def delete_all(self, user_id: UserId) -> int:
        ...

    @abstractmethod
    def pending_ticket_reminder(self, ticket_id: UUID) -> Notification | None:
        """Return the not-yet-sent reminder notification of a ticket, if any."""
        ...

    @abstractmethod
    def reschedule(
        self, notification_id: NotificationId, scheduled_for: datetime, message: str | None = None
    ) -> Notification:
        """Move a notification to ``scheduled_for``, optionally rewriting its message."""
        ...

    @abstractmethod
    def withdraw_reminders(self, event_id: EventId, reason: str) -> int:
        """Cancel every undelivered reminder of an event.

        Returns how many deliveries were withdrawn.
        """
        ...

    @abstractmethod
    def due_deliveries(
        self,
        now: datetime,
        max_attempts: int,
        notification_id: NotificationId | None = None,
    ) -> list[PendingDelivery]:
        """Return outbox rows ready to be delivered.

        A row is due when its notification is not scheduled in the future,
        it is pending or failed with attempts left, and its retry time (if
        any) has passed.
        """
        ...

    @abstractmethod
    def claim(self, delivery_id: UUID, attempts: int, retry_at: datetime) -> bool:
        """Take a delivery attempt.

        Bumps ``attempts`` and pushes ``next_attempt_at`` to ``retry_at`` only
        if nobody else has claimed the row since it was read and it is still
        pending or failed. Returns False when the claim was lost.
        """
        ...

    @abstractmethod
    def mark_sent(self, delivery_id: UUID, now: datetime) -> None:
        ...

    @abstractmethod
    def mark_failed(self, delivery_id: UUID, error: str) -> None:
        ...
