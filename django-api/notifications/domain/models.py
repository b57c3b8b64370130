"""Domain models for notifications and their deliveries."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from common.domain import EntityId, UserId
from events.domain import EventId


@dataclass(frozen=True)
class NotificationId(EntityId):
    """Unique identifier for a Notification."""


class NotificationType(StrEnum):
    REMINDER = "reminder"
    STATUS_UPDATE = "status_update"
    PAYMENT_CONFIRMATION = "payment_confirmation"
    TICKET_CONFIRMATION = "ticket_confirmation"
    CANCELLATION = "cancellation"


class Channel(StrEnum):
    EMAIL = "email"
    SMS = "sms"
    IN_APP = "in_app"


class DeliveryStatus(StrEnum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Delivery:
    """One channel of a notification."""

    id: UUID
    channel: Channel
    status: DeliveryStatus
    attempts: int
    sent_at: datetime | None
    error: str
    next_attempt_at: datetime | None


@dataclass(frozen=True)
class Notification:
    id: NotificationId
    user_id: UserId
    event_id: EventId
    ticket_id: UUID | None
    type: NotificationType
    title: str
    message: str
    is_read: bool
    read_at: datetime | None
    scheduled_for: datetime | None
    sent_at: datetime | None
    created_at: datetime
    deliveries: tuple[Delivery, ...] = ()


@dataclass(frozen=True)
class NewNotification:
    user_id: UserId
    event_id: EventId
    type: NotificationType
    title: str
    message: str
    channels: tuple[Channel, ...] = (Channel.EMAIL, Channel.IN_APP)
    ticket_id: UUID | None = None
    scheduled_for: datetime | None = None


@dataclass(frozen=True)
class PendingDelivery:
    """A due outbox row with everything a sender needs to deliver it."""

    id: UUID
    channel: Channel
    attempts: int
    notification_id: NotificationId
    type: NotificationType
    title: str
    message: str
    recipient_email: str
    recipient_name: str
    recipient_phone: str
    event_title: str
    event_starts_at: datetime
    event_venue: str
    ticket_number: str | None = None
    qr_code_data: str | None = None


@dataclass(frozen=True)
class DispatchResult:
    sent: int = 0
    failed: int = 0

    def __add__(self, other: "DispatchResult") -> "DispatchResult":
        return DispatchResult(sent=self.sent + other.sent, failed=self.failed + other.failed)
