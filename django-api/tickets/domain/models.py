"""Domain models for tickets.

Tickets carry a small summary of their event and holder so that
ownership checks and responses never need a second lookup.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from common.domain import EntityId, Money, UserId
from events.domain import EventId


@dataclass(frozen=True)
class TicketId(EntityId):
    """Unique identifier for a Ticket."""


class TicketStatus(StrEnum):
    ISSUED = "issued"
    PAID = "paid"
    USED = "used"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def is_admissible(self) -> bool:
        return self in (TicketStatus.ISSUED, TicketStatus.PAID)


@dataclass(frozen=True)
class EventSummary:
    id: EventId
    creator_id: UserId
    title: str
    starts_at: datetime
    ends_at: datetime
    venue: str
    city: str


@dataclass(frozen=True)
class TicketHolder:
    id: UserId
    email: str
    first_name: str
    last_name: str
    phone: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket."""

    id: TicketId
    ticket_number: str
    event: EventSummary
    holder: TicketHolder
    status: TicketStatus
    price: Money
    qr_code_data: str
    reminder: str | None
    purchased_at: datetime
    scanned_at: datetime | None
    created_at: datetime

    def is_held_by(self, user_id: UserId) -> bool:
        return self.holder.id == user_id

    def is_for_event_of(self, creator_id: UserId) -> bool:
        return self.event.creator_id == creator_id


@dataclass(frozen=True)
class NewTicket:
    """Everything needed to persist a freshly issued ticket."""

    ticket_number: str
    event_id: EventId
    user_id: UserId
    status: TicketStatus
    price: Money
    qr_code_data: str
    reminder: str | None


@dataclass(frozen=True)
class TicketStats:
    """Per-event ticket counters."""

    sold: int
    used: int
    refunded: int
    cancelled: int

    @property
    def usage_rate(self) -> float:
        return round(self.used / self.sold * 100, 2) if self.sold else 0.0
