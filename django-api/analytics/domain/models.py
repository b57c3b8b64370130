"""Read-only rollups for event creators.

Revenue counts completed payments only, so a refund takes its amount out
of revenue and into ``refunded_amount``.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from events.domain import EventId


def _rate(used: int, sold: int) -> float:
    return round(used / sold * 100, 2) if sold else 0.0


@dataclass(frozen=True)
class EventAnalytics:
    event_id: EventId
    title: str
    status: str
    starts_at: datetime
    currency: str
    capacity: int
    tickets_available: int
    attendee_count: int
    tickets_sold: int
    tickets_used: int
    tickets_refunded: int
    revenue: Decimal
    completed_payments: int
    refunds: int
    refunded_amount: Decimal

    @property
    def usage_rate(self) -> float:
        return _rate(self.tickets_used, self.tickets_sold)


@dataclass(frozen=True)
class CreatorSummary:
    total_events: int
    published_events: int
    tickets_sold: int
    tickets_used: int
    total_revenue: Decimal
    completed_payments: int
    refunds: int
    refunded_amount: Decimal

    @property
    def usage_rate(self) -> float:
        return _rate(self.tickets_used, self.tickets_sold)

    @classmethod
    def from_events(cls, events: list[EventAnalytics], published_events: int) -> "CreatorSummary":
        return cls(
            total_events=len(events),
            published_events=published_events,
            tickets_sold=sum(e.tickets_sold for e in events),
            tickets_used=sum(e.tickets_used for e in events),
            total_revenue=sum((e.revenue for e in events), Decimal("0.00")),
            completed_payments=sum(e.completed_payments for e in events),
            refunds=sum(e.refunds for e in events),
            refunded_amount=sum((e.refunded_amount for e in events), Decimal("0.00")),
        )
