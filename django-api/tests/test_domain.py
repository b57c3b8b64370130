"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from analytics.domain import CreatorSummary, EventAnalytics
from common.domain import Capacity, Money
from common.reminders import reminder_time
from events.domain import EventId, EventStatus
from payments.domain import PaymentStats
from payments.gateways import GatewayTransaction
from tickets.domain import TicketStats, TicketStatus


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("2500.00")).amount == Decimal("2500.00")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money(Decimal("0")).is_zero

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("10.5"))) == "10.50"

    def test_minor_units(self):
        """Minor units are the amount in kobo/cents."""
        assert Money(Decimal("5000.00")).minor_units == 500000
        assert Money(Decimal("19.99"), "USD").minor_units == 1999


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_positive_value(self):
        """Capacity can be created with positive value."""
        assert Capacity(10).value == 10

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        raw = uuid4()
        assert EventId.from_string(str(raw)).value == raw

    def test_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")


class TestEventStatus:
    def test_draft_can_be_published_or_cancelled(self):
        assert EventStatus.DRAFT.can_transition_to(EventStatus.PUBLISHED)
        assert EventStatus.DRAFT.can_transition_to(EventStatus.CANCELLED)
        assert not EventStatus.DRAFT.can_transition_to(EventStatus.COMPLETED)

    def test_final_statuses_do_not_move(self):
        """Completed and cancelled events accept no transition."""
        for target in EventStatus:
            assert not EventStatus.CANCELLED.can_transition_to(target)
            assert not EventStatus.COMPLETED.can_transition_to(target)


class TestTicketStatus:
    def test_only_issued_and_paid_tickets_are_admissible(self):
        admissible = {status for status in TicketStatus if status.is_admissible}
        assert admissible == {TicketStatus.ISSUED, TicketStatus.PAID}


class TestReminderTime:
    def test_offsets_are_subtracted_from_start(self):
        starts_at = datetime(2026, 12, 24, 18, 0, tzinfo=timezone.utc)
        assert reminder_time(starts_at, "1_hour") == starts_at - timedelta(hours=1)
        assert reminder_time(starts_at, "3_days") == starts_at - timedelta(days=3)
        assert reminder_time(starts_at, "2_weeks") == starts_at - timedelta(weeks=2)

    def test_unknown_offset_is_rejected(self):
        with pytest.raises(ValueError):
            reminder_time(datetime.now(timezone.utc), "5_minutes")


class TestRollups:
    def test_usage_rate_is_a_percentage_of_sold(self):
        assert TicketStats(sold=8, used=2, refunded=0, cancelled=0).usage_rate == 25.0

    def test_usage_rate_without_sales_is_zero(self):
        assert TicketStats(sold=0, used=0, refunded=0, cancelled=0).usage_rate == 0.0

    def test_average_payment(self):
        stats = PaymentStats(
            total_revenue=Decimal("10000.00"),
            completed_payments=3,
            refunded_payments=0,
            refunded_amount=Decimal("0.00"),
        )
        assert stats.average_payment == Decimal("3333.33")

    def test_average_payment_without_payments_is_zero(self):
        stats = PaymentStats(Decimal("0.00"), 0, 0, Decimal("0.00"))
        assert stats.average_payment == Decimal("0.00")

    def test_creator_summary_adds_up_event_rollups(self):
        def rollup(sold: int, used: int, revenue: str) -> EventAnalytics:
            return EventAnalytics(
                event_id=EventId(uuid4()),
                title="Event",
                status="published",
                starts_at=datetime.now(timezone.utc),
                currency="NGN",
                capacity=100,
                tickets_available=100 - sold,
                attendee_count=sold,
                tickets_sold=sold,
                tickets_used=used,
                tickets_refunded=0,
                revenue=Decimal(revenue),
                completed_payments=sold,
                refunds=0,
                refunded_amount=Decimal("0.00"),
            )

        summary = CreatorSummary.from_events([rollup(4, 1, "200.00"), rollup(6, 4, "300.00")], published_events=2)

        assert summary.total_events == 2
        assert summary.tickets_sold == 10
        assert summary.tickets_used == 5
        assert summary.total_revenue == Decimal("500.00")
        assert summary.usage_rate == 50.0


class TestGatewayTransaction:
    @pytest.mark.parametrize("status", ["failed", "abandoned", "reversed"])
    def test_terminal_failures(self, status):
        transaction = GatewayTransaction(reference="TXN-1", status=status, amount=100, currency="NGN")
        assert transaction.is_terminal_failure
        assert not transaction.succeeded

    def test_pending_is_neither_success_nor_terminal(self):
        transaction = GatewayTransaction(reference="TXN-1", status="ongoing", amount=100, currency="NGN")
        assert not transaction.succeeded
        assert not transaction.is_terminal_failure
