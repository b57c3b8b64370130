"""Integration tests for creator analytics.

Run with: pytest tests/test_analytics.py -v
"""

import uuid
from decimal import Decimal

import pytest

from events.models import EventStatus
from payments.models import Payment, PaymentStatus
from tickets.models import Ticket, TicketStatus


@pytest.fixture
def sell(make_user):
    """Store a ticket (and its payment, for priced events) without going through the API."""

    def do_sell(event, ticket_status=TicketStatus.PAID, payment_status=PaymentStatus.COMPLETED) -> Ticket:
        buyer = make_user()
        number = f"TKT-{uuid.uuid4().hex[:10].upper()}"
        ticket = Ticket.objects.create(
            ticket_number=number,
            event=event,
            user=buyer,
            status=ticket_status,
            price=event.ticket_price,
            qr_code_data="{}",
        )
        if event.ticket_price:
            Payment.objects.create(
                payer=buyer,
                event=event,
                ticket=ticket,
                amount=event.ticket_price,
                status=payment_status,
                transaction_id=f"TXN-{uuid.uuid4().hex[:12].upper()}",
                description=f"Ticket for {event.title}",
            )
        return ticket

    return do_sell


@pytest.mark.django_db
class TestEventAnalytics:
    """Tests for GET /api/analytics/events/{event_id}"""

    def test_rollup_counts_tickets_and_revenue(self, creator_client, paid_event, sell):
        """Given used, unused and refunded sales, returns counts, usage rate and revenue."""
        sell(paid_event, TicketStatus.USED)
        sell(paid_event)
        sell(paid_event)
        sell(paid_event, payment_status=PaymentStatus.REFUNDED)

        response = creator_client.get(f"/api/analytics/events/{paid_event.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tickets_sold"] == 4
        assert data["tickets_used"] == 1
        assert data["usage_rate"] == 25.0
        assert data["revenue"] == "15000.00"
        assert data["completed_payments"] == 3
        assert data["refunds"] == 1
        assert data["refunded_amount"] == "5000.00"

    def test_rollup_of_event_without_sales(self, creator_client, free_event):
        data = creator_client.get(f"/api/analytics/events/{free_event.id}").json()["data"]

        assert data["tickets_sold"] == 0
        assert data["usage_rate"] == 0.0
        assert data["revenue"] == "0.00"

    def test_rollup_of_another_creators_event(self, auth_client, make_user, paid_event):
        """Given a creator who does not own the event, returns 403."""
        other = auth_client(make_user("creator"))

        assert other.get(f"/api/analytics/events/{paid_event.id}").status_code == 403

    def test_rollup_of_unknown_event(self, creator_client):
        assert creator_client.get(f"/api/analytics/events/{uuid.uuid4()}").status_code == 404

    def test_analytics_for_eventee(self, eventee_client):
        """Given an eventee account, returns 403."""
        assert eventee_client.get("/api/analytics/overall").status_code == 403


@pytest.mark.django_db
class TestCreatorAnalytics:
    """Tests for GET /api/analytics/overall and /api/analytics/events"""

    def test_overall_sums_every_event(self, creator_client, make_event, paid_event, free_event, sell, make_user):
        """Given two events with sales, returns totals across both."""
        make_event(title="Draft", status=EventStatus.DRAFT)
        sell(paid_event)
        sell(paid_event, TicketStatus.USED)
        sell(free_event, TicketStatus.USED)
        sell(free_event, TicketStatus.CANCELLED)
        make_event(owner=make_user("creator"), title="Someone else's")

        response = creator_client.get("/api/analytics/overall")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_events": 3,
            "published_events": 2,
            "tickets_sold": 3,
            "tickets_used": 2,
            "usage_rate": 66.67,
            "total_revenue": "10000.00",
            "completed_payments": 2,
            "refunds": 0,
            "refunded_amount": "0.00",
        }

    def test_events_lists_each_rollup(self, creator_client, paid_event, free_event, sell):
        """Given two events, returns one rollup per event."""
        sell(paid_event)

        response = creator_client.get("/api/analytics/events")

        assert response.status_code == 200
        by_title = {row["title"]: row for row in response.json()["data"]}
        assert by_title["Afrobeats Live"]["tickets_sold"] == 1
        assert by_title["Lagos Tech Summit"]["tickets_sold"] == 0
