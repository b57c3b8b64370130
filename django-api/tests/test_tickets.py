"""Integration tests for free ticket claims, attendee ticket views and admission.

Run with: pytest tests/test_tickets.py -v
"""

import json
import uuid
from datetime import timedelta

import pytest
from rest_framework.test import APIClient

from common.domain import Money, UserId
from events.domain import EventId
from events.models import Event, EventStatus
from events.stores import DjangoEventStore
from notifications.models import Notification, NotificationType
from tickets.domain import NewTicket
from tickets.domain import TicketStatus as DomainTicketStatus
from tickets.domain.errors import DuplicateTicketError, SoldOutError
from tickets.models import Ticket, TicketStatus
from tickets.stores import DjangoTicketStore


@pytest.fixture
def claim(eventee_client, django_capture_on_commit_callbacks):
    """Claim a free ticket through the API and return the stored ticket."""

    def do_claim(event: Event, client: APIClient | None = None, **extra) -> Ticket:
        with django_capture_on_commit_callbacks(execute=True):
            response = (client or eventee_client).post(
                "/api/tickets/claim", {"event_id": str(event.id), **extra}, format="json"
            )
        assert response.status_code == 201, response.json()
        return Ticket.objects.get(pk=response.json()["data"]["ticket"]["id"])

    return do_claim


@pytest.mark.django_db
class TestClaimFreeTicket:
    """Tests for POST /api/tickets/claim"""

    def test_claim_issues_paid_ticket_and_reserves_inventory(
        self, eventee_client, free_event, django_capture_on_commit_callbacks
    ):
        """Given a free published event, returns 201 and takes one ticket from inventory."""
        with django_capture_on_commit_callbacks(execute=True):
            response = eventee_client.post("/api/tickets/claim", {"event_id": str(free_event.id)}, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Free ticket claimed successfully"
        ticket = body["data"]["ticket"]
        assert ticket["status"] == "paid"
        assert ticket["ticket_number"].startswith("TKT-")
        assert ticket["qr_code"].startswith("data:image/png;base64,")
        assert json.loads(ticket["qr_code_data"]) == {
            "ticketNumber": ticket["ticket_number"],
            "eventId": str(free_event.id),
            "userId": ticket["holder"]["id"],
            "eventTitle": "Lagos Tech Summit",
        }
        free_event.refresh_from_db()
        assert free_event.tickets_available == 99
        assert free_event.attendee_count == 1

    def test_claim_sends_confirmation_with_qr(self, claim, free_event, mailoutbox):
        """Given a claim, emails the holder a confirmation with the QR inline."""
        ticket = claim(free_event)

        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.to == ["eventee@example.com"]
        assert message.subject == "Your ticket for Lagos Tech Summit"
        assert ticket.ticket_number in message.body
        images = [part for part in message.attachments if part.get_content_type() == "image/png"]
        assert len(images) == 1
        assert images[0]["Content-ID"] == "<qrcode>"

    def test_claim_schedules_reminder_from_event_default(self, claim, free_event):
        """Given no reminder choice, schedules one a day before the event."""
        ticket = claim(free_event)

        reminder = Notification.objects.get(type=NotificationType.REMINDER, ticket=ticket)
        assert ticket.reminder == "1_day"
        assert reminder.scheduled_for == free_event.starts_at - timedelta(days=1)
        assert reminder.sent_at is None

    def test_claim_with_reminder_choice(self, claim, free_event):
        """Given a reminder choice, stores it on the ticket."""
        ticket = claim(free_event, reminder="1_hour")

        reminder = Notification.objects.get(type=NotificationType.REMINDER, ticket=ticket)
        assert ticket.reminder == "1_hour"
        assert reminder.scheduled_for == free_event.starts_at - timedelta(hours=1)

    def test_claim_uses_holder_default_reminder(self, auth_client, make_user, claim, free_event):
        """Given a user preference, it wins over the event default."""
        user = make_user(default_reminder="1_week")

        ticket = claim(free_event, client=auth_client(user))

        assert ticket.reminder == "1_week"

    def test_claim_twice(self, eventee_client, claim, free_event):
        """Given an existing ticket, returns 400 and leaves inventory alone."""
        first = claim(free_event)

        response = eventee_client.post("/api/tickets/claim", {"event_id": str(free_event.id)}, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "DUPLICATE_TICKET"
        assert body["data"]["ticket_id"] == str(first.id)
        free_event.refresh_from_db()
        assert free_event.tickets_available == 99

    def test_claim_sold_out(self, eventee_client, make_event):
        """Given no tickets left, returns 400 without touching inventory."""
        event = make_event(capacity=1, tickets_available=0, attendee_count=1)

        response = eventee_client.post("/api/tickets/claim", {"event_id": str(event.id)}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "SOLD_OUT"
        event.refresh_from_db()
        assert event.tickets_available == 0
        assert event.attendee_count == 1
        assert not Ticket.objects.exists()

    def test_last_ticket_goes_to_one_claimant(self, auth_client, make_user, make_event, claim):
        """Given one ticket left, the second claimant is told the event sold out."""
        event = make_event(capacity=1)
        claim(event)

        late = auth_client(make_user())
        response = late.post("/api/tickets/claim", {"event_id": str(event.id)}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "SOLD_OUT"
        assert Ticket.objects.filter(event=event).count() == 1

    def test_claim_paid_event(self, eventee_client, paid_event):
        """Given a priced event, returns 400 pointing at the payment flow."""
        response = eventee_client.post("/api/tickets/claim", {"event_id": str(paid_event.id)}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "EVENT_NOT_FREE"

    def test_claim_draft_event(self, eventee_client, make_event):
        """Given an unpublished event, returns 400."""
        event = make_event(status=EventStatus.DRAFT)

        response = eventee_client.post("/api/tickets/claim", {"event_id": str(event.id)}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "EVENT_NOT_AVAILABLE"

    def test_claim_unknown_event(self, eventee_client):
        """Given an unknown event, returns 404."""
        response = eventee_client.post("/api/tickets/claim", {"event_id": str(uuid.uuid4())}, format="json")

        assert response.status_code == 404

    def test_claim_as_creator(self, creator_client, free_event):
        """Given a creator account, returns 403."""
        response = creator_client.post("/api/tickets/claim", {"event_id": str(free_event.id)}, format="json")

        assert response.status_code == 403


@pytest.mark.django_db
class TestMyTickets:
    """Tests for the attendee's own ticket endpoints."""

    def test_list_my_tickets(self, eventee_client, claim, free_event, make_event):
        """Given two claims, returns both newest first."""
        first = claim(free_event)
        second = claim(make_event(title="Second"))

        response = eventee_client.get("/api/tickets")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [t["id"] for t in data["tickets"]] == [str(second.id), str(first.id)]
        assert data["pagination"]["total"] == 2

    def test_ticket_detail_of_another_user(self, auth_client, make_user, claim, free_event):
        """Given someone else's ticket, returns 404."""
        ticket = claim(free_event)
        stranger = auth_client(make_user())

        response = stranger.get(f"/api/tickets/{ticket.id}")

        assert response.status_code == 404
        assert response.json()["code"] == "TICKET_NOT_FOUND"

    def test_ticket_qr_png(self, eventee_client, claim, free_event):
        """Given a ticket, returns its QR code as a PNG."""
        ticket = claim(free_event)

        response = eventee_client.get(f"/api/tickets/{ticket.id}/qr")

        assert response.status_code == 200
        assert response["Content-Type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_update_reminder_moves_pending_notice(self, eventee_client, claim, free_event):
        """Given a new reminder choice, moves the scheduled reminder."""
        ticket = claim(free_event)

        response = eventee_client.put(f"/api/tickets/{ticket.id}/reminder", {"reminder": "3_days"}, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["reminder"] == "3_days"
        reminders = Notification.objects.filter(type=NotificationType.REMINDER, ticket=ticket)
        assert reminders.count() == 1
        assert reminders.get().scheduled_for == free_event.starts_at - timedelta(days=3)

    def test_update_reminder_rejects_unknown_offset(self, eventee_client, claim, free_event):
        """Given an unknown offset, returns 400."""
        ticket = claim(free_event)

        response = eventee_client.put(f"/api/tickets/{ticket.id}/reminder", {"reminder": "5_minutes"}, format="json")

        assert response.status_code == 400


@pytest.mark.django_db
class TestAdmission:
    """Tests for verify, scan and mark-used."""

    def test_scan_marks_ticket_used(self, creator_client, claim, free_event, creator):
        """Given a paid ticket, scanning admits it once."""
        ticket = claim(free_event)

        response = creator_client.post(f"/api/tickets/scan/{ticket.ticket_number}")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "used"
        ticket.refresh_from_db()
        assert ticket.status == TicketStatus.USED
        assert ticket.scanned_at is not None
        assert ticket.scanned_by_id == creator.pk

    def test_second_scan_reports_first_scan_time(self, creator_client, claim, free_event):
        """Given a used ticket, returns 400 with the original scan time."""
        ticket = claim(free_event)
        creator_client.post(f"/api/tickets/scan/{ticket.ticket_number}")
        ticket.refresh_from_db()

        response = creator_client.post(f"/api/tickets/scan/{ticket.ticket_number}")

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "TICKET_ALREADY_USED"
        assert body["data"]["scanned_at"] == ticket.scanned_at.isoformat()

    def test_scan_by_another_creator(self, auth_client, make_user, claim, free_event):
        """Given a creator who does not own the event, returns 403 and leaves the ticket alone."""
        ticket = claim(free_event)
        other = auth_client(make_user("creator"))

        response = other.post(f"/api/tickets/scan/{ticket.ticket_number}")

        assert response.status_code == 403
        ticket.refresh_from_db()
        assert ticket.status == TicketStatus.PAID

    def test_scan_unknown_ticket(self, creator_client):
        """Given an unknown ticket number, returns 404."""
        assert creator_client.post("/api/tickets/scan/TKT-0000000000").status_code == 404

    def test_scan_refunded_ticket(self, creator_client, claim, free_event):
        """Given a refunded ticket, returns 400 not valid."""
        ticket = claim(free_event)
        Ticket.objects.filter(pk=ticket.pk).update(status=TicketStatus.REFUNDED)

        response = creator_client.post(f"/api/tickets/scan/{ticket.ticket_number}")

        assert response.status_code == 400
        assert response.json()["code"] == "TICKET_NOT_VALID"

    def test_verify_does_not_admit(self, creator_client, claim, free_event):
        """Given a paid ticket, verifying reports it valid and keeps it paid."""
        ticket = claim(free_event)

        response = creator_client.get(f"/api/tickets/verify/{ticket.ticket_number}")

        assert response.status_code == 200
        assert response.json()["data"]["valid"] is True
        ticket.refresh_from_db()
        assert ticket.status == TicketStatus.PAID

    def test_verify_scanned_qr_payload(self, creator_client, claim, free_event):
        """Given the raw QR payload, returns the ticket it names."""
        ticket = claim(free_event)

        response = creator_client.post("/api/tickets/verify", {"qr_data": ticket.qr_code_data}, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["ticket"]["ticket_number"] == ticket.ticket_number

    def test_verify_for_the_wrong_event(self, creator_client, claim, free_event, make_event):
        """Given a ticket number from another event, returns 404."""
        ticket = claim(free_event)
        other = make_event(title="Other")

        response = creator_client.post(
            "/api/tickets/verify",
            {"ticket_number": ticket.ticket_number, "event_id": str(other.id)},
            format="json",
        )

        assert response.status_code == 404

    def test_verify_unreadable_qr(self, creator_client):
        """Given a payload that is not a ticket QR, returns 400."""
        response = creator_client.post("/api/tickets/verify", {"qr_data": "hello"}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_QR_CODE"

    def test_verify_needs_number_and_event(self, creator_client):
        """Given only a ticket number, returns 400."""
        response = creator_client.post("/api/tickets/verify", {"ticket_number": "TKT-1"}, format="json")

        assert response.status_code == 400

    def test_mark_used_by_id(self, creator_client, claim, free_event):
        """Given a ticket ID, admits the ticket."""
        ticket = claim(free_event)

        response = creator_client.patch(f"/api/tickets/{ticket.id}/mark-used")

        assert response.status_code == 200
        assert response.json()["message"] == "Ticket marked as used"

    def test_attendees_with_stats(self, creator_client, auth_client, make_user, claim, free_event):
        """Given two attendees with one admitted, returns both and the usage rate."""
        first = claim(free_event)
        claim(free_event, client=auth_client(make_user()))
        creator_client.post(f"/api/tickets/scan/{first.ticket_number}")

        response = creator_client.get(f"/api/tickets/event/{free_event.id}/attendees")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["stats"] == {"sold": 2, "used": 1, "refunded": 0, "cancelled": 0, "usage_rate": 50.0}

    def test_attendees_of_another_creators_event(self, auth_client, make_user, free_event):
        """Given a creator who does not own the event, returns 403."""
        other = auth_client(make_user("creator"))

        assert other.get(f"/api/tickets/event/{free_event.id}/attendees").status_code == 403


@pytest.mark.django_db
class TestTicketStoreGuards:
    """Tests for the storage-level guards behind DjangoTicketStore.issue_ticket."""

    @pytest.fixture
    def store(self) -> DjangoTicketStore:
        return DjangoTicketStore(DjangoEventStore())

    @staticmethod
    def new_ticket(event: Event, user, number: str) -> NewTicket:
        return NewTicket(
            ticket_number=number,
            event_id=EventId(event.id),
            user_id=UserId(user.pk),
            status=DomainTicketStatus.PAID,
            price=Money(event.ticket_price),
            qr_code_data="{}",
            reminder="1_day",
        )

    def test_second_ticket_for_same_holder(self, store, free_event, eventee):
        """Given an active ticket, a second insert fails on the unique constraint and releases its seat."""
        first = store.issue_ticket(self.new_ticket(free_event, eventee, "TKT-AAAAAAAAAA"))

        with pytest.raises(DuplicateTicketError) as excinfo:
            store.issue_ticket(self.new_ticket(free_event, eventee, "TKT-BBBBBBBBBB"))

        assert excinfo.value.details == {"ticket_id": str(first.id)}
        free_event.refresh_from_db()
        assert free_event.tickets_available == 99
        assert free_event.attendee_count == 1
        assert Ticket.objects.filter(event=free_event).count() == 1

    def test_reservation_on_sold_out_event(self, store, make_event, eventee):
        """Given no seats left, the conditional update reserves nothing and no ticket is stored."""
        event = make_event(capacity=1, tickets_available=0)

        with pytest.raises(SoldOutError):
            store.issue_ticket(self.new_ticket(event, eventee, "TKT-CCCCCCCCCC"))

        event.refresh_from_db()
        assert event.tickets_available == 0
        assert not Ticket.objects.filter(event=event).exists()

    def test_reservation_on_unpublished_event(self, store, make_event, eventee):
        event = make_event(status=EventStatus.DRAFT)

        with pytest.raises(SoldOutError):
            store.issue_ticket(self.new_ticket(event, eventee, "TKT-DDDDDDDDDD"))

        event.refresh_from_db()
        assert event.tickets_available == 100

    def test_cancelled_ticket_frees_the_holder(self, store, free_event, eventee):
        """Given the holder's earlier ticket was cancelled, a new one may be issued."""
        first = store.issue_ticket(self.new_ticket(free_event, eventee, "TKT-EEEEEEEEEE"))
        Ticket.objects.filter(pk=first.id.value).update(status=TicketStatus.CANCELLED)

        second = store.issue_ticket(self.new_ticket(free_event, eventee, "TKT-FFFFFFFFFF"))

        assert second.ticket_number == "TKT-FFFFFFFFFF"
