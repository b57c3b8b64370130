"""Integration tests for the event catalog and event management.

Run with: pytest tests/test_event_catalog.py -v
"""

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from events.models import Event, EventReminder, EventStatus
from notifications.models import Notification, NotificationType


def event_payload(**overrides) -> dict:
    starts_at = timezone.now() + timedelta(days=30)
    payload = {
        "title": "Abuja Jazz Night",
        "description": "An evening of live jazz.",
        "event_type": "concert",
        "category": "music",
        "starts_at": starts_at.isoformat(),
        "ends_at": (starts_at + timedelta(hours=4)).isoformat(),
        "venue": "Transcorp Hilton",
        "address": "1 Aguiyi Ironsi Street",
        "city": "Abuja",
        "state": "FCT",
        "zip_code": "900001",
        "country": "Nigeria",
        "capacity": 200,
        "ticket_price": "7500.00",
        "tags": [" jazz ", "live"],
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events_returns_paginated_results(self, eventee_client: APIClient, make_event):
        """Given published events, returns them in start order with pagination meta."""
        later = make_event(title="Later", starts_at=timezone.now() + timedelta(days=20))
        sooner = make_event(title="Sooner", starts_at=timezone.now() + timedelta(days=5))
        make_event(title="Hidden draft", status=EventStatus.DRAFT)

        response = eventee_client.get("/api/events")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [e["id"] for e in data["events"]] == [str(sooner.id), str(later.id)]
        assert data["pagination"] == {"page": 1, "limit": 20, "total": 2, "pages": 1}

    def test_list_events_empty_catalog(self, eventee_client: APIClient):
        """Given no events, returns empty list."""
        response = eventee_client.get("/api/events")

        assert response.status_code == 200
        assert response.json()["data"]["events"] == []

    def test_list_events_filters(self, eventee_client: APIClient, make_event):
        """Given filters, returns only matching events."""
        make_event(title="Lagos Tech Summit")
        abuja = make_event(title="Abuja Jazz", city="Abuja", category="music")

        by_city = eventee_client.get("/api/events", {"city": "abuja"}).json()["data"]["events"]
        by_search = eventee_client.get("/api/events", {"search": "jazz"}).json()["data"]["events"]

        assert [e["id"] for e in by_city] == [str(abuja.id)]
        assert [e["id"] for e in by_search] == [str(abuja.id)]

    def test_search_matches_title_only(self, eventee_client: APIClient, make_event):
        """Given a term that only appears in a description, returns no events."""
        make_event(title="Lagos Tech Summit", description="Closing set by a jazz quartet.")
        highlife = make_event(title="Highlife and Jazz Night")

        found = eventee_client.get("/api/events", {"search": "JAZZ"}).json()["data"]["events"]

        assert [e["id"] for e in found] == [str(highlife.id)]

    def test_list_events_bad_page(self, eventee_client: APIClient):
        """Given a non-numeric page, returns 400."""
        assert eventee_client.get("/api/events", {"page": "two"}).status_code == 400

    def test_list_events_requires_auth(self, api_client: APIClient):
        """Given no token, returns 401."""
        assert api_client.get("/api/events").status_code == 401


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details(self, eventee_client: APIClient, free_event):
        """Given event exists, returns event details."""
        response = eventee_client.get(f"/api/events/{free_event.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Lagos Tech Summit"
        assert data["is_free"] is True
        assert data["tickets_available"] == 100
        assert data["location"]["city"] == "Lagos"

    def test_get_event_not_found(self, eventee_client: APIClient):
        """Given event does not exist, returns 404."""
        response = eventee_client.get(f"/api/events/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "EVENT_NOT_FOUND"

    def test_get_event_invalid_id_format(self, eventee_client: APIClient):
        """Given invalid UUID, returns 400."""
        response = eventee_client.get("/api/events/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"


@pytest.mark.django_db
class TestEventCreate:
    """Tests for POST /api/events"""

    def test_create_event_as_draft(self, creator_client: APIClient, creator):
        """Given valid input, returns 201 with a draft event and full inventory."""
        payload = event_payload(reminders=[{"channel": "email", "hours_before": 24}])

        response = creator_client.post("/api/events", payload, format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "draft"
        assert data["tickets_available"] == 200
        assert data["tags"] == ["jazz", "live"]
        assert data["creator_id"] == str(creator.pk)
        assert len(data["reminders"]) == 1
        assert EventReminder.objects.filter(event_id=data["id"]).count() == 1

    def test_create_event_in_the_past(self, creator_client: APIClient):
        """Given a start date in the past, returns 400."""
        starts_at = timezone.now() - timedelta(days=1)
        payload = event_payload(starts_at=starts_at.isoformat(), ends_at=(starts_at + timedelta(hours=2)).isoformat())

        response = creator_client.post("/api/events", payload, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_SCHEDULE"

    def test_create_event_end_before_start(self, creator_client: APIClient):
        """Given an end date before the start, returns 400."""
        starts_at = timezone.now() + timedelta(days=3)
        payload = event_payload(starts_at=starts_at.isoformat(), ends_at=(starts_at - timedelta(hours=1)).isoformat())

        assert creator_client.post("/api/events", payload, format="json").status_code == 400

    def test_create_event_as_eventee(self, eventee_client: APIClient):
        """Given an eventee account, returns 403."""
        response = eventee_client.post("/api/events", event_payload(), format="json")

        assert response.status_code == 403
        assert not Event.objects.exists()


@pytest.mark.django_db
class TestEventManagement:
    """Tests for update, publish, cancel, delete and share."""

    def test_update_capacity_keeps_sold_tickets(self, creator_client: APIClient, make_event):
        """Given sold tickets, capacity changes shift availability by the same amount."""
        event = make_event(capacity=100, tickets_available=90, attendee_count=10)

        response = creator_client.patch(f"/api/events/{event.id}", {"capacity": 150}, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["tickets_available"] == 140

    def test_update_capacity_below_sold(self, creator_client: APIClient, make_event):
        """Given capacity under tickets already issued, returns 400."""
        event = make_event(capacity=100, tickets_available=90, attendee_count=10)

        response = creator_client.patch(f"/api/events/{event.id}", {"capacity": 5}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CAPACITY"

    def test_update_someone_elses_event(self, auth_client, make_user, free_event):
        """Given a creator who does not own the event, returns 403."""
        other = auth_client(make_user("creator"))

        response = other.patch(f"/api/events/{free_event.id}", {"title": "Mine now"}, format="json")

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_EVENT_OWNER"

    def test_publish_draft(self, creator_client: APIClient, make_event):
        """Given a draft event, returns it published."""
        event = make_event(status=EventStatus.DRAFT)

        response = creator_client.post(f"/api/events/{event.id}/publish")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "published"

    def test_illegal_status_transition(self, creator_client: APIClient, make_event):
        """Given a cancelled event, publishing returns 400."""
        event = make_event(status=EventStatus.CANCELLED)

        response = creator_client.patch(f"/api/events/{event.id}/status", {"status": "published"}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_STATUS_TRANSITION"

    def test_cancel_notifies_ticket_holders(
        self, creator_client, eventee_client, free_event, django_capture_on_commit_callbacks, mailoutbox
    ):
        """Given an event with an attendee, cancelling tells the attendee."""
        with django_capture_on_commit_callbacks(execute=True):
            eventee_client.post("/api/tickets/claim", {"event_id": str(free_event.id)}, format="json")
        mailoutbox.clear()

        with django_capture_on_commit_callbacks(execute=True):
            response = creator_client.post(f"/api/events/{free_event.id}/cancel")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "cancelled"
        cancellation = Notification.objects.get(type=NotificationType.CANCELLATION)
        assert cancellation.user.email == "eventee@example.com"
        assert [m.to for m in mailoutbox] == [["eventee@example.com"]]
        assert mailoutbox[0].subject == "Cancelled: Lagos Tech Summit"

    def test_delete_event_without_tickets(self, creator_client: APIClient, free_event):
        """Given no tickets were issued, deletes the event."""
        response = creator_client.delete(f"/api/events/{free_event.id}")

        assert response.status_code == 200
        assert not Event.objects.filter(pk=free_event.id).exists()

    def test_delete_event_with_tickets(self, creator_client, eventee_client, free_event):
        """Given issued tickets, returns 400 and keeps the event."""
        eventee_client.post("/api/tickets/claim", {"event_id": str(free_event.id)}, format="json")

        response = creator_client.delete(f"/api/events/{free_event.id}")

        assert response.status_code == 400
        assert response.json()["code"] == "EVENT_HAS_TICKETS"
        assert Event.objects.filter(pk=free_event.id).exists()

    def test_my_events(self, creator_client: APIClient, make_event):
        """Given drafts and published events, returns all of the creator's events."""
        make_event(status=EventStatus.DRAFT)
        make_event()

        response = creator_client.get("/api/events/mine")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    def test_share_links(self, eventee_client: APIClient, free_event):
        """Given an event, returns links that point at the frontend event page."""
        response = eventee_client.get(f"/api/events/{free_event.id}/share")

        assert response.status_code == 200
        links = response.json()["data"]
        assert links["url"].startswith(f"https://eventful.test/events/{free_event.id}?ref=")
        assert links["whatsapp"].startswith("https://wa.me/?text=")


@pytest.mark.django_db
class TestHealth:
    def test_health_needs_no_token(self, api_client: APIClient):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ok"

    def test_unknown_route_is_json(self, api_client: APIClient):
        response = api_client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json()["message"] == "Route /api/nowhere not found"
