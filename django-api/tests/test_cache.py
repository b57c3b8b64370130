"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache

from events import cache as keys
from events.models import EventReminder
from events.services import build_event_service


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_detail_is_served_from_cache(self, free_event, django_assert_num_queries):
        """A second get_event for the same ID does not touch the database."""
        service = build_event_service()
        service.get_event(str(free_event.id))

        with django_assert_num_queries(0):
            cached = service.get_event(str(free_event.id))

        assert cached.title == "Lagos Tech Summit"

    def test_event_save_invalidates_detail_cache(self, free_event):
        """Saving an event invalidates the events:{id} cache key."""
        build_event_service().get_event(str(free_event.id))
        assert cache.get(keys.event_key(str(free_event.id))) is not None

        free_event.title = "Lagos Tech Summit 2026"
        free_event.save()

        assert cache.get(keys.event_key(str(free_event.id))) is None
        assert build_event_service().get_event(str(free_event.id)).title == "Lagos Tech Summit 2026"

    def test_event_save_invalidates_list_cache(self, free_event, make_event, eventee_client):
        """Saving an event bumps the list version so cached pages are not reused."""
        assert len(eventee_client.get("/api/events").json()["data"]["events"]) == 1

        make_event(title="Another one")

        assert len(eventee_client.get("/api/events").json()["data"]["events"]) == 2

    def test_event_save_invalidates_creator_cache(self, free_event, creator, creator_client):
        creator_client.get("/api/events/mine")
        assert cache.get(keys.creator_key(str(creator.pk))) is not None

        free_event.delete()

        assert cache.get(keys.creator_key(str(creator.pk))) is None

    def test_reminder_save_invalidates_event_cache(self, free_event):
        """Saving a creator reminder invalidates its event's cache key."""
        build_event_service().get_event(str(free_event.id))

        EventReminder.objects.create(event=free_event, hours_before=2)

        assert cache.get(keys.event_key(str(free_event.id))) is None

    def test_claim_refreshes_cached_inventory(
        self, eventee_client, free_event, django_capture_on_commit_callbacks
    ):
        """A claim is a bulk update, so the cached detail is dropped explicitly."""
        assert eventee_client.get(f"/api/events/{free_event.id}").json()["data"]["tickets_available"] == 100

        with django_capture_on_commit_callbacks(execute=True):
            eventee_client.post("/api/tickets/claim", {"event_id": str(free_event.id)}, format="json")

        assert eventee_client.get(f"/api/events/{free_event.id}").json()["data"]["tickets_available"] == 99

    def test_list_version_survives_missing_key(self):
        """A lost version key never brings back an older version number."""
        first = keys.list_key("p1")
        cache.delete(keys.LIST_VERSION_KEY)

        assert keys.list_key("p1") != first
