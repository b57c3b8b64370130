"""Analytics service: creator-only rollups over events, tickets and payments."""

from analytics.domain import CreatorSummary, EventAnalytics
from analytics.stores.interfaces import AnalyticsStore
from common.domain import UserId
from events.domain.errors import EventNotFoundError, NotEventOwnerError
from events.services import parse_event_id
from events.stores.interfaces import EventStore


class AnalyticsService:
    def __init__(self, store: AnalyticsStore, events: EventStore) -> None:
        self._store = store
        self._events = events

    def overall(self, creator_id: UserId) -> CreatorSummary:
        return CreatorSummary.from_events(
            self._store.for_creator(creator_id), self._store.published_count(creator_id)
        )

    def events(self, creator_id: UserId) -> list[EventAnalytics]:
        return self._store.for_creator(creator_id)

    def event(self, creator_id: UserId, event_id: str) -> EventAnalytics:
        """Return the rollup of one of the caller's events.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            NotEventOwnerError: If the caller did not create it.
        """
        parsed = parse_event_id(event_id)
        event = self._events.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        if not event.is_owned_by(creator_id):
            raise NotEventOwnerError()
        return self._store.for_event(parsed)
