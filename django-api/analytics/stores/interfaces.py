"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from analytics.domain import EventAnalytics
from common.domain import UserId
from events.domain import EventId


class AnalyticsStore(ABC):
    """Interface for analytics queries."""

    @abstractmethod
    def for_event(self, event_id: EventId) -> EventAnalytics | None:
        """Return the rollup of one event, or None if it does not exist."""
        ...

    @abstractmethod
    def for_creator(self, creator_id: UserId) -> list[EventAnalytics]:
        """Return the rollups of all of a creator's events, newest first."""
        ...

    @abstractmethod
    def published_count(self, creator_id: UserId) -> int:
        """Return how many of a creator's events are published."""
        ...
