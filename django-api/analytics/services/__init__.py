from analytics.services.analytics_service import AnalyticsService
from analytics.stores import DjangoAnalyticsStore
from events.stores import DjangoEventStore


def build_analytics_service() -> AnalyticsService:
    return AnalyticsService(DjangoAnalyticsStore(), DjangoEventStore())


__all__ = ["AnalyticsService", "build_analytics_service"]
