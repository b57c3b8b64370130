from analytics.handlers.views import EventAnalyticsView, EventsAnalyticsView, OverallAnalyticsView

__all__ = ["EventAnalyticsView", "EventsAnalyticsView", "OverallAnalyticsView"]
