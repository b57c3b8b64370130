from django.urls import path

from analytics.handlers import EventAnalyticsView, EventsAnalyticsView, OverallAnalyticsView

urlpatterns = [
    path("analytics/overall", OverallAnalyticsView.as_view(), name="analytics-overall"),
    path("analytics/events", EventsAnalyticsView.as_view(), name="analytics-events"),
    path("analytics/events/<str:event_id>", EventAnalyticsView.as_view(), name="analytics-event"),
]
