from django.urls import path

from events.handlers import (
    EventCancelView,
    EventDetailView,
    EventListView,
    EventPublishView,
    EventShareView,
    EventStatusView,
    MyEventsView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/mine", MyEventsView.as_view(), name="event-mine"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/publish", EventPublishView.as_view(), name="event-publish"),
    path("events/<str:event_id>/cancel", EventCancelView.as_view(), name="event-cancel"),
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path("events/<str:event_id>/share", EventShareView.as_view(), name="event-share"),
]
