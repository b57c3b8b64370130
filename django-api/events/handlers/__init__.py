from events.handlers.views import (
    EventCancelView,
    EventDetailView,
    EventListView,
    EventPublishView,
    EventShareView,
    EventStatusView,
    MyEventsView,
)

__all__ = [
    "EventCancelView",
    "EventDetailView",
    "EventListView",
    "EventPublishView",
    "EventShareView",
    "EventStatusView",
    "MyEventsView",
]
