from events.domain.models import Event, EventFilters, EventReminder, ShareLinks
from events.domain.value_objects import Capacity, EventId, EventStatus, Location, Money, Schedule

__all__ = [
    "Event",
    "EventFilters",
    "EventReminder",
    "ShareLinks",
    "EventId",
    "EventStatus",
    "Location",
    "Schedule",
    "Money",
    "Capacity",
]
