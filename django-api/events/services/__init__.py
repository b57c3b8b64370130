from events.services.event_service import EventService, parse_event_id
from events.stores import DjangoEventStore


def build_event_service() -> EventService:
    return EventService(DjangoEventStore())


__all__ = ["EventService", "build_event_service", "parse_event_id"]
