from accounts.stores import DjangoUserStore
from events.stores import DjangoEventStore
from notifications.services import build_notification_service
from tickets.services.issuance import TicketIssuanceService, generate_ticket_number
from tickets.services.ticket_service import TicketService, parse_ticket_id
from tickets.stores import DjangoTicketStore


def build_issuance_service() -> TicketIssuanceService:
    events = DjangoEventStore()
    return TicketIssuanceService(
        DjangoTicketStore(events), events, DjangoUserStore(), build_notification_service()
    )


def build_ticket_service() -> TicketService:
    events = DjangoEventStore()
    return TicketService(DjangoTicketStore(events), events, build_notification_service())


__all__ = [
    "TicketIssuanceService",
    "TicketService",
    "build_issuance_service",
    "build_ticket_service",
    "generate_ticket_number",
    "parse_ticket_id",
]
