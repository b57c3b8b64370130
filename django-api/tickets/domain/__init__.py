from tickets.domain.models import (
    EventSummary,
    NewTicket,
    Ticket,
    TicketHolder,
    TicketId,
    TicketStats,
    TicketStatus,
)

__all__ = [
    "EventSummary",
    "NewTicket",
    "Ticket",
    "TicketHolder",
    "TicketId",
    "TicketStats",
    "TicketStatus",
]
