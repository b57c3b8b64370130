from tickets.handlers.views import (
    ClaimTicketView,
    EventAttendeesView,
    MarkTicketUsedView,
    ScanTicketView,
    TicketDetailView,
    TicketListView,
    TicketQRCodeView,
    TicketReminderView,
    VerifyTicketForEventView,
    VerifyTicketView,
)

__all__ = [
    "ClaimTicketView",
    "EventAttendeesView",
    "MarkTicketUsedView",
    "ScanTicketView",
    "TicketDetailView",
    "TicketListView",
    "TicketQRCodeView",
    "TicketReminderView",
    "VerifyTicketForEventView",
    "VerifyTicketView",
]
