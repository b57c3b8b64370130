from django.urls import path

from tickets.handlers import (
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

urlpatterns = [
    path("tickets", TicketListView.as_view(), name="ticket-list"),
    path("tickets/claim", ClaimTicketView.as_view(), name="ticket-claim"),
    path("tickets/verify", VerifyTicketForEventView.as_view(), name="ticket-verify-for-event"),
    path("tickets/verify/<str:ticket_number>", VerifyTicketView.as_view(), name="ticket-verify"),
    path("tickets/scan/<str:ticket_number>", ScanTicketView.as_view(), name="ticket-scan"),
    path("tickets/event/<str:event_id>/attendees", EventAttendeesView.as_view(), name="ticket-attendees"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("tickets/<str:ticket_id>/qr", TicketQRCodeView.as_view(), name="ticket-qr"),
    path("tickets/<str:ticket_id>/reminder", TicketReminderView.as_view(), name="ticket-reminder"),
    path("tickets/<str:ticket_id>/mark-used", MarkTicketUsedView.as_view(), name="ticket-mark-used"),
]
