from django.contrib import admin

from tickets.models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["ticket_number", "event", "user", "status", "price", "purchased_at", "scanned_at"]
    list_filter = ["status"]
    search_fields = ["ticket_number", "user__email", "event__title"]
    raw_id_fields = ["event", "user", "scanned_by"]
    readonly_fields = ["ticket_number", "qr_code_data", "created_at", "updated_at"]
