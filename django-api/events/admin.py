from django.contrib import admin

from events.models import Event, EventReminder


class EventReminderInline(admin.TabularInline):
    model = EventReminder
    extra = 1


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "creator", "status", "starts_at", "capacity", "tickets_available", "ticket_price"]
    list_filter = ["status", "category", "event_type", "is_featured"]
    search_fields = ["title", "city", "creator__email"]
    readonly_fields = ["tickets_available", "attendee_count", "created_at", "updated_at"]
    inlines = [EventReminderInline]


@admin.register(EventReminder)
class EventReminderAdmin(admin.ModelAdmin):
    list_display = ["event", "channel", "hours_before", "sent"]
    list_filter = ["channel", "sent"]
