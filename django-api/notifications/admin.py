from django.contrib import admin

from notifications.models import Notification, NotificationChannel


class NotificationChannelInline(admin.TabularInline):
    model = NotificationChannel
    extra = 0
    readonly_fields = ["channel", "status", "attempts", "sent_at", "error", "next_attempt_at"]
    can_delete = False


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["title", "user", "event", "type", "is_read", "scheduled_for", "sent_at"]
    list_filter = ["type", "is_read"]
    search_fields = ["title", "user__email", "event__title"]
    raw_id_fields = ["user", "event", "ticket"]
    inlines = [NotificationChannelInline]


@admin.register(NotificationChannel)
class NotificationChannelAdmin(admin.ModelAdmin):
    """Outbox view: failed rows show the last delivery error."""

    list_display = ["notification", "channel", "status", "attempts", "next_attempt_at", "sent_at"]
    list_filter = ["channel", "status"]
    search_fields = ["notification__title", "notification__user__email", "error"]
    raw_id_fields = ["notification"]
