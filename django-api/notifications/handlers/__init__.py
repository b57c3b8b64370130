from notifications.handlers.views import (
    MarkAllReadView,
    MarkReadView,
    NotificationDetailView,
    NotificationListView,
    UnreadCountView,
)

__all__ = ["MarkAllReadView", "MarkReadView", "NotificationDetailView", "NotificationListView", "UnreadCountView"]
