from django.urls import path

from notifications.handlers import (
    MarkAllReadView,
    MarkReadView,
    NotificationDetailView,
    NotificationListView,
    UnreadCountView,
)

urlpatterns = [
    path("notifications", NotificationListView.as_view(), name="notification-list"),
    path("notifications/unread/count", UnreadCountView.as_view(), name="notification-unread-count"),
    path("notifications/read/all", MarkAllReadView.as_view(), name="notification-read-all"),
    path("notifications/<str:notification_id>", NotificationDetailView.as_view(), name="notification-detail"),
    path("notifications/<str:notification_id>/read", MarkReadView.as_view(), name="notification-read"),
]
