from notifications.domain.models import (
    Channel,
    Delivery,
    DeliveryStatus,
    DispatchResult,
    NewNotification,
    Notification,
    NotificationId,
    NotificationType,
    PendingDelivery,
)

__all__ = [
    "Channel",
    "Delivery",
    "DeliveryStatus",
    "DispatchResult",
    "NewNotification",
    "Notification",
    "NotificationId",
    "NotificationType",
    "PendingDelivery",
]
