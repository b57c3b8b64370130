from notifications.stores.django_store import DjangoNotificationStore
from notifications.stores.interfaces import NotificationStore

__all__ = ["DjangoNotificationStore", "NotificationStore"]
