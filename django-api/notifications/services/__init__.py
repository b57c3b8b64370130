from events.services import build_event_service
from events.stores import DjangoEventStore
from notifications.services.dispatcher import Dispatcher
from notifications.services.notification_service import NotificationService
from notifications.services.scheduler import ReminderScheduler, SchedulerRun
from notifications.stores import DjangoNotificationStore


def build_dispatcher() -> Dispatcher:
    return Dispatcher(DjangoNotificationStore())


def build_notification_service() -> NotificationService:
    return NotificationService(DjangoNotificationStore(), DjangoEventStore(), build_dispatcher())


def build_scheduler() -> ReminderScheduler:
    dispatcher = build_dispatcher()
    return ReminderScheduler(
        dispatcher,
        NotificationService(DjangoNotificationStore(), DjangoEventStore(), dispatcher),
        build_event_service(),
        DjangoEventStore(),
    )


__all__ = [
    "Dispatcher",
    "NotificationService",
    "ReminderScheduler",
    "SchedulerRun",
    "build_dispatcher",
    "build_notification_service",
    "build_scheduler",
]
