"""Periodic work: drain the outbox, fire creator reminders and move events
through their lifecycle.

One scheduler process is expected per deployment; running two at once is
safe for the outbox (deliveries are claimed) but would duplicate creator
reminders.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from events.services import EventService
from events.stores.interfaces import EventStore
from notifications.services.dispatcher import Dispatcher
from notifications.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulerRun:
    sent: int
    failed: int
    creator_reminders: int
    lifecycle_changes: int


class ReminderScheduler:
    def __init__(
        self,
        dispatcher: Dispatcher,
        notifications: NotificationService,
        events: EventService,
        event_store: EventStore,
    ) -> None:
        self._dispatcher = dispatcher
        self._notifications = notifications
        self._events = events
        self._event_store = event_store

    def run_once(self, now: datetime | None = None) -> SchedulerRun:
        now = now or timezone.now()
        dispatched = self._dispatcher.dispatch_due(now)
        reminders = self._fire_creator_reminders(now)
        changed = self._events.refresh_lifecycle(now)
        run = SchedulerRun(
            sent=dispatched.sent,
            failed=dispatched.failed,
            creator_reminders=reminders,
            lifecycle_changes=len(changed),
        )
        if any(vars(run).values()):
            logger.info(
                "Scheduler run: %d sent, %d failed, %d creator reminders, %d lifecycle changes",
                run.sent,
                run.failed,
                run.creator_reminders,
                run.lifecycle_changes,
            )
        return run

    def _fire_creator_reminders(self, now: datetime) -> int:
        due = self._event_store.due_creator_reminders(now)
        for event, reminder in due:
            with transaction.atomic():
                self._notifications.creator_reminder(event, reminder)
                self._event_store.mark_reminder_sent(reminder.id)
        return len(due)
