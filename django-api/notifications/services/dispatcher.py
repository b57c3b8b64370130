"""Outbox dispatcher: delivers due ``NotificationChannel`` rows.

Each attempt is claimed before the sender runs, so the scheduler and an
after-commit dispatch never deliver the same row twice. Sender failures are
recorded on the row and retried with a linear backoff until
``NOTIFICATION_MAX_ATTEMPTS`` is reached.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Mapping

from django.db import connection
from django.utils import timezone

from eventful.conf import get_setting
from notifications.domain import Channel, DispatchResult, NotificationId, PendingDelivery
from notifications.domain.errors import DeliveryError
from notifications.email import send_email
from notifications.stores.interfaces import NotificationStore

logger = logging.getLogger(__name__)

Sender = Callable[[PendingDelivery], None]


def deliver_in_app(delivery: PendingDelivery) -> None:
    """In-app notifications are the stored rows themselves."""


def deliver_sms(delivery: PendingDelivery) -> None:
    raise DeliveryError("SMS delivery is not configured")


DEFAULT_SENDERS: dict[Channel, Sender] = {
    Channel.EMAIL: send_email,
    Channel.SMS: deliver_sms,
    Channel.IN_APP: deliver_in_app,
}


class Dispatcher:
    def __init__(self, store: NotificationStore, senders: Mapping[Channel, Sender] | None = None) -> None:
        self._store = store
        self._senders = dict(senders or DEFAULT_SENDERS)

    def dispatch_due(self, now: datetime | None = None) -> DispatchResult:
        """Deliver every due outbox row."""
        now = now or timezone.now()
        return self._deliver_all(self._store.due_deliveries(now, get_setting("NOTIFICATION_MAX_ATTEMPTS")), now)

    def dispatch_notification(self, notification_id: NotificationId) -> DispatchResult:
        """Deliver the due rows of a single notification."""
        now = timezone.now()
        due = self._store.due_deliveries(
            now, get_setting("NOTIFICATION_MAX_ATTEMPTS"), notification_id=notification_id
        )
        return self._deliver_all(due, now)

    def dispatch_soon(self, notification_id: NotificationId) -> None:
        """Deliver a notification without blocking the caller.

        Runs in a background thread when ``DISPATCH_ASYNC`` is on; rows the
        thread never reaches are picked up by the scheduler.
        """
        if not get_setting("DISPATCH_ASYNC"):
            self.dispatch_notification(notification_id)
            return
        thread = threading.Thread(
            target=self._dispatch_in_thread,
            args=(notification_id,),
            name=f"notify-{notification_id}",
            daemon=True,
        )
        thread.start()

    def _dispatch_in_thread(self, notification_id: NotificationId) -> None:
        try:
            self.dispatch_notification(notification_id)
        except Exception:
            logger.exception("Background dispatch of notification %s failed", notification_id)
        finally:
            connection.close()

    def _deliver_all(self, due: list[PendingDelivery], now: datetime) -> DispatchResult:
        result = DispatchResult()
        for delivery in due:
            result += self._deliver(delivery, now)
        return result

    def _deliver(self, delivery: PendingDelivery, now: datetime) -> DispatchResult:
        attempt = delivery.attempts + 1
        retry_at = now + timedelta(seconds=attempt * get_setting("NOTIFICATION_RETRY_BACKOFF_SECONDS"))
        if not self._store.claim(delivery.id, delivery.attempts, retry_at):
            return DispatchResult()
        sender = self._senders.get(delivery.channel)
        try:
            if sender is None:
                raise DeliveryError(f"No sender for channel {delivery.channel}")
            sender(delivery)
        except Exception as exc:
            error = exc.message if isinstance(exc, DeliveryError) else f"{type(exc).__name__}: {exc}"
            logger.warning(
                "Delivery %s (%s) of notification %s failed on attempt %d: %s",
                delivery.id,
                delivery.channel,
                delivery.notification_id,
                attempt,
                error,
            )
            self._store.mark_failed(delivery.id, error)
            return DispatchResult(failed=1)
        self._store.mark_sent(delivery.id, timezone.now())
        logger.info("Delivered %s notification %s via %s", delivery.type, delivery.notification_id, delivery.channel)
        return DispatchResult(sent=1)
