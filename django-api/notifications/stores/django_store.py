"""Django ORM implementation of the NotificationStore."""

from datetime import datetime
from uuid import UUID

from django.db import transaction
from django.db.models import F, Q, QuerySet

from common.domain import UserId
from events.domain import EventId
from notifications import models as orm
from notifications.domain import (
    Channel,
    Delivery,
    DeliveryStatus,
    NewNotification,
    Notification,
    NotificationId,
    NotificationType,
    PendingDelivery,
)
from notifications.stores.interfaces import NotificationStore

UNDELIVERED = [DeliveryStatus.PENDING, DeliveryStatus.FAILED]


def to_domain(row: orm.Notification) -> Notification:
    return Notification(
        id=NotificationId(row.id),
        user_id=UserId(row.user_id),
        event_id=EventId(row.event_id),
        ticket_id=row.ticket_id,
        type=NotificationType(row.type),
        title=row.title,
        message=row.message,
        is_read=row.is_read,
        read_at=row.read_at,
        scheduled_for=row.scheduled_for,
        sent_at=row.sent_at,
        created_at=row.created_at,
        deliveries=tuple(
            Delivery(
                id=c.id,
                channel=Channel(c.channel),
                status=DeliveryStatus(c.status),
                attempts=c.attempts,
                sent_at=c.sent_at,
                error=c.error,
                next_attempt_at=c.next_attempt_at,
            )
            for c in row.channels.all()
        ),
    )


def to_pending(row: orm.NotificationChannel) -> PendingDelivery:
    notification = row.notification
    user, event, ticket = notification.user, notification.event, notification.ticket
    return PendingDelivery(
        id=row.id,
        channel=Channel(row.channel),
        attempts=row.attempts,
        notification_id=NotificationId(notification.id),
        type=NotificationType(notification.type),
        title=notification.title,
        message=notification.message,
        recipient_email=user.email,
        recipient_name=user.full_name,
        recipient_phone=user.phone,
        event_title=event.title,
        event_starts_at=event.starts_at,
        event_venue=event.venue,
        ticket_number=ticket.ticket_number if ticket else None,
        qr_code_data=ticket.qr_code_data if ticket else None,
    )


class DjangoNotificationStore(NotificationStore):
    """Relational notification store using Django ORM."""

    def _queryset(self) -> QuerySet[orm.Notification]:
        return orm.Notification.objects.prefetch_related("channels")

    def _owned(self, notification_id: NotificationId, user_id: UserId) -> QuerySet[orm.Notification]:
        return orm.Notification.objects.filter(pk=notification_id.value, user_id=user_id.value)

    def _reload(self, notification_id: NotificationId) -> Notification:
        return to_domain(self._queryset().get(pk=notification_id.value))

    @transaction.atomic
    def create(self, notification: NewNotification) -> Notification:
        row = orm.Notification.objects.create(
            user_id=notification.user_id.value,
            event_id=notification.event_id.value,
            ticket_id=notification.ticket_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            scheduled_for=notification.scheduled_for,
        )
        orm.NotificationChannel.objects.bulk_create(
            orm.NotificationChannel(notification=row, channel=channel)
            for channel in dict.fromkeys(notification.channels)
        )
        return self._reload(NotificationId(row.id))

    def get(self, notification_id: NotificationId, user_id: UserId) -> Notification | None:
        row = self._queryset().filter(pk=notification_id.value, user_id=user_id.value).first()
        return to_domain(row) if row else None

    def list_for_user(self, user_id: UserId, limit: int, unread_only: bool = False) -> list[Notification]:
        qs = self._queryset().filter(user_id=user_id.value)
        if unread_only:
            qs = qs.filter(is_read=False)
        return [to_domain(r) for r in qs.order_by("-created_at")[:limit]]

    def unread_count(self, user_id: UserId) -> int:
        return orm.Notification.objects.filter(user_id=user_id.value, is_read=False).count()

    def mark_read(self, notification_id: NotificationId, user_id: UserId, now: datetime) -> Notification | None:
        qs = self._owned(notification_id, user_id)
        if not qs.exists():
            return None
        qs.filter(is_read=False).update(is_read=True, read_at=now, updated_at=now)
        return self._reload(notification_id)

    def mark_all_read(self, user_id: UserId, now: datetime) -> int:
        return orm.Notification.objects.filter(user_id=user_id.value, is_read=False).update(
            is_read=True, read_at=now, updated_at=now
        )

    def delete(self, notification_id: NotificationId, user_id: UserId) -> bool:
        deleted, _ = self._owned(notification_id, user_id).delete()
        return deleted > 0

    def delete_all(self, user_id: UserId) -> int:
        _, per_model = orm.Notification.objects.filter(user_id=user_id.value).delete()
        return per_model.get(orm.Notification._meta.label, 0)

    def pending_ticket_reminder(self, ticket_id: UUID) -> Notification | None:
        row = (
            self._queryset()
            .filter(ticket_id=ticket_id, type=NotificationType.REMINDER, sent_at__isnull=True)
            .filter(channels__status__in=UNDELIVERED)
            .distinct()
            .order_by("-created_at")
            .first()
        )
        return to_domain(row) if row else None

    def reschedule(
        self, notification_id: NotificationId, scheduled_for: datetime, message: str | None = None
    ) -> Notification:
        changes = {"scheduled_for": scheduled_for}
        if message is not None:
            changes["message"] = message
        orm.Notification.objects.filter(pk=notification_id.value).update(**changes)
        return self._reload(notification_id)

    def withdraw_reminders(self, event_id: EventId, reason: str) -> int:
        return orm.NotificationChannel.objects.filter(
            notification__event_id=event_id.value,
            notification__type=NotificationType.REMINDER,
            status__in=UNDELIVERED,
        ).update(status=DeliveryStatus.CANCELLED, error=reason, next_attempt_at=None)

    def due_deliveries(
        self,
        now: datetime,
        max_attempts: int,
        notification_id: NotificationId | None = None,
    ) -> list[PendingDelivery]:
        qs = (
            orm.NotificationChannel.objects.select_related(
                "notification__user", "notification__event", "notification__ticket"
            )
            .filter(
                status__in=UNDELIVERED,
                attempts__lt=max_attempts,
            )
            .filter(Q(next_attempt_at__isnull=True) | Q(next_attempt_at__lte=now))
            .filter(Q(notification__scheduled_for__isnull=True) | Q(notification__scheduled_for__lte=now))
        )
        if notification_id is not None:
            qs = qs.filter(notification_id=notification_id.value)
        return [to_pending(r) for r in qs.order_by("created_at")]

    def claim(self, delivery_id: UUID, attempts: int, retry_at: datetime) -> bool:
        updated = orm.NotificationChannel.objects.filter(
            pk=delivery_id, attempts=attempts, status__in=UNDELIVERED
        ).update(attempts=F("attempts") + 1, next_attempt_at=retry_at)
        return updated == 1

    @transaction.atomic
    def mark_sent(self, delivery_id: UUID, now: datetime) -> None:
        row = orm.NotificationChannel.objects.get(pk=delivery_id)
        row.status = DeliveryStatus.SENT
        row.sent_at = now
        row.error = ""
        row.next_attempt_at = None
        row.save(update_fields=["status", "sent_at", "error", "next_attempt_at", "updated_at"])
        orm.Notification.objects.filter(pk=row.notification_id, sent_at__isnull=True).update(sent_at=now)

    def mark_failed(self, delivery_id: UUID, error: str) -> None:
        orm.NotificationChannel.objects.filter(pk=delivery_id).update(
            status=DeliveryStatus.FAILED, error=error[:1000]
        )
