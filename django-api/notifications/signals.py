"""Signal receivers that turn catalog events into notifications."""

from django.dispatch import receiver

from events.signals import event_cancelled, event_rescheduled
from events.stores import DjangoEventStore
from notifications.services import build_notification_service
from tickets.domain import TicketStatus
from tickets.stores import DjangoTicketStore

ACTIVE = [TicketStatus.ISSUED, TicketStatus.PAID]


def _holders(event):
    return DjangoTicketStore(DjangoEventStore()).list_for_event(event.id, ACTIVE)


@receiver(event_cancelled)
def notify_ticket_holders(sender, event, **kwargs):
    """Tell active ticket holders that their event was cancelled and drop their reminders."""
    service = build_notification_service()
    service.withdraw_reminders(event)
    service.event_cancelled(event, _holders(event))


@receiver(event_rescheduled)
def move_ticket_reminders(sender, event, **kwargs):
    build_notification_service().event_rescheduled(event, _holders(event))
