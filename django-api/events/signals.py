"""Django signals: cache invalidation and event lifecycle hooks."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from events.cache import invalidate_event
from events.models import Event, EventReminder

# Sent with ``event`` (domain Event) after an event is cancelled or its start moves.
event_cancelled = Signal()
event_rescheduled = Signal()


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    invalidate_event(str(instance.pk), str(instance.creator_id))


@receiver([post_save, post_delete], sender=EventReminder)
def invalidate_reminder_cache(sender, instance, **kwargs):
    """Invalidate the owning event's caches when a reminder changes."""
    invalidate_event(str(instance.event_id))
