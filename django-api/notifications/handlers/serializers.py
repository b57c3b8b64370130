"""Serializers for notification requests and responses."""

from rest_framework import serializers

from notifications.models import Channel, NotificationType


class CreateNotificationSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    type = serializers.ChoiceField(choices=NotificationType.choices)
    title = serializers.CharField(max_length=200)
    message = serializers.CharField(max_length=2000)
    scheduled_for = serializers.DateTimeField(required=False, allow_null=True)
    channels = serializers.ListField(
        child=serializers.ChoiceField(choices=Channel.choices), required=False, allow_empty=False
    )


class NotificationListQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, default=50, min_value=1, max_value=200)
    unread_only = serializers.BooleanField(required=False, default=False)


class DeliverySerializer(serializers.Serializer):
    channel = serializers.CharField()
    status = serializers.CharField()
    attempts = serializers.IntegerField()
    sent_at = serializers.DateTimeField(allow_null=True)


class NotificationSerializer(serializers.Serializer):
    """Serializer for Notification domain model."""

    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    ticket_id = serializers.UUIDField(allow_null=True)
    type = serializers.CharField()
    title = serializers.CharField()
    message = serializers.CharField()
    is_read = serializers.BooleanField()
    read_at = serializers.DateTimeField(allow_null=True)
    scheduled_for = serializers.DateTimeField(allow_null=True)
    sent_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    deliveries = DeliverySerializer(many=True)
