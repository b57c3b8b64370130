"""Serializers for event requests and for transforming domain models to API responses."""

from decimal import Decimal

from rest_framework import serializers

from common.reminders import ReminderOffset
from events.models import Category, EventStatus, EventType, ReminderChannel


class ReminderInputSerializer(serializers.Serializer):
    channel = serializers.ChoiceField(choices=ReminderChannel.choices, default=ReminderChannel.EMAIL)
    hours_before = serializers.IntegerField(min_value=1, max_value=24 * 60)


class EventWriteSerializer(serializers.Serializer):
    """Input for creating (full) or updating (partial) an event."""

    title = serializers.CharField(max_length=150)
    description = serializers.CharField(max_length=5000)
    event_type = serializers.ChoiceField(choices=EventType.choices)
    category = serializers.ChoiceField(choices=Category.choices)
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    venue = serializers.CharField(max_length=255, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    zip_code = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)
    capacity = serializers.IntegerField(min_value=1)
    ticket_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    currency = serializers.CharField(max_length=3, required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, max_length=20)
    image_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    banner_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    default_reminder = serializers.ChoiceField(choices=ReminderOffset.choices, required=False)
    reminders = ReminderInputSerializer(many=True, required=False)

    def validate_tags(self, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value if tag.strip()]

    def validate_currency(self, value: str) -> str:
        return value.upper()

    def validate(self, attrs: dict) -> dict:
        starts_at, ends_at = attrs.get("starts_at"), attrs.get("ends_at")
        if starts_at and ends_at and ends_at <= starts_at:
            raise serializers.ValidationError({"ends_at": "End date must be after start date"})
        return attrs


class EventCreateSerializer(EventWriteSerializer):
    status = serializers.ChoiceField(
        choices=[EventStatus.DRAFT, EventStatus.PUBLISHED], default=EventStatus.DRAFT
    )


class EventStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=EventStatus.choices)


class EventListQuerySerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=Category.choices, required=False)
    city = serializers.CharField(max_length=100, required=False)
    event_type = serializers.ChoiceField(choices=EventType.choices, required=False)
    search = serializers.CharField(max_length=100, required=False)


class LocationSerializer(serializers.Serializer):
    venue = serializers.CharField()
    address = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    zip_code = serializers.CharField()
    country = serializers.CharField()
    latitude = serializers.FloatField(allow_null=True)
    longitude = serializers.FloatField(allow_null=True)


class ReminderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    channel = serializers.CharField()
    hours_before = serializers.IntegerField()
    sent = serializers.BooleanField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    creator_id = serializers.UUIDField(source="creator_id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    event_type = serializers.CharField()
    category = serializers.CharField()
    starts_at = serializers.DateTimeField(source="schedule.starts_at")
    ends_at = serializers.DateTimeField(source="schedule.ends_at")
    location = LocationSerializer()
    capacity = serializers.IntegerField(source="capacity.value")
    tickets_available = serializers.IntegerField()
    ticket_price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    currency = serializers.CharField(source="price.currency")
    is_free = serializers.BooleanField()
    tags = serializers.ListField(child=serializers.CharField())
    image_url = serializers.CharField(allow_null=True)
    banner_url = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    is_featured = serializers.BooleanField()
    default_reminder = serializers.CharField()
    attendee_count = serializers.IntegerField()
    reminders = ReminderSerializer(many=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class ShareLinksSerializer(serializers.Serializer):
    url = serializers.CharField()
    facebook = serializers.CharField()
    twitter = serializers.CharField()
    whatsapp = serializers.CharField()
    linkedin = serializers.CharField()
