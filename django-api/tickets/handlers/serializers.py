"""Serializers for ticket requests and responses."""

from rest_framework import serializers

from common.reminders import ReminderOffset
from tickets import qr


class ClaimTicketSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    reminder = serializers.ChoiceField(choices=ReminderOffset.choices, required=False, allow_null=True)


class UpdateReminderSerializer(serializers.Serializer):
    reminder = serializers.ChoiceField(choices=ReminderOffset.choices)


class VerifyTicketSerializer(serializers.Serializer):
    """Either a ticket number and event ID, or the raw scanned QR payload."""

    ticket_number = serializers.CharField(required=False, max_length=20)
    event_id = serializers.CharField(required=False)
    qr_data = serializers.CharField(required=False, max_length=2000)

    def validate(self, attrs: dict) -> dict:
        if attrs.get("qr_data"):
            return attrs
        if not attrs.get("ticket_number") or not attrs.get("event_id"):
            raise serializers.ValidationError("Ticket number and event ID are required")
        return attrs


class TicketEventSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    venue = serializers.CharField()
    city = serializers.CharField()


class TicketHolderSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    phone = serializers.CharField()


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.UUIDField(source="id.value")
    ticket_number = serializers.CharField()
    status = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    currency = serializers.CharField(source="price.currency")
    reminder = serializers.CharField(allow_null=True)
    purchased_at = serializers.DateTimeField()
    scanned_at = serializers.DateTimeField(allow_null=True)
    qr_code_data = serializers.CharField()
    event = TicketEventSerializer()
    holder = TicketHolderSerializer()


class TicketDetailSerializer(TicketSerializer):
    """Single-ticket view: adds the QR image as a data URI."""

    qr_code = serializers.SerializerMethodField()

    def get_qr_code(self, ticket) -> str:
        return qr.data_uri(ticket.qr_code_data)


class TicketStatsSerializer(serializers.Serializer):
    sold = serializers.IntegerField()
    used = serializers.IntegerField()
    refunded = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    usage_rate = serializers.FloatField()
