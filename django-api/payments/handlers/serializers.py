"""Serializers for payment requests and responses."""

from rest_framework import serializers

from common.reminders import ReminderOffset


class InitializePaymentSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    email = serializers.EmailField(required=False)
    reminder = serializers.ChoiceField(choices=ReminderOffset.choices, required=False, allow_null=True)


class VerifyPaymentSerializer(serializers.Serializer):
    reference = serializers.CharField(max_length=100)


class RefundPaymentSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=500)


class PaymentSerializer(serializers.Serializer):
    """Serializer for Payment domain model."""

    id = serializers.UUIDField(source="id.value")
    transaction_id = serializers.CharField()
    event_id = serializers.UUIDField(source="event_id.value")
    event_title = serializers.CharField()
    payer_email = serializers.EmailField()
    ticket_id = serializers.SerializerMethodField()
    amount = serializers.DecimalField(source="amount.amount", max_digits=10, decimal_places=2)
    currency = serializers.CharField(source="amount.currency")
    payment_method = serializers.CharField()
    status = serializers.CharField()
    description = serializers.CharField()
    paid_at = serializers.DateTimeField(allow_null=True)
    refunded_at = serializers.DateTimeField(allow_null=True)
    refund_reason = serializers.CharField()
    created_at = serializers.DateTimeField()

    def get_ticket_id(self, payment) -> str | None:
        return str(payment.ticket_id) if payment.ticket_id else None


class CheckoutSerializer(PaymentSerializer):
    """Adds the hosted checkout to send the payer to."""

    authorization_url = serializers.CharField()
    access_code = serializers.CharField()


class PaymentStatsSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    completed_payments = serializers.IntegerField()
    average_payment = serializers.DecimalField(max_digits=12, decimal_places=2)
    refunded_payments = serializers.IntegerField()
    refunded_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
