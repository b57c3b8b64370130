from rest_framework import serializers


class EventAnalyticsSerializer(serializers.Serializer):
    event_id = serializers.UUIDField(source="event_id.value")
    title = serializers.CharField()
    status = serializers.CharField()
    starts_at = serializers.DateTimeField()
    currency = serializers.CharField()
    capacity = serializers.IntegerField()
    tickets_available = serializers.IntegerField()
    attendee_count = serializers.IntegerField()
    tickets_sold = serializers.IntegerField()
    tickets_used = serializers.IntegerField()
    tickets_refunded = serializers.IntegerField()
    usage_rate = serializers.FloatField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    completed_payments = serializers.IntegerField()
    refunds = serializers.IntegerField()
    refunded_amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class CreatorSummarySerializer(serializers.Serializer):
    total_events = serializers.IntegerField()
    published_events = serializers.IntegerField()
    tickets_sold = serializers.IntegerField()
    tickets_used = serializers.IntegerField()
    usage_rate = serializers.FloatField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    completed_payments = serializers.IntegerField()
    refunds = serializers.IntegerField()
    refunded_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
