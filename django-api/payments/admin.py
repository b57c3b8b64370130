from django.contrib import admin

from payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ["transaction_id", "payer", "event", "amount", "currency", "status", "paid_at", "created_at"]
    list_filter = ["status", "payment_method"]
    search_fields = ["transaction_id", "gateway_reference", "payer__email", "event__title"]
    raw_id_fields = ["payer", "event", "ticket"]
    readonly_fields = ["transaction_id", "gateway_response", "metadata", "created_at", "updated_at"]
