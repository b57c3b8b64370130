from django.urls import path

from payments.handlers import (
    EventPaymentsView,
    InitializePaymentView,
    PaymentListView,
    PaymentWebhookView,
    RefundPaymentView,
    VerifyPaymentView,
)

urlpatterns = [
    path("payments", PaymentListView.as_view(), name="payment-list"),
    path("payments/initialize", InitializePaymentView.as_view(), name="payment-initialize"),
    path("payments/verify", VerifyPaymentView.as_view(), name="payment-verify"),
    path("payments/webhook", PaymentWebhookView.as_view(), name="payment-webhook"),
    path("payments/event/<str:event_id>", EventPaymentsView.as_view(), name="payment-event"),
    path("payments/<str:transaction_id>/refund", RefundPaymentView.as_view(), name="payment-refund"),
]
