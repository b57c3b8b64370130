from payments.handlers.views import (
    EventPaymentsView,
    InitializePaymentView,
    PaymentListView,
    PaymentWebhookView,
    RefundPaymentView,
    VerifyPaymentView,
)

__all__ = [
    "EventPaymentsView",
    "InitializePaymentView",
    "PaymentListView",
    "PaymentWebhookView",
    "RefundPaymentView",
    "VerifyPaymentView",
]
