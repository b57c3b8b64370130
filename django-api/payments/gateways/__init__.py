from django.utils.module_loading import import_string

from eventful.conf import get_setting
from payments.gateways.interfaces import (
    CheckoutSession,
    GatewayRefund,
    GatewayTransaction,
    PaymentGateway,
)


def get_gateway() -> PaymentGateway:
    """Instantiate the gateway class named by the PAYMENT_GATEWAY setting."""
    return import_string(get_setting("PAYMENT_GATEWAY"))()


__all__ = ["CheckoutSession", "GatewayRefund", "GatewayTransaction", "PaymentGateway", "get_gateway"]
