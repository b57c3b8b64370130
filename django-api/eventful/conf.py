"""Application settings with defaults.

Only overrides need to appear in ``settings.EVENTFUL``; everything else
falls back to ``DEFAULTS``. Values are looked up at call time.
"""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "JWT_SECRET": None,
    "JWT_ALGORITHM": "HS256",
    "JWT_TTL_HOURS": 168,
    "PAYMENT_GATEWAY": "payments.gateways.paystack.PaystackGateway",
    "PAYSTACK_SECRET_KEY": "",
    "PAYSTACK_BASE_URL": "https://api.paystack.co",
    "PAYMENT_CALLBACK_URL": "",
    "PAYMENT_CURRENCY": "NGN",
    "GATEWAY_TIMEOUT_SECONDS": 15.0,
    "FRONTEND_URL": "http://localhost:3000",
    "EVENT_CACHE_TTL": 3600,
    "QR_CODE_BOX_SIZE": 8,
    "DISPATCH_ASYNC": True,
    "NOTIFICATION_MAX_ATTEMPTS": 3,
    "NOTIFICATION_RETRY_BACKOFF_SECONDS": 300,
    "SCHEDULER_INTERVAL_SECONDS": 60,
    "DEFAULT_PAGE_SIZE": 20,
    "MAX_PAGE_SIZE": 100,
}


def get_setting(name: str) -> Any:
    """Return the configured value for ``name``, falling back to defaults."""
    overrides = getattr(settings, "EVENTFUL", {})
    if name in overrides:
        return overrides[name]
    if name == "JWT_SECRET":
        return settings.SECRET_KEY
    return DEFAULTS[name]
