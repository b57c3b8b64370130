"""Payment gateway interface.

Services talk to the gateway only through this interface so the HTTP
adapter can be swapped (``PAYMENT_GATEWAY`` setting) or faked in tests.
All amounts crossing this boundary are integers in minor units.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

TERMINAL_FAILURE_STATUSES = frozenset({"failed", "abandoned", "reversed"})


@dataclass(frozen=True)
class CheckoutSession:
    reference: str
    authorization_url: str
    access_code: str


@dataclass(frozen=True)
class GatewayTransaction:
    """Authoritative state of a transaction as reported by the gateway."""

    reference: str
    status: str
    amount: int
    currency: str
    gateway_reference: str = ""
    paid_at: datetime | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    @property
    def is_terminal_failure(self) -> bool:
        return self.status in TERMINAL_FAILURE_STATUSES


@dataclass(frozen=True)
class GatewayRefund:
    reference: str
    status: str
    raw: dict[str, Any] = field(default_factory=dict)


class PaymentGateway(ABC):
    """Interface for a hosted-checkout payment provider."""

    @abstractmethod
    def initialize(
        self,
        *,
        reference: str,
        email: str,
        amount: int,
        currency: str,
        callback_url: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> CheckoutSession:
        """Start a checkout for ``amount`` minor units under our ``reference``."""
        ...

    @abstractmethod
    def verify(self, reference: str) -> GatewayTransaction:
        """Fetch the current state of the transaction ``reference``."""
        ...

    @abstractmethod
    def refund(self, reference: str, amount: int | None = None, reason: str = "") -> GatewayRefund:
        """Refund a successful transaction, fully unless ``amount`` is given."""
        ...

    @abstractmethod
    def verify_signature(self, body: bytes, signature: str) -> bool:
        """Check that a webhook ``body`` was signed by the gateway."""
        ...
