"""Domain error codes for the payments module."""

from enum import Enum

from common.domain.errors import DomainError, ErrorKind


class ErrorCode(Enum):
    """Domain error codes."""

    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
    PAYMENT_VERIFICATION_FAILED = "PAYMENT_VERIFICATION_FAILED"
    PAYMENT_NOT_COMPLETED = "PAYMENT_NOT_COMPLETED"
    PAYMENT_GATEWAY_ERROR = "PAYMENT_GATEWAY_ERROR"
    INVALID_WEBHOOK_SIGNATURE = "INVALID_WEBHOOK_SIGNATURE"


class PaymentNotFoundError(DomainError):
    """Raised when a payment is not found (or is not visible to the caller)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.PAYMENT_NOT_FOUND, message="Payment not found")


class PaymentVerificationError(DomainError):
    """Raised when the gateway does not confirm a charge."""

    def __init__(self, gateway_status: str, message: str = "Payment verification failed") -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_VERIFICATION_FAILED,
            message=message,
            details={"gateway_status": gateway_status},
        )


class PaymentNotCompletedError(DomainError):
    """Raised when refunding a payment that was never completed."""

    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_NOT_COMPLETED,
            message="Only completed payments can be refunded",
            details={"status": status},
        )


class PaymentGatewayError(DomainError):
    """Raised when the payment gateway fails, times out or rejects a call."""

    kind = ErrorKind.GATEWAY

    def __init__(self, message: str = "Payment gateway error", status_code: int | None = None) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_GATEWAY_ERROR,
            message=message,
            details={"gateway_status_code": status_code} if status_code else {},
        )


class InvalidWebhookSignatureError(DomainError):
    """Raised when a gateway callback is not signed with our secret."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_WEBHOOK_SIGNATURE, message="Invalid webhook signature")
