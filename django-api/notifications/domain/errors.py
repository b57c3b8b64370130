"""Domain error codes for the notifications module."""

from enum import Enum

from common.domain.errors import DomainError, ErrorKind


class ErrorCode(Enum):
    """Domain error codes."""

    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"
    INVALID_NOTIFICATION_ID = "INVALID_NOTIFICATION_ID"
    DELIVERY_FAILED = "DELIVERY_FAILED"


class NotificationNotFoundError(DomainError):
    """Raised when a notification does not exist or belongs to someone else."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.NOTIFICATION_NOT_FOUND, message="Notification not found")


class InvalidNotificationIdError(DomainError):
    kind = ErrorKind.VALIDATION

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_NOTIFICATION_ID, message="Invalid notification ID format")


class DeliveryError(DomainError):
    """Raised by a channel sender that cannot deliver; recorded on the outbox row."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.DELIVERY_FAILED, message=message)
