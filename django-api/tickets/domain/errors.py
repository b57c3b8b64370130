"""Domain error codes for the tickets module."""

from datetime import datetime
from enum import Enum

from common.domain.errors import DomainError, ErrorKind


class ErrorCode(Enum):
    """Domain error codes."""

    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_TICKET_ID = "INVALID_TICKET_ID"
    EVENT_NOT_FREE = "EVENT_NOT_FREE"
    EVENT_IS_FREE = "EVENT_IS_FREE"
    EVENT_NOT_AVAILABLE = "EVENT_NOT_AVAILABLE"
    SOLD_OUT = "SOLD_OUT"
    DUPLICATE_TICKET = "DUPLICATE_TICKET"
    TICKET_ALREADY_USED = "TICKET_ALREADY_USED"
    TICKET_NOT_VALID = "TICKET_NOT_VALID"
    INVALID_QR_CODE = "INVALID_QR_CODE"


class TicketNotFoundError(DomainError):
    """Raised when a ticket is not found (or is not visible to the caller)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.TICKET_NOT_FOUND, message="Ticket not found")


class InvalidTicketIdError(DomainError):
    """Raised when a ticket ID is invalid."""

    kind = ErrorKind.VALIDATION

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_TICKET_ID, message="Invalid ticket ID format")


class EventNotFreeError(DomainError):
    """Raised when claiming a free ticket for a paid event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FREE,
            message="This is not a free event. Please use the payment flow.",
        )


class EventIsFreeError(DomainError):
    """Raised when starting a payment for a free event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_IS_FREE,
            message="This event is free. Please claim your ticket instead.",
        )


class EventNotAvailableError(DomainError):
    """Raised when the event is not published."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_AVAILABLE,
            message="This event is not available for ticket claims",
        )


class SoldOutError(DomainError):
    """Raised when no tickets are left."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SOLD_OUT,
            message="Sorry, no tickets are available for this event",
        )


class DuplicateTicketError(DomainError):
    """Raised when the user already holds an active ticket for the event."""

    def __init__(self, ticket_id: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_TICKET,
            message="You already have a ticket for this event",
            details={"ticket_id": ticket_id} if ticket_id else {},
        )


class TicketAlreadyUsedError(DomainError):
    """Raised when admitting a ticket that was already scanned."""

    def __init__(self, scanned_at: datetime | None) -> None:
        super().__init__(
            code=ErrorCode.TICKET_ALREADY_USED,
            message="Ticket already used",
            details={"scanned_at": scanned_at.isoformat() if scanned_at else None},
        )


class TicketNotValidError(DomainError):
    """Raised when admitting a cancelled or refunded ticket."""

    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_VALID,
            message="Ticket is no longer valid",
            details={"status": status},
        )


class InvalidQRCodeError(DomainError):
    """Raised when a scanned QR payload cannot be read."""

    kind = ErrorKind.VALIDATION

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_QR_CODE, message="Invalid QR code")
