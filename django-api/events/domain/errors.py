"""Domain error codes for the events module."""

from enum import Enum

from common.domain.errors import DomainError, ErrorKind


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_SCHEDULE = "INVALID_SCHEDULE"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    EVENT_LOCKED = "EVENT_LOCKED"
    EVENT_HAS_TICKETS = "EVENT_HAS_TICKETS"
    NOT_EVENT_OWNER = "NOT_EVENT_OWNER"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
            details={"event_id": event_id},
        )


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    kind = ErrorKind.VALIDATION

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidScheduleError(DomainError):
    """Raised when start/end dates break the schedule rules."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SCHEDULE, message=message)


class InvalidCapacityError(DomainError):
    """Raised when capacity cannot hold the tickets already issued."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_CAPACITY, message=message)


class InvalidStatusTransitionError(DomainError):
    """Raised when an event cannot move to the requested status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot change event status from {current} to {target}",
        )


class EventLockedError(DomainError):
    """Raised when editing an event that is cancelled or completed."""

    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_LOCKED,
            message=f"A {status} event can no longer be modified",
        )


class EventHasTicketsError(DomainError):
    """Raised when deleting an event that already issued tickets."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_HAS_TICKETS,
            message="Events with issued tickets cannot be deleted; cancel the event instead",
        )


class NotEventOwnerError(DomainError):
    """Raised when a creator acts on an event they do not own."""

    kind = ErrorKind.PERMISSION

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_EVENT_OWNER,
            message="Unauthorized: You are not the event creator",
        )
