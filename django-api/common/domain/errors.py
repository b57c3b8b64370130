"""Base domain errors shared by every app.

Each app defines its own ``ErrorCode`` members and ``DomainError``
subclasses. ``kind`` decides how the API layer reports the error.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Broad failure categories, mapped to HTTP statuses by the API layer."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    GATEWAY = "gateway"


class ErrorCode(Enum):
    """Error codes shared across apps."""

    INVALID_ID = "INVALID_ID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True, eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: Enum
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    kind = ErrorKind.CONFLICT

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class DomainValidationError(DomainError):
    """Raised when input breaks a domain rule that a serializer cannot see."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message, details=details)


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    kind = ErrorKind.VALIDATION

    def __init__(self, entity: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ID, message=f"Invalid {entity} ID format")


class ForbiddenError(DomainError):
    """Raised when the caller may not act on a resource."""

    kind = ErrorKind.PERMISSION

    def __init__(self, message: str = "You do not have permission to perform this action") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)
