"""Domain error codes for the accounts module."""

from enum import Enum

from common.domain.errors import DomainError, ErrorKind


class ErrorCode(Enum):
    """Domain error codes."""

    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    USER_NOT_FOUND = "USER_NOT_FOUND"


class EmailAlreadyRegisteredError(DomainError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EMAIL_TAKEN, message="Email already registered")


class InvalidCredentialsError(DomainError):
    """Raised when the email/password pair does not match an account."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIALS, message="Invalid email or password")


class InvalidTokenError(DomainError):
    """Raised when a bearer token is malformed, tampered with or expired."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, reason: str = "Invalid or expired token") -> None:
        super().__init__(code=ErrorCode.INVALID_TOKEN, message=reason)


class UserNotFoundError(DomainError):
    """Raised when a user account does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User account not found",
            details={"user_id": user_id},
        )
