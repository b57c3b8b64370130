"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from typing import Any

from accounts.domain import User
from common.domain import UserId


class UserStore(ABC):
    """Interface for account persistence operations."""

    @abstractmethod
    def get_user(self, user_id: UserId) -> User | None:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def email_exists(self, email: str) -> bool:
        """Check if an account uses this email (case-insensitive)."""
        ...

    @abstractmethod
    def create_user(self, *, email: str, password: str, **fields: Any) -> User:
        """Create an account; the password is hashed by the store."""
        ...

    @abstractmethod
    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if the credentials match an active account."""
        ...

    @abstractmethod
    def update_user(self, user_id: UserId, **fields: Any) -> User | None:
        """Apply profile changes and return the updated user."""
        ...
