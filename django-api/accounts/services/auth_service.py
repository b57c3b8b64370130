"""Account service - sign-up, sign-in and profile management."""

import logging
from typing import Any

from accounts.domain import AuthResult, User
from accounts.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from accounts.services.tokens import issue_token
from accounts.stores.interfaces import UserStore
from common.domain import InvalidIdError, UserId

logger = logging.getLogger(__name__)

PROFILE_FIELDS = frozenset(
    {"first_name", "last_name", "phone", "bio", "profile_image", "default_reminder"}
)


class AuthService:
    """Service for identity and profile operations."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def sign_up(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str = "",
        role: str = "eventee",
    ) -> AuthResult:
        """Create an account and return it with a fresh token.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
        """
        email = email.strip().lower()
        if self._store.email_exists(email):
            raise EmailAlreadyRegisteredError()
        user = self._store.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role,
        )
        logger.info("Registered %s account %s", user.role, user.id)
        return AuthResult(user=user, token=issue_token(user))

    def sign_in(self, *, email: str, password: str) -> AuthResult:
        """Check credentials and return the user with a fresh token.

        Raises:
            InvalidCredentialsError: If the credentials do not match.
        """
        user = self._store.authenticate(email.strip().lower(), password)
        if user is None:
            logger.warning("Failed sign-in attempt")
            raise InvalidCredentialsError()
        return AuthResult(user=user, token=issue_token(user))

    def get_user(self, user_id: str) -> User:
        user = self._store.get_user(_parse_user_id(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def update_profile(self, user_id: str, changes: dict[str, Any]) -> User:
        """Apply profile changes; fields outside the profile are ignored."""
        fields = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
        if not fields:
            return self.get_user(user_id)
        user = self._store.update_user(_parse_user_id(user_id), **fields)
        if user is None:
            raise UserNotFoundError(user_id)
        return user


def _parse_user_id(user_id: str) -> UserId:
    try:
        return UserId.from_string(user_id)
    except ValueError:
        raise InvalidIdError("user")
