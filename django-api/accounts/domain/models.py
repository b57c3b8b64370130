"""Domain models representing persisted account state."""

from dataclasses import dataclass
from datetime import datetime

from common.domain import UserId


@dataclass(frozen=True)
class User:
    """Domain representation of a User. Never carries the password hash."""

    id: UserId
    email: str
    first_name: str
    last_name: str
    phone: str
    role: str
    bio: str
    profile_image: str | None
    default_reminder: str | None
    is_email_verified: bool
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_creator(self) -> bool:
        return self.role == "creator"


@dataclass(frozen=True)
class AuthResult:
    """A signed-in user and their bearer token."""

    user: User
    token: str
