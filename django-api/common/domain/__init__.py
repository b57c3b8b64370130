from common.domain.errors import (
    DomainError,
    DomainValidationError,
    ErrorKind,
    ForbiddenError,
    InvalidIdError,
)
from common.domain.value_objects import Capacity, EntityId, Money, UserId

__all__ = [
    "DomainError",
    "DomainValidationError",
    "ErrorKind",
    "ForbiddenError",
    "InvalidIdError",
    "EntityId",
    "UserId",
    "Money",
    "Capacity",
]
