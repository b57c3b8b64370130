"""Limit/offset pagination primitives."""

from dataclasses import dataclass
from math import ceil
from typing import Generic, Mapping, TypeVar

from common.domain.errors import DomainValidationError
from eventful.conf import get_setting

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """A validated page window."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "PageRequest":
        default_limit = get_setting("DEFAULT_PAGE_SIZE")
        try:
            page = int(params.get("page", 1))
            limit = int(params.get("limit", default_limit))
        except (TypeError, ValueError):
            raise DomainValidationError("page and limit must be integers")
        if page < 1 or limit < 1:
            raise DomainValidationError("page and limit must be positive")
        return cls(page=page, limit=min(limit, get_setting("MAX_PAGE_SIZE")))


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total count."""

    items: tuple[T, ...]
    total: int
    request: PageRequest

    @property
    def pages(self) -> int:
        return ceil(self.total / self.request.limit) if self.total else 0

    def meta(self) -> dict[str, int]:
        return {
            "page": self.request.page,
            "limit": self.request.limit,
            "total": self.total,
            "pages": self.pages,
        }
