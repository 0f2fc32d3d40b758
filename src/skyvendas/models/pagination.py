"""Page request and page result value types."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageRequest(BaseModel):
    """A 1-based page number plus a fixed page size."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(..., ge=1, description="Items per page")

    @property
    def offset(self) -> int:
        """Row offset equivalent of this page."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @classmethod
    def from_offset(cls, offset: int, limit: int) -> PageRequest:
        """Build the page form of an offset/limit pair aligned on `limit`."""
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if offset < 0 or offset % limit:
            raise ValueError(f"offset {offset} is not aligned on page size {limit}")
        return cls(page=offset // limit + 1, page_size=limit)


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """
    Items of one fetched page plus an optional exhaustion signal.

    `has_more` wins when set; otherwise `total_pages` and `page` are used.
    """

    items: Sequence[T]
    has_more: bool | None = None
    total_pages: int | None = None
    page: int | None = None

    @property
    def explicitly_exhausted(self) -> bool:
        if self.has_more is not None:
            return not self.has_more
        if self.total_pages is not None and self.page is not None:
            return self.page >= self.total_pages
        return False


def coerce_page(result: Sequence[T] | PageResult[T] | None) -> PageResult[T]:
    """Normalize a fetcher return value into a PageResult."""
    if result is None:
        return PageResult(items=())
    if isinstance(result, PageResult):
        return result
    return PageResult(items=tuple(result))
