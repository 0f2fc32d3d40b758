"""State types for paged collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from skyvendas.utils.errors import error_kind

T = TypeVar("T")


class CollectionStatus(StrEnum):
    """Mutually exclusive activity of a collection."""

    IDLE = "idle"
    LOADING_FIRST = "loading_first"
    LOADING_MORE = "loading_more"
    REFRESHING = "refreshing"

    @property
    def is_loading(self) -> bool:
        return self is not CollectionStatus.IDLE


class ExhaustionReason(StrEnum):
    """Why a collection stopped expecting more pages."""

    SHORT_PAGE = "short_page"
    OVERSIZED_PAGE = "oversized_page"
    EMPTY_PAGE = "empty_page"
    DUPLICATE_PAGE = "duplicate_page"
    SIGNALED = "signaled"
    ERROR = "error"


@dataclass(frozen=True)
class FetchError:
    """Descriptor of the last failed fetch, surfaced to presenters."""

    kind: str
    message: str
    page: int
    exception: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def is_transient(self) -> bool:
        return self.kind == "transient"

    @classmethod
    def from_exception(cls, error: BaseException, page: int) -> FetchError:
        return cls(
            kind=error_kind(error),
            message=str(error) or type(error).__name__,
            page=page,
            exception=error,
        )


@dataclass(frozen=True)
class CollectionState(Generic[T]):
    """Immutable snapshot of a paged collection."""

    items: tuple[T, ...] = ()
    cursor: int = 1
    has_more: bool = True
    status: CollectionStatus = CollectionStatus.IDLE
    last_error: FetchError | None = None
    exhausted_by: ExhaustionReason | None = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status is CollectionStatus.LOADING_FIRST

    @property
    def is_loading_more(self) -> bool:
        return self.status is CollectionStatus.LOADING_MORE

    @property
    def is_refreshing(self) -> bool:
        return self.status is CollectionStatus.REFRESHING

    def to_dict(self) -> dict[str, Any]:
        """Summary without the items, for logs and JSON output."""
        return {
            "count": len(self.items),
            "cursor": self.cursor,
            "has_more": self.has_more,
            "status": self.status.value,
            "exhausted_by": self.exhausted_by.value if self.exhausted_by else None,
            "error": self.last_error.message if self.last_error else None,
        }
