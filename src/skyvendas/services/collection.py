"""
Incremental paginated list synchronization.

A PagedCollection accumulates the pages returned by a page fetcher into
one de-duplicated, arrival-ordered list and tracks whether more pages
are expected. It is driven by a single presenter on one event loop:

- load_first_page(): initial load, replaces the list
- load_next_page(): appends the next page, skipping known ids
- refresh(): reloads page 1 and replaces the list, superseding load-more
- sample(n): random subset of the accumulated items

Fetch failures never propagate. They are recorded as `last_error` and
the presenter decides whether to retry.
"""

import asyncio
from collections.abc import Awaitable, Callable, Hashable, Iterable, Sequence
from dataclasses import replace
import logging
from operator import attrgetter
import random
from typing import Any, Generic, TypeVar

from skyvendas.models.collection import (
    CollectionState,
    CollectionStatus,
    ExhaustionReason,
    FetchError,
)
from skyvendas.models.pagination import PageResult, coerce_page
from skyvendas.utils.logging_config import PerformanceMonitor

T = TypeVar("T")

PageFetcher = Callable[[int], Awaitable[Sequence[T] | PageResult[T] | None]]
StateListener = Callable[[CollectionState[T]], None]

FIRST_PAGE = 1

logger = logging.getLogger(__name__)


class PagedCollection(Generic[T]):
    """
    Client-side state machine over a page-numbered remote list.

    The `status` field is the only mutual-exclusion mechanism: it is
    checked and set before the first await of every operation, so at
    most one fetch per collection is applied at a time. Every fetch is
    stamped with the generation current at launch; refresh() and close()
    bump the generation and stale results are dropped on arrival.
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        *,
        page_size: int,
        id_getter: Callable[[T], Hashable] | None = None,
        rng: random.Random | None = None,
        name: str = "collection",
    ):
        """
        Args:
            fetch_page: Async callable taking a 1-based page number
            page_size: Number of items a full page holds
            id_getter: Identity extractor (defaults to the `id` attribute)
            rng: Random source for sample()
            name: Label used in log messages
        """
        if page_size < 1:
            raise ValueError("page_size must be >= 1")

        self._fetch_page = fetch_page
        self.page_size = page_size
        self._id_of = id_getter or attrgetter("id")
        self._rng = rng or random.Random()
        self.name = name
        self._state: CollectionState[T] = CollectionState()
        self._listeners: list[StateListener] = []
        self._closed = False

    # -------------------- Read access --------------------

    @property
    def state(self) -> CollectionState[T]:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        return self._state.items

    @property
    def status(self) -> CollectionStatus:
        return self._state.status

    @property
    def has_more(self) -> bool:
        return self._state.has_more

    @property
    def last_error(self) -> FetchError | None:
        return self._state.last_error

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._state.items)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------- Operations --------------------

    async def load_first_page(self) -> bool:
        """
        Load page 1 and replace the list with it.

        No-op while any fetch is in flight, and once a first page has been
        applied unless the last fetch failed; use refresh() to start over.
        On failure the list is cleared and further load-more calls are
        blocked until refresh.

        Returns:
            True if the fetched result was applied
        """
        state = self._state
        loaded = state.cursor > FIRST_PAGE and state.last_error is None
        if self._closed or state.status.is_loading or loaded:
            logger.debug(
                f"{self.name}: load_first_page ignored "
                f"(status={state.status}, cursor={state.cursor})"
            )
            return False

        generation = state.generation
        self._update(status=CollectionStatus.LOADING_FIRST, last_error=None)

        try:
            page = await self._fetch(FIRST_PAGE, generation)
        except Exception as e:
            if self._is_stale(generation, FIRST_PAGE):
                return False
            logger.warning(f"{self.name}: first page failed: {e}")
            self._update(
                items=(),
                has_more=False,
                exhausted_by=ExhaustionReason.ERROR,
                last_error=FetchError.from_exception(e, FIRST_PAGE),
                status=CollectionStatus.IDLE,
            )
            return False

        if self._is_stale(generation, FIRST_PAGE):
            return False

        has_more, reason = self._first_page_outcome(page)
        self._update(
            items=tuple(self._unique(page.items, set())),
            cursor=FIRST_PAGE + 1,
            has_more=has_more,
            exhausted_by=reason,
            status=CollectionStatus.IDLE,
        )
        return True

    async def load_next_page(self) -> bool:
        """
        Fetch the page at the cursor and dedup-merge it into the list.

        No-op unless the collection is idle and more pages are expected,
        so rapid repeated triggers cause a single fetch.

        Returns:
            True if the fetched result was applied
        """
        state = self._state
        if self._closed or not state.has_more or state.status.is_loading:
            logger.debug(
                f"{self.name}: load_next_page ignored "
                f"(status={state.status}, has_more={state.has_more})"
            )
            return False

        generation = state.generation
        page_number = state.cursor
        self._update(status=CollectionStatus.LOADING_MORE, last_error=None)

        try:
            page = await self._fetch(page_number, generation)
        except Exception as e:
            if self._is_stale(generation, page_number):
                return False
            logger.warning(f"{self.name}: page {page_number} failed: {e}")
            self._update(
                has_more=False,
                exhausted_by=ExhaustionReason.ERROR,
                last_error=FetchError.from_exception(e, page_number),
                status=CollectionStatus.IDLE,
            )
            return False

        if self._is_stale(generation, page_number):
            return False

        if not page.items:
            self._update(
                has_more=False,
                exhausted_by=ExhaustionReason.EMPTY_PAGE,
                status=CollectionStatus.IDLE,
            )
            return True

        current = self._state.items
        known = {self._id_of(item) for item in current}
        survivors = list(self._unique(page.items, known))

        reason = None
        if not survivors:
            logger.warning(
                f"{self.name}: page {page_number} only repeated known items, "
                "treating it as the end of the list"
            )
            reason = ExhaustionReason.DUPLICATE_PAGE
        elif page.explicitly_exhausted:
            reason = ExhaustionReason.SIGNALED
        elif len(survivors) < self.page_size:
            reason = ExhaustionReason.SHORT_PAGE
        elif len(page.items) != self.page_size:
            reason = ExhaustionReason.OVERSIZED_PAGE

        if survivors and len(survivors) < len(page.items):
            logger.info(
                f"{self.name}: page {page_number} dropped "
                f"{len(page.items) - len(survivors)} duplicate item(s)"
            )

        self._update(
            items=current + tuple(survivors),
            cursor=page_number + 1,
            has_more=reason is None,
            exhausted_by=reason,
            status=CollectionStatus.IDLE,
        )
        return True

    async def refresh(self) -> bool:
        """
        Reload page 1 and replace the list (pull-to-refresh).

        Supersedes an in-flight load_next_page, whose result is then
        discarded. Coalesced with an in-flight page-1 fetch. On failure
        the previous items stay visible and only `last_error` is set.

        Returns:
            True if the fetched result was applied
        """
        if self._closed or self._state.status in (
            CollectionStatus.LOADING_FIRST,
            CollectionStatus.REFRESHING,
        ):
            logger.debug(f"{self.name}: refresh ignored ({self._state.status})")
            return False

        if self._state.status is CollectionStatus.LOADING_MORE:
            logger.info(
                f"{self.name}: refresh supersedes in-flight page {self._state.cursor}"
            )

        generation = self._state.generation + 1
        self._update(
            generation=generation,
            status=CollectionStatus.REFRESHING,
            last_error=None,
        )

        try:
            page = await self._fetch(FIRST_PAGE, generation)
        except Exception as e:
            if self._is_stale(generation, FIRST_PAGE):
                return False
            logger.warning(f"{self.name}: refresh failed: {e}")
            self._update(
                last_error=FetchError.from_exception(e, FIRST_PAGE),
                status=CollectionStatus.IDLE,
            )
            return False

        if self._is_stale(generation, FIRST_PAGE):
            return False

        has_more, reason = self._first_page_outcome(page)
        self._update(
            items=tuple(self._unique(page.items, set())),
            cursor=FIRST_PAGE + 1,
            has_more=has_more,
            exhausted_by=reason,
            status=CollectionStatus.IDLE,
        )
        return True

    def sample(self, n: int) -> list[T]:
        """
        Draw min(n, len(items)) distinct items at random.

        Uses a partial Fisher-Yates shuffle over a copy; the collection
        order is left untouched.
        """
        if n < 0:
            raise ValueError("sample size must be non-negative")

        pool = list(self._state.items)
        count = min(n, len(pool))
        for i in range(count):
            j = self._rng.randrange(i, len(pool))
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:count]

    def close(self) -> None:
        """Tear down: drop any in-flight result and ignore further calls."""
        if self._closed:
            return
        self._closed = True
        self._state = replace(
            self._state,
            generation=self._state.generation + 1,
            status=CollectionStatus.IDLE,
        )
        self._listeners.clear()
        logger.debug(f"{self.name}: closed")

    # -------------------- Internals --------------------

    async def _fetch(self, page_number: int, generation: int) -> PageResult[T]:
        try:
            with PerformanceMonitor(logger, f"{self.name}: fetch", page=page_number):
                return coerce_page(await self._fetch_page(page_number))
        except asyncio.CancelledError:
            if generation == self._state.generation:
                self._update(status=CollectionStatus.IDLE)
            raise

    def _is_stale(self, generation: int, page_number: int) -> bool:
        if generation == self._state.generation:
            return False
        logger.info(
            f"{self.name}: discarding stale result for page {page_number} "
            f"(generation {generation}, current {self._state.generation})"
        )
        return True

    def _first_page_outcome(
        self, page: PageResult[T]
    ) -> tuple[bool, ExhaustionReason | None]:
        if page.explicitly_exhausted:
            return False, ExhaustionReason.SIGNALED
        if not page.items:
            return False, ExhaustionReason.EMPTY_PAGE
        if len(page.items) < self.page_size:
            return False, ExhaustionReason.SHORT_PAGE
        # only an exactly full page promises more
        if len(page.items) != self.page_size:
            return False, ExhaustionReason.OVERSIZED_PAGE
        return True, None

    def _unique(self, items: Iterable[T], seen: set[Any]) -> Iterable[T]:
        """Yield items whose id is not in `seen`, recording each new id."""
        for item in items:
            key = self._id_of(item)
            if key in seen:
                continue
            seen.add(key)
            yield item

    def _update(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        logger.debug(f"{self.name}: {self._state.to_dict()}")
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception(f"{self.name}: state listener failed")
