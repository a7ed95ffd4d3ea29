"""Generation-guarded accumulation of paged records.

The accumulator owns the ordered, de-duplicated list of records loaded so far
for one :class:`QuerySignature`.  Every reset mints a new *generation*; page
results carry the generation they were requested under and are dropped on
arrival when it is no longer current, so a superseded fetch can never write
into a fresh list.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, List, Optional, Set

from contactsync.application.dtos import ListSnapshot, LoadState
from contactsync.application.services.dispatch import FetchDispatcher, ImmediateDispatcher
from contactsync.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from contactsync.domain.models.core import Record
from contactsync.domain.models.query import QuerySignature
from contactsync.domain.repositories import Page, PageFetcher
from contactsync.errors import FetchFailure

LOGGER = logging.getLogger(__name__)

Listener = Callable[[ListSnapshot], None]


class RecordAccumulator:
    """Stateful paged loader with stale-result protection.

    Callers start an accumulation with :meth:`reset` and extend it with
    :meth:`load_next`.  Results come back through :meth:`on_page_arrived` /
    :meth:`on_page_failed`, either inline (``ImmediateDispatcher``) or later on
    the same event loop (``QtFetchDispatcher``).
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        page_size: int = DEFAULT_PAGE_SIZE,
        dispatcher: Optional[FetchDispatcher] = None,
        listener: Optional[Listener] = None,
    ) -> None:
        if not 0 < page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
        self._fetcher = fetcher
        self._page_size = page_size
        self._dispatcher: FetchDispatcher = dispatcher or ImmediateDispatcher()
        self._listener = listener

        # State
        self._generation: int = 0
        self._signature: Optional[QuerySignature] = None
        self._records: List[Record] = []
        self._seen_ids: Set[str] = set()
        self._cursor: Optional[Any] = None
        self._pages_loaded: int = 0
        self._in_flight: bool = False
        self._exhausted: bool = False
        self._last_error: Optional[FetchFailure] = None
        self._state: LoadState = LoadState.IDLE

    # -- properties --------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def signature(self) -> Optional[QuerySignature]:
        return self._signature

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def cursor(self) -> Optional[Any]:
        return self._cursor

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def pages_loaded(self) -> int:
        return self._pages_loaded

    @property
    def is_loading(self) -> bool:
        return self._in_flight

    @property
    def is_exhausted(self) -> bool:
        return self._exhausted

    @property
    def last_error(self) -> Optional[FetchFailure]:
        return self._last_error

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def incremental(self) -> bool:
        return self._signature is None or self._signature.incremental

    @property
    def can_load_more(self) -> bool:
        return (
            self._signature is not None
            and self.incremental
            and not self._exhausted
            and not self._in_flight
            and self._last_error is None
        )

    def set_listener(self, listener: Optional[Listener]) -> None:
        self._listener = listener

    def snapshot(self) -> ListSnapshot:
        return ListSnapshot(
            records=tuple(self._records),
            state=self._state,
            generation=self._generation,
            signature=self._signature,
            last_error=self._last_error,
            pages_loaded=self._pages_loaded,
        )

    # -- public API --------------------------------------------------------

    def reset(self, signature: Optional[QuerySignature] = None) -> int:
        """Start a new generation for *signature* and request its first page.

        Without *signature* the current one is reused (refresh).  State is
        cleared before the fetch is issued so no stale row can interleave with
        the new generation's rows.  Returns the new generation.
        """
        if signature is None:
            signature = self._signature or QuerySignature()
        self._generation += 1
        self._signature = signature
        self._records = []
        self._seen_ids = set()
        self._cursor = None
        self._pages_loaded = 0
        self._in_flight = False
        self._exhausted = False
        self._last_error = None
        LOGGER.debug("Generation %d started for %s", self._generation, signature)
        self._issue_fetch()
        return self._generation

    def load_next(self) -> bool:
        """Request the page at the current cursor.

        No-op (returns ``False``) when nothing was loaded yet, incremental
        loading is off, the list is exhausted, or a fetch is in flight.  After
        a failure this re-issues the cursor that failed.
        """
        if self._signature is None:
            return False
        if not self.incremental and self._pages_loaded > 0:
            return False
        if self._exhausted or self._in_flight:
            return False
        self._issue_fetch()
        return True

    def on_page_arrived(self, generation: int, page: Page) -> bool:
        """Merge *page* if it belongs to the current generation.

        Records whose ``id`` is already present are dropped; the existing
        entry keeps its position and payload.
        """
        if generation != self._generation:
            LOGGER.debug(
                "Discarding page from stale generation %d (current %d)",
                generation,
                self._generation,
            )
            return False

        added = 0
        for record in page.records:
            if record.id in self._seen_ids:
                continue
            self._seen_ids.add(record.id)
            self._records.append(record)
            added += 1
        dropped = len(page.records) - added

        self._cursor = page.next_cursor
        self._pages_loaded += 1
        self._in_flight = False
        self._last_error = None
        if page.next_cursor is None:
            self._exhausted = True
            self._state = LoadState.EXHAUSTED
            LOGGER.info(
                "Generation %d exhausted after %d pages (%d records)",
                generation,
                self._pages_loaded,
                len(self._records),
            )
        else:
            self._state = LoadState.IDLE
        LOGGER.debug(
            "Generation %d page %d merged: %d added, %d duplicates dropped",
            generation,
            self._pages_loaded,
            added,
            dropped,
        )
        self._notify()
        return True

    def on_page_failed(self, generation: int, error: Exception) -> bool:
        """Record a fetch failure for the current generation."""
        if generation != self._generation:
            LOGGER.debug(
                "Discarding failure from stale generation %d (current %d): %s",
                generation,
                self._generation,
                error,
            )
            return False

        if isinstance(error, FetchFailure):
            failure = error
        else:
            failure = FetchFailure(str(error) or error.__class__.__name__, generation=generation, cursor=self._cursor)
            failure.__cause__ = error
        self._in_flight = False
        self._last_error = failure
        self._state = LoadState.ERROR
        LOGGER.warning(
            "Page fetch failed for generation %d at cursor %r: %s",
            generation,
            self._cursor,
            failure,
        )
        self._notify()
        return True

    # -- internal ----------------------------------------------------------

    def _issue_fetch(self) -> None:
        generation = self._generation
        signature = self._signature
        cursor = self._cursor
        page_size = self._page_size

        self._in_flight = True
        self._last_error = None
        self._state = (
            LoadState.LOADING_FIRST_PAGE if self._pages_loaded == 0 else LoadState.LOADING_NEXT_PAGE
        )
        LOGGER.debug("Generation %d fetching cursor %r", generation, cursor)
        self._notify()

        self._dispatcher.dispatch(
            lambda: self._fetcher.fetch(signature, cursor, page_size),
            partial(self.on_page_arrived, generation),
            partial(self.on_page_failed, generation),
        )

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self.snapshot())
