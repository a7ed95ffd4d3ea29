"""Collaborator contracts consumed by the list core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

from contactsync.domain.models.core import Record
from contactsync.domain.models.query import QuerySignature


@dataclass(frozen=True)
class Page:
    """One batch returned by a :class:`PageFetcher`.

    ``next_cursor`` is ``None`` when no further pages exist.
    """

    records: Sequence[Record] = field(default_factory=tuple)
    next_cursor: Optional[Any] = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


class PageFetcher(Protocol):
    """Fetch one page of records for a signature, starting at *cursor*.

    ``cursor`` is ``None`` for the first page.  Implementations may block and
    may raise; they are expected to enforce their own timeout.
    """

    def fetch(
        self,
        signature: QuerySignature,
        cursor: Optional[Any],
        page_size: int,
    ) -> Page: ...
