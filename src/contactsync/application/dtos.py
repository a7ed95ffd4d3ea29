from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from contactsync.domain.models.core import Record
from contactsync.domain.models.query import QuerySignature


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING_FIRST_PAGE = "loading_first_page"
    LOADING_NEXT_PAGE = "loading_next_page"
    EXHAUSTED = "exhausted"
    ERROR = "error"


@dataclass(frozen=True)
class ListSnapshot:
    """Read-only view of the accumulator handed to the presentation layer."""

    records: Tuple[Record, ...] = field(default_factory=tuple)
    state: LoadState = LoadState.IDLE
    generation: int = 0
    signature: Optional[QuerySignature] = None
    last_error: Optional[Exception] = None
    pages_loaded: int = 0

    @property
    def is_loading(self) -> bool:
        return self.state in (LoadState.LOADING_FIRST_PAGE, LoadState.LOADING_NEXT_PAGE)

    @property
    def is_exhausted(self) -> bool:
        return self.state is LoadState.EXHAUSTED

    @property
    def count(self) -> int:
        return len(self.records)
