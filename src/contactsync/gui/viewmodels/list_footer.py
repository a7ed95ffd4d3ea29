"""Bottom-of-list status shown under the loaded rows."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from contactsync.application.dtos import ListSnapshot
from contactsync.config import ITEM_TYPE_LABEL


class FooterState(str, Enum):
    HIDDEN = "hidden"
    LOADING_FIRST = "loading_first"
    LOADING_MORE = "loading_more"
    READY = "ready"
    ALL_LOADED = "all_loaded"
    EMPTY = "empty"
    RETRY = "retry"


@dataclass(frozen=True)
class ListFooter:
    state: FooterState = FooterState.HIDDEN
    message: str = ""

    @property
    def shows_progress(self) -> bool:
        return self.state in (FooterState.LOADING_FIRST, FooterState.LOADING_MORE)

    @property
    def offers_retry(self) -> bool:
        return self.state is FooterState.RETRY


def footer_for(snapshot: ListSnapshot, item_type: str = ITEM_TYPE_LABEL) -> ListFooter:
    """Pick the footer for *snapshot*.

    In-flight loads win over a recorded error, and an error wins over
    exhaustion.
    """
    if snapshot.signature is None:
        return ListFooter()
    if snapshot.is_loading:
        if snapshot.count == 0:
            return ListFooter(FooterState.LOADING_FIRST, f"Loading {item_type}...")
        return ListFooter(FooterState.LOADING_MORE, f"Loading more {item_type}...")
    if snapshot.last_error is not None:
        return ListFooter(
            FooterState.RETRY,
            f"Couldn't load {item_type}: {snapshot.last_error}. Retry?",
        )
    if snapshot.is_exhausted:
        if snapshot.count == 0:
            term = snapshot.signature.search
            if term:
                return ListFooter(FooterState.EMPTY, f'No {item_type} match "{term}"')
            return ListFooter(FooterState.EMPTY, f"No {item_type} found")
        return ListFooter(FooterState.ALL_LOADED, f"All {snapshot.count} {item_type} loaded")
    if snapshot.count > 0 and snapshot.signature.incremental:
        return ListFooter(FooterState.READY, "Scroll to load more...")
    return ListFooter()
