"""Sentinel-driven requests for the next page."""

from __future__ import annotations

import logging
import math
from typing import Optional

from contactsync.application.services.record_accumulator import RecordAccumulator
from contactsync.config import TRIGGER_FRACTION

LOGGER = logging.getLogger(__name__)


class ScrollTrigger:
    """Turn "sentinel became visible" reports into ``load_next()`` calls.

    Reports that arrive while a page is in flight are dropped, not queued.
    After a failed fetch the trigger stays quiet until the caller retries or
    resets, so a visible sentinel never re-issues the failed cursor by itself.
    The presentation layer reports visibility again once the new rows are
    laid out, which re-triggers if the sentinel is still on screen.
    """

    def __init__(
        self,
        accumulator: RecordAccumulator,
        *,
        enabled: bool = True,
        trigger_fraction: float = TRIGGER_FRACTION,
    ) -> None:
        if not 0.0 < trigger_fraction <= 1.0:
            raise ValueError(f"trigger_fraction must be in (0, 1], got {trigger_fraction}")
        self._accumulator = accumulator
        self._enabled = enabled
        self._trigger_fraction = trigger_fraction
        self._visible = False
        self._ignored = 0

    @property
    def enabled(self) -> bool:
        return self._enabled and self._accumulator.incremental

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def ignored_count(self) -> int:
        """Visible reports dropped because a load was already running."""
        return self._ignored

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    def on_visibility_changed(self, visible: bool) -> bool:
        """Handle a sentinel visibility report; return ``True`` if a fetch started."""
        self._visible = bool(visible)
        if not self._visible or not self.enabled:
            return False
        if self._accumulator.is_loading:
            self._ignored += 1
            return False
        if self._accumulator.is_exhausted:
            return False
        if self._accumulator.last_error is not None:
            # Failed pages are only re-requested through retry() or a reset.
            return False
        started = self._accumulator.load_next()
        if started:
            LOGGER.debug(
                "Sentinel visible: requested page %d of generation %d",
                self._accumulator.pages_loaded + 1,
                self._accumulator.generation,
            )
        return started

    def trigger_index(self, total: int) -> Optional[int]:
        """Return the row that should host the sentinel for *total* rows."""
        if total <= 0 or not self.enabled or self._accumulator.is_exhausted:
            return None
        return min(total - 1, int(math.floor(total * self._trigger_fraction)))
