"""Scroll geometry to sentinel visibility, without Qt."""

from __future__ import annotations

import time
from typing import Callable, Optional

from contactsync.application.options import SyncOptions


class ScrollProximity:
    """Decide whether the end-of-list sentinel counts as visible.

    ``sample(value, maximum)`` takes the vertical scroll position and range
    in pixels.  The sentinel is visible when the remaining distance is below
    the proximity threshold, or below the wider fast-scroll threshold when the
    last movement exceeded ``fast_scroll_velocity``.  A range of zero (content
    shorter than the viewport) is always visible.  Scroll-driven hits closer
    together than ``min_trigger_interval_ms`` are reported as not visible and
    flagged in :attr:`suppressed` so the caller can re-check later.
    """

    def __init__(
        self,
        options: Optional[SyncOptions] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._options = options or SyncOptions()
        self._clock = clock
        self._last_value: Optional[int] = None
        self._last_trigger: Optional[float] = None
        self.velocity: float = 0.0
        self.suppressed: bool = False

    @property
    def min_interval_ms(self) -> int:
        return self._options.min_trigger_interval_ms

    def reset(self) -> None:
        self._last_value = None
        self._last_trigger = None
        self.velocity = 0.0
        self.suppressed = False

    def threshold(self) -> float:
        if self.velocity > self._options.fast_scroll_velocity:
            return self._options.fast_scroll_threshold
        return self._options.proximity_threshold

    def sample(self, value: int, maximum: int) -> bool:
        self.suppressed = False
        if self._last_value is not None:
            self.velocity = abs(value - self._last_value)
        self._last_value = value

        # Nothing to scroll: the sentinel is already on screen.
        if maximum <= 0:
            return True

        distance = max(0, maximum - value)
        if distance >= self.threshold():
            return False

        now = self._clock()
        if self._last_trigger is not None:
            elapsed_ms = (now - self._last_trigger) * 1000.0
            if elapsed_ms < self._options.min_trigger_interval_ms:
                self.suppressed = True
                return False
        self._last_trigger = now
        return True
