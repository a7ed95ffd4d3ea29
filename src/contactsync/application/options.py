"""Typed projection of the ``list`` settings section."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from contactsync.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROXIMITY_PX,
    FAST_SCROLL_PROXIMITY_PX,
    FAST_SCROLL_VELOCITY_PX,
    MAX_PAGE_SIZE,
    MIN_TRIGGER_INTERVAL_MS,
    SEARCH_DEBOUNCE_MS,
    TRIGGER_FRACTION,
)


@dataclass(frozen=True)
class SyncOptions:
    enable_incremental_load: bool = True
    initial_page_size: int = DEFAULT_PAGE_SIZE
    proximity_threshold: float = DEFAULT_PROXIMITY_PX
    fast_scroll_threshold: float = FAST_SCROLL_PROXIMITY_PX
    fast_scroll_velocity: float = FAST_SCROLL_VELOCITY_PX
    min_trigger_interval_ms: int = MIN_TRIGGER_INTERVAL_MS
    search_debounce_ms: int = SEARCH_DEBOUNCE_MS
    trigger_fraction: float = TRIGGER_FRACTION

    def __post_init__(self) -> None:
        if not 0 < self.initial_page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"initial_page_size must be between 1 and {MAX_PAGE_SIZE}, "
                f"got {self.initial_page_size}"
            )
        if self.proximity_threshold < 0:
            raise ValueError("proximity_threshold must not be negative")
        if not 0.0 < self.trigger_fraction <= 1.0:
            raise ValueError("trigger_fraction must be in (0, 1]")

    @classmethod
    def from_settings(cls, source: Any) -> SyncOptions:
        """Build options from a settings manager, a full settings document or
        a bare ``list`` section.  Unknown keys are ignored."""
        if hasattr(source, "get") and not isinstance(source, Mapping):
            section = source.get("list", {}) or {}
        elif isinstance(source, Mapping) and isinstance(source.get("list"), Mapping):
            section = source["list"]
        else:
            section = source or {}
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in section.items() if key in known})
