"""Default configuration values for contactsync."""

from __future__ import annotations

from typing import Final

# Page size used when neither the caller nor the settings file provide one.
DEFAULT_PAGE_SIZE: Final[int] = 20
MAX_PAGE_SIZE: Final[int] = 500

# ---------------------------------------------------------------------------
# Scroll triggering
# ---------------------------------------------------------------------------

# Distance (pixels) from the bottom of the scroll area at which the sentinel
# is considered visible.  Fast scrolling widens the window so the next page is
# requested before the user reaches the end of the loaded rows.
DEFAULT_PROXIMITY_PX: Final[int] = 600
FAST_SCROLL_PROXIMITY_PX: Final[int] = 1200
FAST_SCROLL_VELOCITY_PX: Final[int] = 100
MIN_TRIGGER_INTERVAL_MS: Final[int] = 300

# Fraction of the loaded rows after which the sentinel row is placed.
TRIGGER_FRACTION: Final[float] = 0.8

SEARCH_DEBOUNCE_MS: Final[int] = 300

SETTINGS_SCHEMA_ID: Final[str] = "contactsync/settings@1"
ITEM_TYPE_LABEL: Final[str] = "contacts"
