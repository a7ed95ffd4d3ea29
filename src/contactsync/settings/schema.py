"""Schema helpers for the contactsync settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROXIMITY_PX,
    FAST_SCROLL_PROXIMITY_PX,
    FAST_SCROLL_VELOCITY_PX,
    MAX_PAGE_SIZE,
    MIN_TRIGGER_INTERVAL_MS,
    SEARCH_DEBOUNCE_MS,
    SETTINGS_SCHEMA_ID,
    TRIGGER_FRACTION,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "contactsync/settings.schema.json",
    "type": "object",
    "required": ["schema", "list"],
    "properties": {
        "schema": {"const": SETTINGS_SCHEMA_ID},
        "list": {
            "type": "object",
            "properties": {
                "enable_incremental_load": {"type": "boolean"},
                "initial_page_size": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": MAX_PAGE_SIZE,
                },
                "proximity_threshold": {"type": "number", "minimum": 0},
                "fast_scroll_threshold": {"type": "number", "minimum": 0},
                "fast_scroll_velocity": {"type": "number", "minimum": 0},
                "min_trigger_interval_ms": {"type": "integer", "minimum": 0},
                "search_debounce_ms": {"type": "integer", "minimum": 0},
                "trigger_fraction": {
                    "type": "number",
                    "exclusiveMinimum": 0,
                    "maximum": 1,
                },
            },
            "additionalProperties": True,
        },
        "source": {
            "type": "object",
            "properties": {
                "contacts_path": {"type": ["string", "null"]},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": SETTINGS_SCHEMA_ID,
    "list": {
        "enable_incremental_load": True,
        "initial_page_size": DEFAULT_PAGE_SIZE,
        "proximity_threshold": DEFAULT_PROXIMITY_PX,
        "fast_scroll_threshold": FAST_SCROLL_PROXIMITY_PX,
        "fast_scroll_velocity": FAST_SCROLL_VELOCITY_PX,
        "min_trigger_interval_ms": MIN_TRIGGER_INTERVAL_MS,
        "search_debounce_ms": SEARCH_DEBOUNCE_MS,
        "trigger_fraction": TRIGGER_FRACTION,
    },
    "source": {
        "contacts_path": None,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in ("list", "source") and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    contacts_path = merged["source"].get("contacts_path")
    if contacts_path not in (None, ""):
        try:
            merged["source"]["contacts_path"] = os.fspath(contacts_path)
        except TypeError:
            merged["source"]["contacts_path"] = None
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
