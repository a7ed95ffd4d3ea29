"""Custom exception hierarchy for contactsync."""

from __future__ import annotations

from typing import Any, Optional


class ContactSyncError(Exception):
    """Base class for all custom errors raised by contactsync."""


# --- 3-layer hierarchy ---

class DomainError(ContactSyncError):
    """Base class for domain-level errors."""


class InfrastructureError(ContactSyncError):
    """Base class for infrastructure-level errors."""


class ApplicationError(ContactSyncError):
    """Base class for application-level errors."""


# --- Domain errors ---

class InvalidMutationOutcome(DomainError):
    """Raised when a bulk mutation report carries negative counts."""


# --- Infrastructure errors ---

class FetchFailure(InfrastructureError):
    """A page fetch failed for a given generation and cursor.

    The collaborator's original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        generation: int = 0,
        cursor: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.generation = generation
        self.cursor = cursor


class ContactSourceError(InfrastructureError):
    """Raised when the backing contact source cannot be read or written."""


# --- Application errors ---

class SettingsLoadError(ApplicationError):
    """Raised when the settings file cannot be read."""


class SettingsValidationError(ApplicationError):
    """Raised when the settings file does not match the schema."""


__all__ = [
    "ApplicationError",
    "ContactSourceError",
    "ContactSyncError",
    "DomainError",
    "FetchFailure",
    "InfrastructureError",
    "InvalidMutationOutcome",
    "SettingsLoadError",
    "SettingsValidationError",
]
