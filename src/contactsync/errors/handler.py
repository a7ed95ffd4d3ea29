"""Central reporting point for errors that reach the presentation layer."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from contactsync.errors import FetchFailure
from contactsync.events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    """Log an error, publish :class:`ErrorOccurredEvent` and notify the UI.

    Fetch failures contribute their generation and cursor to the context so
    log lines and subscribers can tell which page load broke.
    """

    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[Dict[str, Any]] = None,
    ):
        details = dict(context or {})
        if isinstance(error, FetchFailure):
            details.setdefault("generation", error.generation)
            details.setdefault("cursor", error.cursor)

        report = getattr(self._logger, severity.value, self._logger.error)
        report("%s: %s", type(error).__name__, error, extra={"context": details})

        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=details))

        if self._ui_callback is not None and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)
