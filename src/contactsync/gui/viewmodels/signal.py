"""Qt-free signals for the view-model layer.

``Signal`` is a plain observer list; ``ObservableProperty`` wraps a value and
emits ``changed(new, old)`` when it is replaced by an unequal one.  Record
lists compare by id, so a page made only of duplicates does not notify.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, List

_logger = logging.getLogger(__name__)


class Signal:
    """Observer list with per-handler error isolation.

    A handler that raises is logged under the signal's *name* and skipped;
    the remaining handlers still run.  Connecting is lock-protected, but
    handlers always run on the emitting thread.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._slots: List[Callable] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<Signal {self.name or hex(id(self))} ({self.handler_count} handlers)>"

    def connect(self, handler: Callable) -> None:
        with self._lock:
            if handler not in self._slots:
                self._slots.append(handler)

    def disconnect(self, handler: Callable) -> None:
        with self._lock:
            self._slots.remove(handler)

    def disconnect_all(self) -> None:
        with self._lock:
            self._slots.clear()

    def emit(self, *args: Any) -> int:
        """Call every handler with *args*; return how many completed."""
        with self._lock:
            slots = tuple(self._slots)
        completed = 0
        for slot in slots:
            try:
                slot(*args)
            except Exception as exc:
                _logger.error("Handler %r for signal %s failed: %s", slot, self.name or "<anonymous>", exc)
                continue
            completed += 1
        return completed

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._slots)


class ObservableProperty:
    """Bindable value holder used by the view models."""

    def __init__(self, initial_value: Any = None, name: str = "") -> None:
        self._value = initial_value
        self.changed = Signal(f"{name}.changed" if name else "")

    def __repr__(self) -> str:
        return f"<ObservableProperty {self.changed.name or ''} = {self._value!r}>"

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if new_value == self._value:
            return
        previous, self._value = self._value, new_value
        self.changed.emit(new_value, previous)
