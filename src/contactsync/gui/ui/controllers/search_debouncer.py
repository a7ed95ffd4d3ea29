"""Commit search text to the list after typing pauses."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from contactsync.gui.viewmodels.contact_list_viewmodel import ContactListViewModel


class SearchDebouncer(QObject):
    """Restartable single-shot timer in front of ``set_search``."""

    committed = Signal(str)

    def __init__(
        self,
        view_model: ContactListViewModel,
        delay_ms: Optional[int] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._vm = view_model
        self._pending = ""
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(
            view_model.options.search_debounce_ms if delay_ms is None else delay_ms
        )
        self._timer.timeout.connect(self.flush)

    @property
    def pending(self) -> str:
        return self._pending

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def set_text(self, text: str) -> None:
        self._pending = text
        self._timer.start()

    def flush(self) -> None:
        self._timer.stop()
        term = self._pending
        if self._vm.set_search(term):
            self.committed.emit(term.strip())
