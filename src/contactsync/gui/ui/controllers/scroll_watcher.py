"""Feed a scroll area's position into the list's scroll trigger."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer
from PySide6.QtWidgets import QAbstractScrollArea, QScrollBar

from contactsync.gui.viewmodels.contact_list_viewmodel import ContactListViewModel
from contactsync.gui.viewmodels.scroll_proximity import ScrollProximity

_LOGGER = logging.getLogger(__name__)


class ScrollWatcher(QObject):
    """Watch a vertical scroll bar and report sentinel visibility.

    Geometry changes (``rangeChanged``) are watched as well as scrolling so a
    first page that does not fill the viewport keeps loading until it does or
    the list is exhausted.
    """

    def __init__(
        self,
        view_model: ContactListViewModel,
        proximity: Optional[ScrollProximity] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._vm = view_model
        self._proximity = proximity or ScrollProximity(view_model.options)
        self._scroll_bar: Optional[QScrollBar] = None
        self._recheck = QTimer(self)
        self._recheck.setSingleShot(True)
        self._recheck.timeout.connect(self.evaluate)

        self._vm.loading.changed.connect(self._on_loading_changed)
        self._vm.reset_started.connect(self._on_reset_started)

    def attach(self, view: QAbstractScrollArea) -> None:
        self.attach_scroll_bar(view.verticalScrollBar())

    def attach_scroll_bar(self, scroll_bar: QScrollBar) -> None:
        self.detach()
        self._scroll_bar = scroll_bar
        scroll_bar.valueChanged.connect(self._on_value_changed)
        scroll_bar.rangeChanged.connect(self._on_range_changed)

    def detach(self) -> None:
        if self._scroll_bar is None:
            return
        try:
            self._scroll_bar.valueChanged.disconnect(self._on_value_changed)
            self._scroll_bar.rangeChanged.disconnect(self._on_range_changed)
        except (RuntimeError, TypeError):
            # Scroll bar already destroyed together with its view.
            pass
        self._scroll_bar = None
        self._recheck.stop()

    def evaluate(self) -> bool:
        """Sample the current geometry and report it; return True if a load started."""
        if self._scroll_bar is None:
            return False
        visible = self._proximity.sample(self._scroll_bar.value(), self._scroll_bar.maximum())
        if self._proximity.suppressed:
            self._recheck.start(self._proximity.min_interval_ms)
        return self._vm.on_sentinel_visible(visible)

    def _on_value_changed(self, _value: int) -> None:
        self.evaluate()

    def _on_range_changed(self, _minimum: int, _maximum: int) -> None:
        self.evaluate()

    def _on_loading_changed(self, loading: bool, _old: bool) -> None:
        # Reports are ignored while a page is in flight; look again once it lands.
        if not loading:
            QTimer.singleShot(0, self.evaluate)

    def _on_reset_started(self, generation: int) -> None:
        _LOGGER.debug("Scroll proximity reset for generation %d", generation)
        self._proximity.reset()
