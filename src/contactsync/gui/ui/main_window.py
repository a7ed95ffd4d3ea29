"""Top-level window that shows one paged contact list."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListView,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from contactsync.application.options import SyncOptions
from contactsync.application.services.dispatch import FetchDispatcher
from contactsync.domain.repositories import PageFetcher
from contactsync.errors.handler import ErrorHandler, ErrorSeverity
from contactsync.events.bus import EventBus
from contactsync.gui.ui.controllers.scroll_watcher import ScrollWatcher
from contactsync.gui.ui.controllers.search_debouncer import SearchDebouncer
from contactsync.gui.ui.models.contact_list_model import ContactListModel
from contactsync.gui.ui.tasks.page_fetch_worker import QtFetchDispatcher
from contactsync.gui.viewmodels.contact_list_viewmodel import ContactListViewModel
from contactsync.gui.viewmodels.list_footer import FooterState

_LOGGER = logging.getLogger(__name__)


class MainWindow(QWidget):
    """Search box, contact list and footer row wired to one view model."""

    def __init__(
        self,
        fetcher: PageFetcher,
        options: Optional[SyncOptions] = None,
        dispatcher: Optional[FetchDispatcher] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("contactsync")
        self.event_bus = event_bus or EventBus()
        self._dispatcher = dispatcher or QtFetchDispatcher()
        self._error_handler = ErrorHandler(logging.getLogger("contactsync.gui"), self.event_bus)
        self._error_handler.register_ui_callback(self._on_error_reported)

        self.view_model = ContactListViewModel(
            fetcher,
            self.event_bus,
            options=options,
            dispatcher=self._dispatcher,
            error_handler=self._error_handler,
        )
        self.model = ContactListModel(self.view_model, self)
        self.debouncer = SearchDebouncer(self.view_model, parent=self)
        self.watcher = ScrollWatcher(self.view_model, parent=self)

        self.search_edit = QLineEdit(self)
        self.search_edit.setPlaceholderText("Search contacts")
        self.search_edit.setClearButtonEnabled(True)
        self.list_view = QListView(self)
        self.list_view.setModel(self.model)
        self.footer_label = QLabel(self)
        self.retry_button = QPushButton("Retry", self)
        self.retry_button.setVisible(False)

        footer_row = QHBoxLayout()
        footer_row.addWidget(self.footer_label, 1)
        footer_row.addWidget(self.retry_button)
        layout = QVBoxLayout(self)
        layout.addWidget(self.search_edit)
        layout.addWidget(self.list_view, 1)
        layout.addLayout(footer_row)

        self.search_edit.textChanged.connect(self.debouncer.set_text)
        self.search_edit.returnPressed.connect(self.debouncer.flush)
        self.retry_button.clicked.connect(self._on_retry_clicked)
        self.model.footerChanged.connect(self._on_footer_changed)
        self.watcher.attach(self.list_view)

    def start(self) -> None:
        """Request the first page for the default query."""
        self.view_model.load()

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        self.watcher.detach()
        self.view_model.dispose()
        if isinstance(self._dispatcher, QtFetchDispatcher):
            self._dispatcher.wait_for_done(2000)
        super().closeEvent(event)

    def _on_footer_changed(self, state: str, message: str) -> None:
        self.footer_label.setText(message)
        self.retry_button.setVisible(state == FooterState.RETRY.value)

    def _on_retry_clicked(self) -> None:
        self.view_model.retry()

    def _on_error_reported(self, message: str, severity: ErrorSeverity) -> None:
        _LOGGER.debug("Showing %s error in footer: %s", severity.value, message)
