"""Qt list model exposing the contact list view model."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from PySide6.QtCore import QAbstractListModel, QModelIndex, Qt, Signal

from contactsync.domain.models.core import Record
from contactsync.gui.viewmodels.contact_list_viewmodel import ContactListViewModel
from contactsync.gui.viewmodels.list_footer import ListFooter

from .roles import FIELD_FOR_ROLE, ContactRoles, role_names

logger = logging.getLogger(__name__)


class ContactListModel(QAbstractListModel):
    """Expose accumulated contacts to Qt views.

    Rows appended within one generation are announced with
    ``beginInsertRows``; any generation change resets the model.
    """

    footerChanged = Signal(str, str)
    loadingChanged = Signal(bool)
    errorOccurred = Signal(str)

    def __init__(self, view_model: ContactListViewModel, parent=None) -> None:  # type: ignore[override]
        super().__init__(parent)
        self._vm = view_model
        self._rows: List[Record] = list(view_model.records.value)
        self._generation: int = view_model.generation.value

        self._vm.records.changed.connect(self._on_records_changed)
        self._vm.loading.changed.connect(self._on_loading_changed)
        self._vm.footer.changed.connect(self._on_footer_changed)
        self._vm.error_occurred.connect(self.errorOccurred.emit)

    def view_model(self) -> ContactListViewModel:
        return self._vm

    # ------------------------------------------------------------------
    # Qt model API
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._rows)

    def roleNames(self) -> dict[int, bytes]:  # type: ignore[override]
        return role_names(super().roleNames())

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:  # type: ignore[override]
        if not index.isValid() or not 0 <= index.row() < len(self._rows):
            return None
        record = self._rows[index.row()]
        if role == Qt.DisplayRole:
            return record.display_name
        if role == ContactRoles.CONTACT_ID:
            return record.id
        if role == ContactRoles.RECORD:
            return record
        if role == ContactRoles.IS_TRIGGER:
            return index.row() == self._vm.trigger_index(len(self._rows))
        field_name = FIELD_FOR_ROLE.get(role)
        if field_name is not None:
            return record.get(field_name)
        return None

    def record_at(self, row: int) -> Optional[Record]:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    # ------------------------------------------------------------------
    # Pagination support (Qt canFetchMore/fetchMore API)
    # ------------------------------------------------------------------
    def canFetchMore(self, parent: QModelIndex = QModelIndex()) -> bool:  # type: ignore[override]
        """Return True if another page can be requested right now.

        Views call this when they reach the end of the loaded rows.
        """
        if parent.isValid():
            return False
        return self._vm.can_load_more

    def fetchMore(self, parent: QModelIndex = QModelIndex()) -> None:  # type: ignore[override]
        """Request the next page; rows arrive later through the view model."""
        if parent.isValid():
            return
        self._vm.on_sentinel_visible(True)

    # ------------------------------------------------------------------
    # View-model callbacks
    # ------------------------------------------------------------------
    def _on_records_changed(self, new_rows: list, old_rows: list) -> None:
        generation = self._vm.generation.value
        current = self._rows
        appended = (
            generation == self._generation
            and len(new_rows) > len(current)
            and all(a.id == b.id for a, b in zip(current, new_rows))
        )
        if appended:
            first = len(current)
            last = len(new_rows) - 1
            self.beginInsertRows(QModelIndex(), first, last)
            self._rows = list(new_rows)
            self.endInsertRows()
            logger.debug("Inserted rows %d..%d (generation %d)", first, last, generation)
            return

        self.beginResetModel()
        self._rows = list(new_rows)
        self._generation = generation
        self.endResetModel()
        logger.debug("Model reset to %d rows (generation %d)", len(self._rows), generation)

    def _on_loading_changed(self, loading: bool, _old: bool) -> None:
        self.loadingChanged.emit(bool(loading))

    def _on_footer_changed(self, footer: ListFooter, _old: ListFooter) -> None:
        self.footerChanged.emit(footer.state.value, footer.message)
