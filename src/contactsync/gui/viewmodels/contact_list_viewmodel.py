"""Contact list ViewModel (MVVM), pure Python.

Wires one :class:`RecordAccumulator`, its :class:`ScrollTrigger` and a
:class:`MutationCompletionHandler` together and republishes the accumulator's
state as observable properties.  The Qt list model in
``contactsync.gui.ui.models.contact_list_model`` binds to it.
"""

from __future__ import annotations

import logging
from typing import Optional

from contactsync.application.dtos import ListSnapshot
from contactsync.application.options import SyncOptions
from contactsync.application.services.dispatch import FetchDispatcher
from contactsync.application.services.mutation_handler import MutationCompletionHandler
from contactsync.application.services.record_accumulator import RecordAccumulator
from contactsync.application.services.scroll_trigger import ScrollTrigger
from contactsync.config import ITEM_TYPE_LABEL
from contactsync.domain.models.core import MutationOutcome, Record
from contactsync.domain.models.query import FilterKind, QuerySignature, SortField
from contactsync.domain.repositories import PageFetcher
from contactsync.errors.handler import ErrorHandler, ErrorSeverity
from contactsync.events.bus import EventBus
from contactsync.events.contact_events import (
    BulkMutationCompletedEvent,
    ContactCreatedEvent,
    ContactDeletedEvent,
)
from contactsync.gui.viewmodels.base import BaseViewModel
from contactsync.gui.viewmodels.list_footer import ListFooter, footer_for
from contactsync.gui.viewmodels.signal import ObservableProperty, Signal


class ContactListViewModel(BaseViewModel):
    """Contact list ViewModel with incremental loading.

    Search, sort, filter and mode changes produce a new
    :class:`QuerySignature` and restart the accumulation.  Bulk mutation
    events published on the bus go through the mutation handler, which
    restarts the list when anything changed.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        event_bus: EventBus,
        options: Optional[SyncOptions] = None,
        dispatcher: Optional[FetchDispatcher] = None,
        error_handler: Optional[ErrorHandler] = None,
        item_type: str = ITEM_TYPE_LABEL,
    ) -> None:
        super().__init__()
        self._options = options or SyncOptions()
        self._error_handler = error_handler
        self._item_type = item_type
        self._logger = logging.getLogger(__name__)

        self._accumulator = RecordAccumulator(
            fetcher,
            page_size=self._options.initial_page_size,
            dispatcher=dispatcher,
        )
        self._trigger = ScrollTrigger(
            self._accumulator,
            enabled=self._options.enable_incremental_load,
            trigger_fraction=self._options.trigger_fraction,
        )
        self._mutations = MutationCompletionHandler(self._accumulator)
        self._default_signature = QuerySignature(
            incremental=self._options.enable_incremental_load
        )

        # Observable properties
        self.records = ObservableProperty([], "records")
        self.loading = ObservableProperty(False, "loading")
        self.exhausted = ObservableProperty(False, "exhausted")
        self.last_error = ObservableProperty(None, "last_error")
        self.signature = ObservableProperty(None, "signature")
        self.generation = ObservableProperty(0, "generation")
        self.footer = ObservableProperty(ListFooter(), "footer")

        # Signals
        self.records_updated = Signal("records_updated")  # emits (records)
        self.page_loaded = Signal("page_loaded")  # emits (generation, added_count)
        self.reset_started = Signal("reset_started")  # emits (generation)
        self.error_occurred = Signal("error_occurred")  # emits (message)

        self._seen_generation = 0
        self._seen_pages = 0
        self._seen_count = 0
        self._reported_error: Optional[Exception] = None

        self._accumulator.set_listener(self._on_snapshot)

        # Event subscriptions
        self.subscribe_event(event_bus, BulkMutationCompletedEvent, self._on_contacts_mutated)
        self.subscribe_event(event_bus, ContactCreatedEvent, self._on_contacts_mutated)
        self.subscribe_event(event_bus, ContactDeletedEvent, self._on_contacts_mutated)

    # -- read access --------------------------------------------------------

    @property
    def options(self) -> SyncOptions:
        return self._options

    @property
    def accumulator(self) -> RecordAccumulator:
        return self._accumulator

    @property
    def can_load_more(self) -> bool:
        return self._trigger.enabled and self._accumulator.can_load_more

    def current_signature(self) -> QuerySignature:
        return self._accumulator.signature or self._default_signature

    def snapshot(self) -> ListSnapshot:
        return self._accumulator.snapshot()

    def record_at(self, index: int) -> Optional[Record]:
        records = self.records.value
        if 0 <= index < len(records):
            return records[index]
        return None

    def trigger_index(self, total: Optional[int] = None) -> Optional[int]:
        """Row index that should carry the scroll sentinel."""
        if total is None:
            total = len(self.records.value)
        return self._trigger.trigger_index(total)

    # -- loading ------------------------------------------------------------

    def load(self, signature: Optional[QuerySignature] = None) -> int:
        """(Re)start the list for *signature*, or the current one."""
        return self._accumulator.reset(signature or self.current_signature())

    def refresh(self) -> int:
        return self._accumulator.reset(self.current_signature())

    def load_next_page(self) -> bool:
        if not self._trigger.enabled:
            return False
        return self._accumulator.load_next()

    def retry(self) -> bool:
        """Re-issue the fetch that failed last, if nothing is in flight."""
        if self._accumulator.last_error is None or self._accumulator.is_loading:
            return False
        return self._accumulator.load_next()

    def on_sentinel_visible(self, visible: bool) -> bool:
        return self._trigger.on_visibility_changed(visible)

    # -- query changes ------------------------------------------------------

    def set_search(self, term: str) -> bool:
        return self._apply_signature(self.current_signature().with_search(term))

    def sort_by(self, field_name: SortField | str) -> bool:
        return self._apply_signature(self.current_signature().sorted_by(field_name))

    def set_filter(self, kind: FilterKind | str) -> bool:
        return self._apply_signature(self.current_signature().with_filter(kind))

    def set_incremental(self, enabled: bool) -> bool:
        """Switch between incremental and single-page mode.

        A mode switch is handled like any other signature change.
        """
        self._trigger.set_enabled(enabled)
        return self._apply_signature(self.current_signature().with_incremental(enabled))

    def _apply_signature(self, signature: QuerySignature) -> bool:
        if self._accumulator.signature is not None and signature == self._accumulator.signature:
            return False
        self._accumulator.reset(signature)
        return True

    # -- mutations ----------------------------------------------------------

    def apply_mutation_outcome(self, outcome: MutationOutcome) -> bool:
        return self._mutations.on_bulk_mutation_result(outcome)

    def _on_contacts_mutated(self, event) -> None:
        self.apply_mutation_outcome(event.to_outcome())

    # -- accumulator listener -----------------------------------------------

    def _on_snapshot(self, snapshot: ListSnapshot) -> None:
        new_generation = snapshot.generation != self._seen_generation
        if new_generation:
            self._seen_generation = snapshot.generation
            self._seen_pages = 0
            self._seen_count = 0

        self.generation.value = snapshot.generation
        self.signature.value = snapshot.signature
        self.records.value = list(snapshot.records)
        self.loading.value = snapshot.is_loading
        self.exhausted.value = snapshot.is_exhausted
        self.last_error.value = str(snapshot.last_error) if snapshot.last_error else None
        self.footer.value = footer_for(snapshot, self._item_type)

        if new_generation:
            self.reset_started.emit(snapshot.generation)

        if snapshot.pages_loaded > self._seen_pages:
            added = snapshot.count - self._seen_count
            self._seen_pages = snapshot.pages_loaded
            self._seen_count = snapshot.count
            self.page_loaded.emit(snapshot.generation, added)
            self.records_updated.emit(self.records.value)

        error = snapshot.last_error
        if error is not None and error is not self._reported_error:
            self._reported_error = error
            self._report_error(error)

    def _report_error(self, error: Exception) -> None:
        if self._error_handler is not None:
            self._error_handler.handle(
                error,
                ErrorSeverity.ERROR,
                context={"generation": self._accumulator.generation},
            )
        else:
            self._logger.error("Failed to load %s: %s", self._item_type, error)
        self.error_occurred.emit(str(error))
