"""Tests for the pure Python Signal and ObservableProperty classes."""

import pytest

from contactsync.domain.models.core import Record
from contactsync.gui.viewmodels.signal import ObservableProperty, Signal


# ---------------------------------------------------------------------------
# Signal tests
# ---------------------------------------------------------------------------

class TestSignal:
    def test_connect_and_emit(self):
        sig = Signal()
        received = []
        sig.connect(lambda v: received.append(v))

        sig.emit(42)

        assert received == [42]

    def test_disconnect(self):
        sig = Signal()
        received = []
        handler = lambda v: received.append(v)
        sig.connect(handler)
        sig.emit(1)
        sig.disconnect(handler)
        sig.emit(2)

        assert received == [1]

    def test_disconnect_missing_raises(self):
        sig = Signal()
        with pytest.raises(ValueError):
            sig.disconnect(lambda: None)

    def test_disconnect_all(self):
        sig = Signal()
        sig.connect(lambda: None)
        sig.connect(lambda: None)

        sig.disconnect_all()

        assert sig.handler_count == 0

    def test_duplicate_connect_ignored(self):
        sig = Signal()
        handler = lambda: None
        sig.connect(handler)
        sig.connect(handler)
        assert sig.handler_count == 1

    def test_emit_multiple_args(self):
        sig = Signal()
        received = []
        sig.connect(lambda *args: received.append(args))

        sig.emit(3, 20)

        assert received == [(3, 20)]

    def test_handler_exception_does_not_break_others(self):
        sig = Signal()
        received = []

        def bad_handler(v):
            raise RuntimeError("boom")

        sig.connect(bad_handler)
        sig.connect(lambda v: received.append(v))

        assert sig.emit(1) == 1

        assert received == [1]


# ---------------------------------------------------------------------------
# ObservableProperty tests
# ---------------------------------------------------------------------------

class TestObservableProperty:
    def test_changed_emits_on_new_value(self):
        prop = ObservableProperty(False)
        changes = []
        prop.changed.connect(lambda new, old: changes.append((new, old)))

        prop.value = True

        assert changes == [(True, False)]

    def test_no_emit_when_same_value(self):
        prop = ObservableProperty("Loading more contacts...")
        changes = []
        prop.changed.connect(lambda new, old: changes.append((new, old)))

        prop.value = "Loading more contacts..."

        assert changes == []

    def test_record_lists_compare_by_id(self):
        prop = ObservableProperty([Record(id="1", fields={"name": "Ann"})])
        changes = []
        prop.changed.connect(lambda new, old: changes.append(len(new)))

        prop.value = [Record(id="1", fields={"name": "Annie"})]
        prop.value = [Record(id="1"), Record(id="2")]

        assert changes == [2]

    def test_property_name_is_used_for_its_signal(self):
        prop = ObservableProperty(0, "generation")
        assert prop.changed.name == "generation.changed"
