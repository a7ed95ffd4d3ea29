"""Tests for BaseViewModel subscription bookkeeping."""

from dataclasses import dataclass

from contactsync.events.bus import Event, EventBus
from contactsync.gui.viewmodels.base import BaseViewModel


@dataclass(kw_only=True)
class _FakeEvent(Event):
    payload: str = ""


class TestBaseViewModel:
    def test_subscribe_event_receives_events(self):
        bus = EventBus()
        vm = BaseViewModel()
        received = []

        vm.subscribe_event(bus, _FakeEvent, lambda e: received.append(e.payload))
        bus.publish(_FakeEvent(payload="hello"))

        assert received == ["hello"]

    def test_dispose_cancels_subscriptions(self):
        bus = EventBus()
        vm = BaseViewModel()
        received = []

        vm.subscribe_event(bus, _FakeEvent, lambda e: received.append(e.payload))
        bus.publish(_FakeEvent(payload="before"))
        vm.dispose()
        bus.publish(_FakeEvent(payload="after"))

        assert received == ["before"]
        assert vm.disposed
        assert vm._subscriptions == []

    def test_subscribe_returns_active_subscription(self):
        bus = EventBus()
        vm = BaseViewModel()
        sub = vm.subscribe_event(bus, _FakeEvent, lambda e: None)

        assert sub.active is True
        assert bus.subscriber_count(_FakeEvent) == 1
