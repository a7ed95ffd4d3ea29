"""Subscription bookkeeping shared by the view models."""

from __future__ import annotations

from typing import Callable, Type

from contactsync.events.bus import EventBus, Subscription


class BaseViewModel:
    """Tracks event-bus subscriptions so ``dispose()`` can cancel them."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append(sub)
        return sub

    def dispose(self) -> None:
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()
        self._disposed = True
