from .bus import Event, EventBus, Subscription
from .contact_events import (
    BulkMutationCompletedEvent,
    ContactCreatedEvent,
    ContactDeletedEvent,
    ContactEvent,
)

__all__ = [
    "BulkMutationCompletedEvent",
    "ContactCreatedEvent",
    "ContactDeletedEvent",
    "ContactEvent",
    "Event",
    "EventBus",
    "Subscription",
]
