"""Events emitted when contacts change outside the list's own paging."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from contactsync.domain.models.core import MutationOutcome


@dataclass(frozen=True)
class ContactEvent:
    """Immutable base for contact change notifications.

    ``source`` names the operation that produced the change, e.g. ``"upload"``.
    """

    source: str = ""
    event_id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_outcome(self) -> MutationOutcome:
        """Outcome the list reacts to; a bare event reports no change."""
        return MutationOutcome()


@dataclass(frozen=True)
class BulkMutationCompletedEvent(ContactEvent):
    """A batch operation (e.g. a contact upload) finished server-side."""

    success_count: int = 0
    failure_count: int = 0
    errors: tuple[str, ...] = field(default_factory=tuple)

    def to_outcome(self) -> MutationOutcome:
        return MutationOutcome(
            success_count=self.success_count,
            failure_count=self.failure_count,
            errors=self.errors,
        )


@dataclass(frozen=True)
class ContactCreatedEvent(ContactEvent):
    contact_id: str = ""

    def to_outcome(self) -> MutationOutcome:
        return MutationOutcome(success_count=1)


@dataclass(frozen=True)
class ContactDeletedEvent(ContactEvent):
    contact_id: str = ""
    deleted: bool = True

    def to_outcome(self) -> MutationOutcome:
        if self.deleted:
            return MutationOutcome(success_count=1)
        return MutationOutcome(failure_count=1)
