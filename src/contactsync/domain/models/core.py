from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from contactsync.errors import InvalidMutationOutcome


@dataclass(frozen=True, eq=False)
class Record:
    """An opaque list entry identified by ``id``.

    Equality and hashing use ``id`` only; payload ``fields`` are never
    compared.
    """

    id: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    @property
    def display_name(self) -> str:
        return str(self.fields.get("name") or self.id)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Record:
        data = dict(payload)
        record_id = data.pop("id", None)
        if record_id is None or record_id == "":
            raise ValueError("record payload has no 'id'")
        return cls(id=str(record_id), fields=data)

    def to_mapping(self) -> Dict[str, Any]:
        return {"id": self.id, **self.fields}


@dataclass(frozen=True)
class MutationOutcome:
    """Result of one completed bulk mutation."""

    success_count: int = 0
    failure_count: int = 0
    errors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.success_count < 0 or self.failure_count < 0:
            raise InvalidMutationOutcome(
                f"negative counts in mutation outcome: "
                f"success={self.success_count}, failure={self.failure_count}"
            )

    @property
    def is_empty(self) -> bool:
        return self.success_count == 0 and self.failure_count == 0

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count
