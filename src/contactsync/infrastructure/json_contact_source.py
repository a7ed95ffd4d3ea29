"""JSON-backed contact store implementing the ``PageFetcher`` contract.

Cursors are integer offsets into the filtered, sorted result set.  The store
also performs bulk creates and deletes so the refresh path can be exercised
end to end without a server.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from contactsync.domain.models.core import MutationOutcome, Record
from contactsync.domain.models.query import FilterKind, QuerySignature, SortField, SortOrder
from contactsync.domain.repositories import Page
from contactsync.errors import ContactSourceError
from contactsync.utils.jsonio import read_json, write_json

LOGGER = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "phone_number", "email")
LINKED_CALL_TYPES = frozenset({"auto_created", "manually_linked"})


def _normalise_phone(value: Any) -> str:
    return "".join(ch for ch in str(value or "") if ch.isdigit() or ch == "+")


class JsonContactSource:
    """In-memory contact table, optionally persisted to a JSON file."""

    def __init__(
        self,
        contacts: Optional[Iterable[Mapping[str, Any]]] = None,
        path: Optional[Path] = None,
    ) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._records: List[Record] = []
        for payload in contacts or ():
            self._records.append(Record.from_mapping(payload))
        self.fetch_calls = 0

    @classmethod
    def from_file(cls, path: Path) -> JsonContactSource:
        payload = read_json(path)
        if isinstance(payload, Mapping):
            payload = payload.get("contacts", [])
        if not isinstance(payload, list):
            raise ContactSourceError(f"{path} does not contain a list of contacts")
        try:
            return cls(payload, path=path)
        except ValueError as exc:
            raise ContactSourceError(f"{path}: {exc}") from exc

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # PageFetcher
    # ------------------------------------------------------------------
    def fetch(self, signature: QuerySignature, cursor: Optional[Any], page_size: int) -> Page:
        offset = int(cursor or 0)
        if offset < 0:
            raise ContactSourceError(f"invalid cursor {cursor!r}")
        with self._lock:
            self.fetch_calls += 1
            rows = self._select(signature)
        batch = rows[offset : offset + page_size]
        end = offset + len(batch)
        next_cursor = end if batch and end < len(rows) else None
        return Page(records=tuple(batch), next_cursor=next_cursor)

    def count(self, signature: QuerySignature) -> int:
        with self._lock:
            return len(self._select(signature))

    def _select(self, signature: QuerySignature) -> List[Record]:
        rows = [record for record in self._records if self._matches(record, signature)]
        reverse = signature.order is SortOrder.DESC
        # Stable two-pass sort: id as tiebreaker, then the requested field.
        rows.sort(key=lambda record: record.id)
        rows.sort(key=lambda record: self._sort_key(record, signature.sort_by), reverse=reverse)
        return rows

    @staticmethod
    def _matches(record: Record, signature: QuerySignature) -> bool:
        if signature.filter is FilterKind.AUTO_CREATED and not record.get("is_auto_created"):
            return False
        if (
            signature.filter is FilterKind.LINKED_TO_CALLS
            and record.get("call_link_type") not in LINKED_CALL_TYPES
        ):
            return False
        term = signature.search.lower()
        if not term:
            return True
        return any(term in str(record.get(name) or "").lower() for name in SEARCH_FIELDS)

    @staticmethod
    def _sort_key(record: Record, sort_by: SortField) -> str:
        value = record.get(sort_by.value)
        if value is None:
            return ""
        return str(value).lower()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def upload(self, rows: Sequence[Mapping[str, Any]]) -> MutationOutcome:
        """Bulk-create contacts; invalid or duplicate rows are reported as failures."""
        created = 0
        errors: List[str] = []
        with self._lock:
            phones = {_normalise_phone(record.get("phone_number")) for record in self._records}
            ids = {record.id for record in self._records}
            for index, row in enumerate(rows, start=1):
                name = str(row.get("name") or "").strip()
                phone = _normalise_phone(row.get("phone_number"))
                if not name:
                    errors.append(f"row {index}: missing name")
                    continue
                if not phone:
                    errors.append(f"row {index}: missing phone_number")
                    continue
                if phone in phones:
                    errors.append(f"row {index}: duplicate phone_number {row.get('phone_number')}")
                    continue
                record_id = str(row.get("id") or uuid.uuid4())
                if record_id in ids:
                    errors.append(f"row {index}: duplicate id {record_id}")
                    continue
                fields = {key: value for key, value in row.items() if key != "id"}
                fields["name"] = name
                fields.setdefault("created_at", datetime.now().isoformat(timespec="seconds"))
                fields.setdefault("is_auto_created", False)
                self._records.append(Record(id=record_id, fields=fields))
                phones.add(phone)
                ids.add(record_id)
                created += 1
        outcome = MutationOutcome(
            success_count=created,
            failure_count=len(errors),
            errors=tuple(errors),
        )
        LOGGER.info("Upload finished: %d created, %d failed", created, len(errors))
        return outcome

    def delete(self, contact_id: str) -> bool:
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == contact_id:
                    del self._records[index]
                    return True
        return False

    def save(self, path: Optional[Path] = None) -> Path:
        target = path or self._path
        if target is None:
            raise ContactSourceError("no path to save contacts to")
        with self._lock:
            payload = [record.to_mapping() for record in self._records]
        write_json(target, payload)
        self._path = target
        return target
