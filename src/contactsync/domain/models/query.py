from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortOrder:
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class SortField(str, Enum):
    NAME = "name"
    PHONE_NUMBER = "phone_number"
    CREATED_AT = "created_at"


class FilterKind(str, Enum):
    ALL = "all"
    AUTO_CREATED = "auto_created"
    LINKED_TO_CALLS = "linked_to_calls"


@dataclass(frozen=True)
class QuerySignature:
    """The (filter, sort, search) tuple a list accumulation belongs to.

    Instances are immutable; the fluent helpers return new signatures so the
    accumulator can compare the old and new one.
    """

    search: str = ""
    sort_by: SortField = SortField.NAME
    order: SortOrder = SortOrder.ASC
    filter: FilterKind = FilterKind.ALL
    incremental: bool = True

    def with_search(self, term: str) -> QuerySignature:
        return replace(self, search=(term or "").strip())

    def with_filter(self, kind: FilterKind | str) -> QuerySignature:
        return replace(self, filter=FilterKind(kind))

    def with_incremental(self, enabled: bool) -> QuerySignature:
        return replace(self, incremental=bool(enabled))

    def sorted_by(self, field_name: SortField | str) -> QuerySignature:
        """Select *field_name*; re-selecting the active field flips the order."""
        sort_field = SortField(field_name)
        if sort_field == self.sort_by:
            return replace(self, order=self.order.toggled())
        return replace(self, sort_by=sort_field, order=SortOrder.ASC)
