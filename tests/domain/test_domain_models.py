"""Tests for the domain value types."""

from __future__ import annotations

import pytest

from contactsync.domain.models.core import MutationOutcome, Record
from contactsync.domain.models.query import FilterKind, QuerySignature, SortField, SortOrder
from contactsync.domain.repositories import Page
from contactsync.errors import DomainError, InvalidMutationOutcome


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

class TestRecord:
    def test_equality_uses_id_only(self):
        a = Record(id="1", fields={"name": "Ann"})
        b = Record(id="1", fields={"name": "Annie"})

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1
        assert a != Record(id="2", fields={"name": "Ann"})

    def test_from_mapping_moves_id_out_of_fields(self):
        record = Record.from_mapping({"id": 42, "name": "Ann", "phone_number": "+1"})

        assert record.id == "42"
        assert record.fields == {"name": "Ann", "phone_number": "+1"}
        assert record.to_mapping() == {"id": "42", "name": "Ann", "phone_number": "+1"}

    @pytest.mark.parametrize("payload", [{"name": "Ann"}, {"id": "", "name": "Ann"}, {"id": None}])
    def test_from_mapping_requires_id(self, payload):
        with pytest.raises(ValueError):
            Record.from_mapping(payload)

    def test_display_name_falls_back_to_id(self):
        assert Record(id="c1", fields={"name": "Ann"}).display_name == "Ann"
        assert Record(id="c1").display_name == "c1"


# ---------------------------------------------------------------------------
# MutationOutcome
# ---------------------------------------------------------------------------

class TestMutationOutcome:
    def test_counts(self):
        outcome = MutationOutcome(success_count=5, failure_count=2)
        assert outcome.total == 7
        assert not outcome.is_empty
        assert MutationOutcome().is_empty

    def test_negative_counts_rejected(self):
        with pytest.raises(InvalidMutationOutcome):
            MutationOutcome(success_count=-1)
        with pytest.raises(DomainError):
            MutationOutcome(failure_count=-3)


# ---------------------------------------------------------------------------
# QuerySignature
# ---------------------------------------------------------------------------

class TestQuerySignature:
    def test_defaults(self):
        sig = QuerySignature()
        assert sig.search == ""
        assert sig.sort_by is SortField.NAME
        assert sig.order is SortOrder.ASC
        assert sig.filter is FilterKind.ALL
        assert sig.incremental is True

    def test_value_equality(self):
        assert QuerySignature(search="a") == QuerySignature(search="a")
        assert QuerySignature(search="a") != QuerySignature(search="b")

    def test_with_search_strips_whitespace(self):
        assert QuerySignature().with_search("  ann ").search == "ann"
        assert QuerySignature(search="x").with_search(None).search == ""

    def test_selecting_active_field_flips_order(self):
        sig = QuerySignature().sorted_by("name")
        assert sig.sort_by is SortField.NAME
        assert sig.order is SortOrder.DESC
        assert sig.sorted_by(SortField.NAME).order is SortOrder.ASC

    def test_selecting_new_field_sorts_ascending(self):
        sig = QuerySignature(order=SortOrder.DESC).sorted_by(SortField.CREATED_AT)
        assert sig.sort_by is SortField.CREATED_AT
        assert sig.order is SortOrder.ASC

    def test_with_filter_accepts_strings(self):
        assert QuerySignature().with_filter("linked_to_calls").filter is FilterKind.LINKED_TO_CALLS
        with pytest.raises(ValueError):
            QuerySignature().with_filter("favourites")

    def test_helpers_return_new_instances(self):
        sig = QuerySignature()
        assert sig.with_incremental(False) is not sig
        assert sig.incremental is True


class TestPage:
    def test_has_more(self):
        assert Page(records=(), next_cursor="c").has_more
        assert not Page().has_more
