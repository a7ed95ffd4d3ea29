"""Tests for the JSON-backed contact store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import ids_of

from contactsync.application.services.record_accumulator import RecordAccumulator
from contactsync.domain.models.query import FilterKind, QuerySignature, SortField, SortOrder
from contactsync.errors import ContactSourceError
from contactsync.infrastructure.json_contact_source import JsonContactSource


@pytest.fixture
def source(contact_factory) -> JsonContactSource:
    return JsonContactSource([
        contact_factory("Charlie", id="c3", email="charlie@example.com", created_at="2024-03-01"),
        contact_factory("alice", id="c1", created_at="2024-01-01", is_auto_created=True),
        contact_factory("Bob", id="c2", created_at="2024-02-01", call_link_type="auto_created"),
        contact_factory("Dana", id="c4", created_at="2024-04-01", call_link_type="manually_linked"),
        contact_factory("Eve", id="c5", created_at="2024-05-01", call_link_type="none"),
    ])


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

class TestFetch:
    def test_pages_by_offset(self, source):
        first = source.fetch(QuerySignature(), None, 2)
        second = source.fetch(QuerySignature(), first.next_cursor, 2)
        last = source.fetch(QuerySignature(), second.next_cursor, 2)

        assert ids_of(first.records) == ["c1", "c2"]
        assert first.next_cursor == 2
        assert ids_of(second.records) == ["c3", "c4"]
        assert ids_of(last.records) == ["c5"]
        assert last.next_cursor is None
        assert source.fetch_calls == 3

    def test_exact_multiple_ends_with_cursor_none(self, source):
        page = source.fetch(QuerySignature(), 4, 1)
        assert ids_of(page.records) == ["c5"]
        assert page.next_cursor is None

    def test_offset_past_end_is_empty(self, source):
        page = source.fetch(QuerySignature(), 50, 10)
        assert page.records == ()
        assert page.next_cursor is None

    def test_negative_cursor_rejected(self, source):
        with pytest.raises(ContactSourceError):
            source.fetch(QuerySignature(), -1, 10)

    def test_sorting_is_case_insensitive(self, source):
        page = source.fetch(QuerySignature(sort_by=SortField.NAME, order=SortOrder.DESC), None, 10)
        assert ids_of(page.records) == ["c5", "c4", "c3", "c2", "c1"]

    def test_sort_by_created_at(self, source):
        page = source.fetch(QuerySignature(sort_by=SortField.CREATED_AT, order=SortOrder.DESC), None, 2)
        assert ids_of(page.records) == ["c5", "c4"]

    def test_search_matches_name_phone_and_email(self, source):
        assert ids_of(source.fetch(QuerySignature(search="ALI"), None, 10).records) == ["c1"]
        assert ids_of(source.fetch(QuerySignature(search="example.com"), None, 10).records) == ["c3"]
        assert source.count(QuerySignature(search="+1555")) == 5
        assert source.count(QuerySignature(search="nobody")) == 0

    def test_filters(self, source):
        auto = source.fetch(QuerySignature(filter=FilterKind.AUTO_CREATED), None, 10)
        linked = source.fetch(QuerySignature(filter=FilterKind.LINKED_TO_CALLS), None, 10)

        assert ids_of(auto.records) == ["c1"]
        assert ids_of(linked.records) == ["c2", "c4"]

    def test_drives_accumulator_to_exhaustion(self, source):
        acc = RecordAccumulator(source, page_size=2)
        acc.reset(QuerySignature())
        while acc.load_next():
            pass

        assert ids_of(acc.records) == ["c1", "c2", "c3", "c4", "c5"]
        assert acc.is_exhausted


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

class TestUpload:
    def test_upload_reports_successes_and_failures(self, source):
        outcome = source.upload([
            {"name": "Frank", "phone_number": "+1 777 000 0001"},
            {"name": "", "phone_number": "+1 777 000 0002"},
            {"name": "Gina"},
            {"name": "Alice again", "phone_number": source.fetch(QuerySignature(search="alice"), None, 1).records[0].get("phone_number")},
            {"id": "c2", "name": "Clash", "phone_number": "+1 777 000 0003"},
            {"name": "Frank twin", "phone_number": "+17770000001"},
        ])

        assert outcome.success_count == 1
        assert outcome.failure_count == 5
        assert outcome.errors[0] == "row 2: missing name"
        assert outcome.errors[1] == "row 3: missing phone_number"
        assert outcome.errors[2].startswith("row 4: duplicate phone_number")
        assert outcome.errors[3] == "row 5: duplicate id c2"
        assert outcome.errors[4].startswith("row 6: duplicate phone_number")
        assert len(source) == 6

        frank = source.fetch(QuerySignature(search="frank"), None, 10).records[0]
        assert frank.id
        assert frank.get("is_auto_created") is False
        assert frank.get("created_at")

    def test_delete(self, source):
        assert source.delete("c1") is True
        assert source.delete("c1") is False
        assert len(source) == 4


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

class TestPersistence:
    def test_from_file_accepts_list_or_wrapper(self, tmp_path: Path, contact_factory):
        as_list = tmp_path / "list.json"
        as_list.write_text(json.dumps([contact_factory()]), encoding="utf-8")
        wrapped = tmp_path / "wrapped.json"
        wrapped.write_text(json.dumps({"contacts": [contact_factory(), contact_factory()]}), encoding="utf-8")

        assert len(JsonContactSource.from_file(as_list)) == 1
        assert len(JsonContactSource.from_file(wrapped)) == 2

    @pytest.mark.parametrize("content", ["{not json", '"just a string"', '[{"name": "no id"}]'])
    def test_from_file_rejects_bad_content(self, tmp_path: Path, content):
        path = tmp_path / "contacts.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ContactSourceError):
            JsonContactSource.from_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ContactSourceError):
            JsonContactSource.from_file(tmp_path / "missing.json")

    def test_save_round_trip(self, tmp_path: Path, source):
        target = source.save(tmp_path / "out" / "contacts.json")
        reloaded = JsonContactSource.from_file(target)

        assert len(reloaded) == 5
        assert ids_of(reloaded.fetch(QuerySignature(), None, 10).records) == ["c1", "c2", "c3", "c4", "c5"]
        assert not list(target.parent.glob("*.tmp"))

    def test_save_without_path(self, source):
        with pytest.raises(ContactSourceError):
            source.save()
