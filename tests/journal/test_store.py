"""Tests for daybook.journal.store."""

import json
import os
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest
import yaml

from daybook.core.exceptions import EntryNotFoundError, PersistenceError
from daybook.journal.models import JournalEntry
from daybook.journal.store import FileJournalStore, InMemoryJournalStore, JournalStore, newest_first, require_entry

FIXED_NOW = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)


class TestInMemoryJournalStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryJournalStore(), JournalStore)

    def test_query_by_month_newest_first(self, september_entries, entry_factory):
        october = entry_factory(99, date(2025, 10, 1))
        store = InMemoryJournalStore([*reversed(september_entries), october])

        result = store.query_entries(date(2025, 9, 1), date(2025, 9, 30))
        assert [e.id for e in result] == ["4", "3", "2", "1"]

    def test_query_bounds_are_inclusive(self, entry_factory):
        first = entry_factory(1, date(2025, 9, 1))
        last = entry_factory(2, date(2025, 9, 30))
        store = InMemoryJournalStore([first, last])
        assert len(store.query_entries(date(2025, 9, 1), date(2025, 9, 30))) == 2

    def test_entries_without_timestamp_go_last(self, entry_factory):
        undated = entry_factory(1, date(2025, 9, 2), created_at=None)
        dated = entry_factory(2, date(2025, 9, 1))
        assert [e.id for e in newest_first([undated, dated])] == ["2", "1"]

    def test_get_entry(self, september_entries):
        store = InMemoryJournalStore(september_entries)
        assert store.get_entry("3").text == "Could not sleep before the interview"
        assert store.get_entry(3).id == "3"
        assert store.get_entry("404") is None

    def test_require_entry(self, september_entries):
        store = InMemoryJournalStore(september_entries)
        assert require_entry(store, "2").feeling == "happy"
        with pytest.raises(EntryNotFoundError, match="404"):
            require_entry(store, "404")

    def test_insert_assigns_id_and_timestamp(self):
        store = InMemoryJournalStore(clock=lambda: FIXED_NOW)
        stored = store.insert_entry(JournalEntry.draft(date(2025, 9, 30), "Hello", feeling="happy"))

        assert stored.id
        assert stored.created_at == FIXED_NOW
        assert store.get_entry(stored.id) == stored
        assert store.query_entries(date(2025, 9, 1), date(2025, 9, 30)) == [stored]

    def test_insert_rejects_empty_text(self):
        store = InMemoryJournalStore()
        with pytest.raises(PersistenceError, match="text"):
            store.insert_entry(JournalEntry.draft(date(2025, 9, 30), "   "))

    def test_insert_rejects_missing_date(self):
        store = InMemoryJournalStore()
        with pytest.raises(PersistenceError, match="date"):
            store.insert_entry(JournalEntry(id=None, date=None, text="Hello"))

    def test_insert_rejects_duplicate_id(self, entry_factory):
        existing = entry_factory(1, date(2025, 9, 1))
        store = InMemoryJournalStore([existing])
        with pytest.raises(PersistenceError, match="already exists"):
            store.insert_entry(existing)


class TestFileJournalStore:
    def test_missing_file_is_empty(self, tmp_dir):
        store = FileJournalStore(os.path.join(tmp_dir, "nope.yaml"))
        assert store.query_entries(date(2025, 9, 1), date(2025, 9, 30)) == []
        assert store.get_entry("1") is None

    def test_reads_yaml(self, journal_file):
        store = FileJournalStore(journal_file)
        result = store.query_entries(date(2025, 9, 1), date(2025, 9, 30))
        assert [e.id for e in result] == ["2", "1"]
        assert result[1].feeling == "happy"

    def test_reads_json(self, tmp_dir):
        path = os.path.join(tmp_dir, "entries.json")
        with open(path, "w") as f:
            json.dump([{"id": "a", "date": "2025-09-03", "text": "x", "feeling": "sad"}], f)
        assert FileJournalStore(path).get_entry("a").feeling == "sad"

    def test_skips_records_without_id(self, tmp_dir):
        path = os.path.join(tmp_dir, "entries.yaml")
        with open(path, "w") as f:
            yaml.safe_dump([{"date": "2025-09-03", "text": "orphan"}, {"id": 1, "date": "2025-09-04", "text": "ok"}], f)
        result = FileJournalStore(path).query_entries(date(2025, 9, 1), date(2025, 9, 30))
        assert [e.id for e in result] == ["1"]

    def test_not_a_list(self, tmp_dir):
        path = os.path.join(tmp_dir, "entries.yaml")
        with open(path, "w") as f:
            f.write("entries: nope\n")
        with pytest.raises(PersistenceError, match="list"):
            FileJournalStore(path).query_entries(date(2025, 9, 1), date(2025, 9, 30))

    def test_unparsable_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "entries.json")
        with open(path, "w") as f:
            f.write("{not json")
        with pytest.raises(PersistenceError, match="Could not read"):
            FileJournalStore(path).query_entries(date(2025, 9, 1), date(2025, 9, 30))

    def test_insert_appends_and_persists(self, journal_file):
        store = FileJournalStore(journal_file, clock=lambda: FIXED_NOW)
        stored = store.insert_entry(JournalEntry.draft(date(2025, 9, 30), "Month done", feeling="excellent"))

        reopened = FileJournalStore(journal_file)
        assert reopened.get_entry(stored.id).text == "Month done"
        assert reopened.get_entry(stored.id).created_at == FIXED_NOW
        assert len(reopened.query_entries(date(2025, 9, 1), date(2025, 9, 30))) == 3

        with open(journal_file) as f:
            records = yaml.safe_load(f)
        assert len(records) == 4

    def test_insert_creates_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "sub", "entries.json")
        store = FileJournalStore(path, clock=lambda: FIXED_NOW)
        store.insert_entry(JournalEntry.draft(date(2025, 9, 30), "First"))
        with open(path) as f:
            assert json.load(f)[0]["text"] == "First"

    def test_failed_write_leaves_journal_intact(self, journal_file):
        with open(journal_file) as f:
            before = f.read()

        def half_dump(records, stream, **kwargs):
            stream.write("- id: 1\n  text: Cof")
            raise yaml.representer.RepresenterError("cannot represent an object")

        store = FileJournalStore(journal_file, clock=lambda: FIXED_NOW)
        with patch("daybook.journal.store.yaml.safe_dump", side_effect=half_dump):
            with pytest.raises(PersistenceError, match="Could not write"):
                store.insert_entry(JournalEntry.draft(date(2025, 9, 30), "Month done"))

        with open(journal_file) as f:
            assert f.read() == before
        assert os.listdir(os.path.dirname(journal_file)) == ["entries.yaml"]
        assert len(store.query_entries(date(2025, 9, 1), date(2025, 9, 30))) == 2
