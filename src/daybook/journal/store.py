"""JournalStore protocol — the contract for journal persistence backends.

The hosted persistence service, a local YAML/JSON file and an in-memory
list all implement the same three calls, so the journal screen does not
care where entries live.
"""

from __future__ import annotations

import json
import os
import tempfile
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from loguru import logger

from daybook.core.exceptions import DataProcessingError, EntryNotFoundError, PersistenceError

from .models import JournalEntry


@runtime_checkable
class JournalStore(Protocol):
    """Protocol for reading and writing journal entries."""

    def query_entries(self, start: date, end: date) -> list[JournalEntry]:
        """Return entries dated ``start``..``end`` (inclusive), newest ``created_at`` first."""
        ...

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        """Return one entry, or None if no entry has that id."""
        ...

    def insert_entry(self, entry: JournalEntry) -> JournalEntry:
        """Save a new entry and return it as stored.

        Raises:
            PersistenceError: With the reason the entry was not saved.
        """
        ...


def newest_first(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Order by ``created_at`` descending; entries without a timestamp go last."""
    return sorted(
        entries,
        key=lambda e: e.created_at.timestamp() if e.created_at else float("-inf"),
        reverse=True,
    )


def require_entry(store: JournalStore, entry_id: str) -> JournalEntry:
    """Like ``store.get_entry`` but raises EntryNotFoundError instead of returning None."""
    entry = store.get_entry(entry_id)
    if entry is None:
        raise EntryNotFoundError(f"No journal entry with id {entry_id}")
    return entry


def check_insertable(entry: JournalEntry) -> None:
    """Reject entries the store must not save."""
    if not entry.text or not entry.text.strip():
        raise PersistenceError("Entry text must not be empty")
    if entry.date is None:
        raise PersistenceError("Entry must have a date")


class InMemoryJournalStore:
    """A JournalStore over a Python list. Handy for tests and demos."""

    def __init__(
        self,
        entries: Iterable[JournalEntry] = (),
        clock: Callable[[], datetime] | None = None,
    ):
        self._entries: list[JournalEntry] = list(entries)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _load(self) -> list[JournalEntry]:
        return list(self._entries)

    def _append(self, entry: JournalEntry) -> None:
        self._entries.append(entry)

    def query_entries(self, start: date, end: date) -> list[JournalEntry]:
        in_range = [e for e in self._load() if e.date is not None and start <= e.date <= end]
        return newest_first(in_range)

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        for entry in self._load():
            if entry.id == str(entry_id):
                return entry
        return None

    def insert_entry(self, entry: JournalEntry) -> JournalEntry:
        check_insertable(entry)
        entries = self._load()
        if entry.id is not None and any(e.id == entry.id for e in entries):
            raise PersistenceError(f"Entry {entry.id} already exists")

        stored = replace(
            entry,
            id=entry.id or uuid.uuid4().hex,
            created_at=self._clock(),
        )
        stored = replace(stored, raw=stored.to_record())
        self._append(stored)
        logger.debug(f"Stored entry {stored.id} for {stored.date}")
        return stored


class FileJournalStore(InMemoryJournalStore):
    """Entries kept as a list of records in a YAML or JSON file.

    The file is re-read on every call so edits made elsewhere show up on
    the next refresh. A missing file is an empty journal.
    """

    def __init__(self, path: str | Path, clock: Callable[[], datetime] | None = None):
        super().__init__(clock=clock)
        self.path = Path(path).expanduser()

    @property
    def _is_json(self) -> bool:
        return self.path.suffix.lower() == ".json"

    def _read_records(self) -> list[Any]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                records = json.load(f) if self._is_json else yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise PersistenceError(f"Could not read journal file {self.path}: {e}") from e

        if records is None:
            return []
        if not isinstance(records, list):
            raise PersistenceError(f"Journal file {self.path} must contain a list of entries")
        return records

    def _load(self) -> list[JournalEntry]:
        entries = []
        for record in self._read_records():
            try:
                entries.append(JournalEntry.from_record(record))
            except DataProcessingError as e:
                logger.warning(f"Skipping record in {self.path}: {e}")
        return entries

    def _append(self, entry: JournalEntry) -> None:
        # Append to the raw records so unknown fields and skipped records survive
        records = [*self._read_records(), entry.to_record()]
        try:
            self._write_records(records)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f"Could not write journal file {self.path}: {e}") from e

    def _write_records(self, records: list[Any]) -> None:
        """Atomic write: temp file in the same directory, then rename over the journal."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                if self._is_json:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                else:
                    yaml.safe_dump(records, f, sort_keys=False, allow_unicode=True)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
