"""Shared test fixtures for daybook."""

import os
import tempfile
from datetime import date, datetime, time, timezone

import pytest

from daybook.journal.models import JournalEntry


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


def make_entry(entry_id, day, feeling="neutral", text="Some text", **extra):
    """Build a saved entry with sensible defaults."""
    extra.setdefault("created_at", datetime(day.year, day.month, day.day, 21, 0, tzinfo=timezone.utc))
    return JournalEntry(id=str(entry_id), date=day, text=text, feeling=feeling, **extra)


@pytest.fixture
def september_entries():
    """Four September 2025 entries, in the order the store returns them (newest first)."""
    return [
        make_entry(
            4,
            date(2025, 9, 12),
            "happy",
            "Shipped the release at work, long day",
            confidence_score=40,
            created_at=datetime(2025, 9, 12, 22, 0, tzinfo=timezone.utc),
        ),
        make_entry(
            3,
            date(2025, 9, 3),
            "anxious",
            "Could not sleep before the interview",
            summary="Pre-interview nerves",
            confidence_score=90,
            time=time(23, 40),
            created_at=datetime(2025, 9, 3, 23, 45, tzinfo=timezone.utc),
        ),
        make_entry(
            2,
            date(2025, 9, 3),
            "happy",
            "Coffee with Sam in the morning",
            confidence_score=90,
            created_at=datetime(2025, 9, 3, 9, 15, tzinfo=timezone.utc),
        ),
        make_entry(
            1,
            date(2025, 9, 1),
            "Happy",
            "First day of the month, planning",
            created_at=datetime(2025, 9, 1, 8, 0, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def journal_file(tmp_dir):
    """A YAML journal with entries in September and October 2025."""
    import yaml

    records = [
        {
            "id": 1,
            "date": "2025-09-03",
            "time": "09:15:00",
            "feeling": "happy",
            "text": "Coffee with Sam",
            "confidence_score": 80,
            "created_at": "2025-09-03T09:20:00Z",
        },
        {
            "id": 2,
            "date": "2025-09-20",
            "feeling": "tired",
            "text": "Long week at work",
            "summary": "Tired after work",
            "created_at": "2025-09-20T22:00:00Z",
        },
        {
            "id": 3,
            "date": "2025-10-03",
            "feeling": "grateful",
            "text": "October already",
            "created_at": "2025-10-03T20:00:00Z",
        },
    ]
    path = os.path.join(tmp_dir, "entries.yaml")
    with open(path, "w") as f:
        yaml.safe_dump(records, f, sort_keys=False)
    return path


@pytest.fixture
def tmp_config_file(tmp_dir, journal_file):
    """Create a temporary YAML config file pointing at ``journal_file``."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
        },
        "calendar": {"week_start": "sunday"},
        "persistence": {"backend": "file", "path": journal_file},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def entry_factory():
    """The ``make_entry`` helper, for tests that build their own entries."""
    return make_entry
