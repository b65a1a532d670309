"""Journal entries: model, filter engine, persistence contract, and screen controller."""

from .config import CalendarConfig, ViewConfig
from .filters import FilterCriteria, apply_filters, entry_dates, has_entry_on
from .models import Feeling, JournalEntry
from .screen import JournalScreen
from .store import FileJournalStore, InMemoryJournalStore, JournalStore

__all__ = [
    "CalendarConfig",
    "Feeling",
    "FileJournalStore",
    "FilterCriteria",
    "InMemoryJournalStore",
    "JournalEntry",
    "JournalScreen",
    "JournalStore",
    "ViewConfig",
    "apply_filters",
    "entry_dates",
    "has_entry_on",
]
