"""
Entry filter engine.

A ``FilterCriteria`` value describes the active search bar state; applying
it to the month's base entries yields the visible list. Membership
predicates (text, mood, date) are combined with AND, so they can be
applied in any order or grouping with the same result. The confidence
sort runs last and is stable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date

from .models import JournalEntry

Predicate = Callable[[JournalEntry], bool]


@dataclass(frozen=True)
class FilterCriteria:
    """Active filters. The default instance filters nothing.

    Attributes:
        text_query: Case-insensitive substring matched against text, feeling
            and summary. Blank means no text filter.
        mood_filter: Exact (case-sensitive) feeling value.
        date_filter: Exact entry date.
        sort_by_confidence_desc: Order survivors by confidence score, highest first.
    """

    text_query: str = ""
    mood_filter: str | None = None
    date_filter: date | None = None
    sort_by_confidence_desc: bool = False

    @property
    def is_empty(self) -> bool:
        return self == FilterCriteria()

    def with_query(self, text_query: str) -> FilterCriteria:
        return replace(self, text_query=text_query or "")

    def with_mood(self, mood: str | None) -> FilterCriteria:
        return replace(self, mood_filter=str(mood) if mood is not None else None)

    def with_date(self, day: date | None) -> FilterCriteria:
        return replace(self, date_filter=day)

    def with_sort(self, enabled: bool) -> FilterCriteria:
        return replace(self, sort_by_confidence_desc=enabled)

    def predicates(self) -> list[Predicate]:
        """The membership tests this criteria implies."""
        tests: list[Predicate] = []
        if self.text_query.strip():
            tests.append(matches_text(self.text_query))
        if self.mood_filter is not None:
            tests.append(matches_mood(self.mood_filter))
        if self.date_filter is not None:
            tests.append(matches_date(self.date_filter))
        return tests


def matches_text(query: str) -> Predicate:
    needle = query.casefold()

    def _test(entry: JournalEntry) -> bool:
        return any(needle in (field or "").casefold() for field in (entry.text, entry.feeling, entry.summary))

    return _test


def matches_mood(mood: str) -> Predicate:
    return lambda entry: entry.feeling == mood


def matches_date(day: date) -> Predicate:
    return lambda entry: entry.date == day


def sort_by_confidence(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Highest confidence first; missing scores count as 0, ties keep their order."""
    return sorted(entries, key=lambda entry: entry.score, reverse=True)


def apply_filters(base_entries: Sequence[JournalEntry], criteria: FilterCriteria | None = None) -> list[JournalEntry]:
    """Derive the visible entries from the base collection.

    Never mutates ``base_entries``; always returns a new list.
    """
    criteria = criteria or FilterCriteria()
    tests = criteria.predicates()
    result = [entry for entry in base_entries if all(test(entry) for test in tests)]
    if criteria.sort_by_confidence_desc:
        result = sort_by_confidence(result)
    return result


def entries_on(base_entries: Sequence[JournalEntry], day: date) -> list[JournalEntry]:
    return apply_filters(base_entries, FilterCriteria(date_filter=day))


def has_entry_on(base_entries: Sequence[JournalEntry], day: date) -> bool:
    """Whether any entry was written on ``day`` (the calendar dot)."""
    return bool(entries_on(base_entries, day))


def entry_dates(base_entries: Iterable[JournalEntry]) -> set[date]:
    """All dates that have at least one entry, for marking a whole grid at once."""
    return {entry.date for entry in base_entries if entry.date is not None}
