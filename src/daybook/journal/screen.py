"""
Journal screen controller.

Owns everything the journal screen shows: the navigation state, the
month's base entries, and the active filter criteria. UI events call the
synchronous methods; fetching and saving go through the store off the
event loop.

Overlapping fetches are resolved with request tokens: each ``refresh()``
takes a new token and only the response carrying the latest token is
applied. Earlier responses that arrive late are dropped.

Usage::

    screen = await JournalScreen.mount(store)
    screen.set_mood("happy")
    if screen.navigate_month("next"):
        await screen.refresh()
    for cell in screen.calendar_days():
        ...
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any

from loguru import logger

from daybook.calendar.grid import CalendarDay, YearMonth
from daybook.calendar.navigation import CalendarNavigationState, NavigationDirection
from daybook.core.events import (
    DAY_SELECTED,
    ENTRIES_LOADED,
    ENTRY_SAVED,
    FETCH_FAILED,
    MONTH_CHANGED,
    Event,
    EventBus,
)
from daybook.core.exceptions import DaybookError

from . import display
from .config import CalendarConfig, ViewConfig
from .filters import FilterCriteria, apply_filters, entry_dates
from .models import JournalEntry
from .store import JournalStore


class JournalScreen:
    """State holder for the calendar + entry list screen.

    Args:
        store: Where entries come from.
        today: The current date; drives the initial state, ``is_today``
            marking and the "Today" filter.
        calendar_config: Week start and month-change selection policy.
        view_config: Entry list settings.
        bus: Optional event bus notified of loads, failures, saves and navigation.
    """

    def __init__(
        self,
        store: JournalStore,
        today: date,
        calendar_config: CalendarConfig | None = None,
        view_config: ViewConfig | None = None,
        bus: EventBus | None = None,
    ):
        self.store = store
        self.today = today
        self.calendar_config = calendar_config or CalendarConfig()
        self.view_config = view_config or ViewConfig()
        self.bus = bus

        self.state = CalendarNavigationState.initial(today)
        self.base_entries: list[JournalEntry] = []
        self.criteria = FilterCriteria()
        self.loading = False
        self.last_error: DaybookError | None = None
        self._latest_token = 0

    @classmethod
    async def mount(cls, store: JournalStore, today: date | None = None, **kwargs: Any) -> JournalScreen:
        """Create the screen on today's month and load its entries."""
        screen = cls(store, today or date.today(), **kwargs)
        await screen.refresh()
        return screen

    # ── Fetching ───────────────────────────────────────────────────

    @property
    def reference_month(self) -> YearMonth:
        return self.state.reference_month

    async def refresh(self) -> bool:
        """Load the displayed month's entries.

        Returns True if this call's response was applied. On failure the
        previous ``base_entries`` are kept and ``last_error`` is set; call
        ``refresh()`` again to retry.
        """
        self._latest_token += 1
        token = self._latest_token
        month = self.reference_month
        self.loading = True
        logger.debug(f"Fetching entries for {month} (request {token})")

        try:
            entries = await asyncio.to_thread(self.store.query_entries, month.first_day, month.last_day)
        except DaybookError as e:
            if token != self._latest_token:
                logger.debug(f"Ignoring failure of superseded request {token} for {month}")
                return False
            self.last_error = e
            logger.warning(f"Failed to load journal entries for {month}: {e}")
            self._emit(FETCH_FAILED, month=str(month), error=str(e))
            return False
        finally:
            if token == self._latest_token:
                self.loading = False

        if token != self._latest_token:
            logger.warning(f"Dropping stale response for {month} (request {token}, latest {self._latest_token})")
            return False

        self.base_entries = list(entries)
        self.last_error = None
        self._emit(ENTRIES_LOADED, month=str(month), count=len(self.base_entries))
        return True

    async def save_entry(self, entry: JournalEntry) -> JournalEntry:
        """Insert an entry, reloading the list if it lands in the displayed month.

        Raises:
            PersistenceError: If the store rejects the entry.
        """
        stored = await asyncio.to_thread(self.store.insert_entry, entry)
        logger.info(f"Saved entry {stored.id} for {stored.date}")
        self._emit(ENTRY_SAVED, id=stored.id, date=stored.date.isoformat() if stored.date else None)
        if stored.date is not None and self.reference_month.contains(stored.date):
            await self.refresh()
        return stored

    # ── Filter inputs ──────────────────────────────────────────────

    def set_query(self, text: str) -> list[JournalEntry]:
        self.criteria = self.criteria.with_query(text)
        return self.visible_entries()

    def clear_query(self) -> list[JournalEntry]:
        return self.set_query("")

    def set_mood(self, mood: str | None) -> list[JournalEntry]:
        self.criteria = self.criteria.with_mood(mood)
        return self.visible_entries()

    def clear_mood(self) -> list[JournalEntry]:
        return self.set_mood(None)

    def set_date_filter(self, day: date | None) -> list[JournalEntry]:
        self.criteria = self.criteria.with_date(day)
        return self.visible_entries()

    def show_today(self) -> list[JournalEntry]:
        return self.set_date_filter(self.today)

    def toggle_sort_by_confidence(self) -> list[JournalEntry]:
        self.criteria = self.criteria.with_sort(not self.criteria.sort_by_confidence_desc)
        return self.visible_entries()

    def clear_filters(self) -> list[JournalEntry]:
        """Show all of the month's entries."""
        self.criteria = FilterCriteria()
        return self.visible_entries()

    # ── Navigation inputs ──────────────────────────────────────────

    def select_day(self, cell: CalendarDay) -> bool:
        """Select a grid cell and filter the list to its date.

        Returns True when the reference month changed, i.e. the caller
        should ``refresh()``.
        """
        previous = self.reference_month
        self.state = self.state.select_day(cell)
        self.criteria = self.criteria.with_date(cell.date)
        self._emit(DAY_SELECTED, date=cell.date.isoformat())

        changed = self.reference_month != previous
        if changed:
            logger.info(f"Calendar moved to {self.reference_month} via day selection")
            self._emit(MONTH_CHANGED, month=str(self.reference_month))
        return changed

    def navigate_month(self, direction: NavigationDirection | str) -> bool:
        """Show the previous or next month. Filters are left as they are.

        Always returns True: the new month needs a ``refresh()``.
        """
        self.state = self.state.navigate_month(direction, self.calendar_config.selection_policy)
        logger.info(f"Calendar moved to {self.reference_month}")
        self._emit(MONTH_CHANGED, month=str(self.reference_month))
        return True

    # ── Outputs ────────────────────────────────────────────────────

    def calendar_days(self) -> list[CalendarDay]:
        return self.state.grid(self.today, self.calendar_config.first_weekday)

    def visible_entries(self) -> list[JournalEntry]:
        return apply_filters(self.base_entries, self.criteria)

    def has_entry(self, cell: CalendarDay) -> bool:
        """Whether to draw the entry dot under ``cell``."""
        return cell.is_current_month and cell.date in entry_dates(self.base_entries)

    def entry_markers(self) -> list[bool]:
        """``has_entry`` for every cell of the current grid, in order."""
        dates = entry_dates(self.base_entries)
        return [cell.is_current_month and cell.date in dates for cell in self.calendar_days()]

    def preview(self, entry: JournalEntry) -> str:
        return display.entry_preview(entry, limit=self.view_config.preview_chars)

    @property
    def heading(self) -> str:
        return display.list_heading(self.criteria.text_query, self.reference_month)

    @property
    def count_label(self) -> str:
        return display.entry_count_label(len(self.visible_entries()))

    @property
    def empty_message(self) -> str:
        return display.empty_message(self.criteria.text_query)

    def _emit(self, name: str, **payload: Any) -> None:
        if self.bus is not None:
            self.bus.emit(Event(name=name, payload=payload, source="journal_screen"))
