"""
Calendar navigation and selection state.

The state is an immutable value; every transition returns a new state, so
a cross-month selection always changes the reference month and the
selected day together.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import date
from enum import StrEnum

from .grid import CalendarDay, YearMonth, build_month_grid


class NavigationDirection(StrEnum):
    PREVIOUS = "previous"
    NEXT = "next"

    @property
    def step(self) -> int:
        return -1 if self is NavigationDirection.PREVIOUS else 1


class SelectionPolicy(StrEnum):
    """What happens to the selected day when the month changes.

    RESET: select day 1 of the new month.
    KEEP: keep the same day number, clamped to the new month's length.
    """

    RESET = "reset"
    KEEP = "keep"


@dataclass(frozen=True)
class CalendarNavigationState:
    """The displayed month and the selected day within it."""

    reference_month: YearMonth
    selected_day: int

    def __post_init__(self):
        if not 1 <= self.selected_day <= self.reference_month.days_in_month:
            raise ValueError(f"Day {self.selected_day} is not in {self.reference_month}")

    @classmethod
    def initial(cls, today: date) -> CalendarNavigationState:
        """State at screen mount: today's month with today selected."""
        return cls(reference_month=YearMonth.of(today), selected_day=today.day)

    @property
    def selected_date(self) -> date:
        return self.reference_month.day(self.selected_day)

    def select_day(self, cell: CalendarDay) -> CalendarNavigationState:
        """Select a grid cell.

        A current-month cell only moves the selection. A cell from an adjacent
        month moves the reference month to that cell's month and selects the
        cell's day there.
        """
        if cell.is_current_month:
            if not self.reference_month.contains(cell.date):
                raise ValueError(f"Cell {cell.date} is marked current but {self.reference_month} is displayed")
            return replace(self, selected_day=cell.day)
        return CalendarNavigationState(reference_month=YearMonth.of(cell.date), selected_day=cell.date.day)

    def navigate_month(
        self,
        direction: NavigationDirection | str,
        policy: SelectionPolicy | str = SelectionPolicy.RESET,
    ) -> CalendarNavigationState:
        """Move exactly one month back or forward."""
        target = self.reference_month.shift(NavigationDirection(direction).step)
        if SelectionPolicy(policy) is SelectionPolicy.KEEP:
            day = min(self.selected_day, target.days_in_month)
        else:
            day = 1
        return CalendarNavigationState(reference_month=target, selected_day=day)

    def grid(self, today: date, first_weekday: int = calendar.SUNDAY) -> list[CalendarDay]:
        """Month grid for this state."""
        return build_month_grid(self.reference_month, self.selected_day, today, first_weekday)
