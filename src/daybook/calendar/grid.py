"""
Month grid builder.

Turns a reference month into a flat sequence of day cells covering whole
weeks: the tail of the previous month, every day of the month, and the
head of the next month until the last week is full.

The builder never reads the clock. Callers pass ``today`` explicitly so
the same inputs always produce the same grid.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

DAYS_PER_WEEK = 7

_MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
_WEEKDAY_LETTERS = ["M", "T", "W", "T", "F", "S", "S"]  # indexed by date.weekday()
_WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
_YEAR_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month: year plus 1-based month number."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be in 1..12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be in 1..9999, got {self.year}")

    @classmethod
    def of(cls, d: date) -> YearMonth:
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, text: str) -> YearMonth:
        """Parse ``YYYY-MM`` (e.g. ``"2025-09"``)."""
        m = _YEAR_MONTH_RE.match(text or "")
        if not m:
            raise ValueError(f"Expected YYYY-MM, got {text!r}")
        return cls(int(m.group(1)), int(m.group(2)))

    def shift(self, months: int) -> YearMonth:
        """Move by ``months`` calendar months, rolling over year boundaries."""
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def previous(self) -> YearMonth:
        return self.shift(-1)

    def next(self) -> YearMonth:
        return self.shift(1)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, self.days_in_month)

    @property
    def label(self) -> str:
        """Human heading, e.g. ``"September 2025"``."""
        return f"{_MONTH_NAMES[self.month - 1]} {self.year}"

    def contains(self, d: date) -> bool:
        return d.year == self.year and d.month == self.month

    def day(self, number: int) -> date:
        """Date of day ``number`` in this month, clamped to the month length."""
        return date(self.year, self.month, max(1, min(number, self.days_in_month)))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid.

    ``day`` is the day-of-month as displayed. For adjacent-month cells it
    belongs to that adjacent month, not the reference month; ``date`` is
    always the absolute date the cell stands for.
    """

    day: int
    date: date
    is_current_month: bool
    is_today: bool = False
    is_selected: bool = False


def leading_cell_count(reference_month: YearMonth, first_weekday: int = calendar.SUNDAY) -> int:
    """Number of previous-month cells before day 1 of ``reference_month``."""
    return (reference_month.first_day.weekday() - first_weekday) % DAYS_PER_WEEK


def build_month_grid(
    reference_month: YearMonth,
    selected_day: int | None,
    today: date,
    first_weekday: int = calendar.SUNDAY,
) -> list[CalendarDay]:
    """Build the day cells for ``reference_month``.

    Args:
        reference_month: The month being displayed.
        selected_day: Day-of-month currently selected in the displayed month,
            or None for no selection.
        today: The caller's notion of the current date; exactly the cell
            for this date (if shown as a current-month cell) gets ``is_today``.
        first_weekday: Weekday that starts each row, using the
            ``calendar.MONDAY`` .. ``calendar.SUNDAY`` constants.

    Returns:
        Cells in display order; the length is always a multiple of 7.
    """
    if not 0 <= first_weekday < DAYS_PER_WEEK:
        raise ValueError(f"first_weekday must be in 0..6, got {first_weekday}")

    first = reference_month.first_day
    days: list[CalendarDay] = []

    # Tail of the previous month
    for offset in range(leading_cell_count(reference_month, first_weekday), 0, -1):
        d = first - timedelta(days=offset)
        days.append(CalendarDay(day=d.day, date=d, is_current_month=False))

    for number in range(1, reference_month.days_in_month + 1):
        d = date(reference_month.year, reference_month.month, number)
        days.append(
            CalendarDay(
                day=number,
                date=d,
                is_current_month=True,
                is_today=d == today,
                is_selected=number == selected_day,
            )
        )

    # Head of the next month
    trailing = -len(days) % DAYS_PER_WEEK
    after = reference_month.last_day
    for number in range(1, trailing + 1):
        d = after + timedelta(days=number)
        days.append(CalendarDay(day=d.day, date=d, is_current_month=False))

    return days


def weeks(days: list[CalendarDay]) -> list[list[CalendarDay]]:
    """Split a grid into rows of seven."""
    return [days[i : i + DAYS_PER_WEEK] for i in range(0, len(days), DAYS_PER_WEEK)]


def weekday_labels(first_weekday: int = calendar.SUNDAY) -> list[str]:
    """One-letter column headers, e.g. ``S M T W T F S`` for Sunday-first."""
    return [_WEEKDAY_LETTERS[(first_weekday + i) % DAYS_PER_WEEK] for i in range(DAYS_PER_WEEK)]


def parse_week_start(name: str) -> int:
    """Map a config value like ``"sunday"`` to a ``calendar`` weekday constant."""
    key = (name or "").strip().lower()
    if key not in _WEEKDAY_NAMES:
        raise ValueError(f"Unknown week start {name!r}; expected a weekday name such as 'sunday'")
    return _WEEKDAY_NAMES.index(key)
