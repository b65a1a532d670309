"""Month grid construction and calendar navigation state."""

from .grid import CalendarDay, YearMonth, build_month_grid, weekday_labels
from .navigation import CalendarNavigationState, NavigationDirection, SelectionPolicy

__all__ = [
    "CalendarDay",
    "CalendarNavigationState",
    "NavigationDirection",
    "SelectionPolicy",
    "YearMonth",
    "build_month_grid",
    "weekday_labels",
]
