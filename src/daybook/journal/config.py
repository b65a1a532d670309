"""Configuration dataclasses for the journal screen.

These are pure data containers with sensible defaults.
Build them from a daybook ``Config`` with ``from_config`` or pass
constructor args directly.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from typing import Any

from daybook.calendar.grid import parse_week_start
from daybook.calendar.navigation import SelectionPolicy
from daybook.core.exceptions import ConfigurationError


@dataclass
class CalendarConfig:
    """Settings for the month grid and navigation.

    Attributes:
        first_weekday: Weekday that starts each grid row (``calendar`` constant).
        selection_policy: What the selection does when the month changes.
    """

    first_weekday: int = calendar.SUNDAY
    selection_policy: SelectionPolicy = SelectionPolicy.RESET

    @classmethod
    def from_config(cls, config: Any) -> CalendarConfig:
        try:
            return cls(
                first_weekday=parse_week_start(config.get("calendar.week_start", "sunday")),
                selection_policy=SelectionPolicy(str(config.get("calendar.selection_policy", "reset")).lower()),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid calendar settings: {e}") from e


@dataclass
class ViewConfig:
    """Settings for the entry list.

    Attributes:
        preview_chars: Characters of body text shown when an entry has no summary.
    """

    preview_chars: int = 100
