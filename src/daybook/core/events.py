"""Screen lifecycle events.

The journal screen announces loads, fetch failures, saves and calendar
moves on an optional ``EventBus`` so a host (the CLI, a UI shell, tests)
can react without the screen knowing about it. Hooks run synchronously,
in registration order, on the thread that emitted.

Usage::

    from daybook.core.events import ENTRIES_LOADED, Event, EventBus

    bus = EventBus()
    bus.on(ENTRIES_LOADED, lambda event: print(event.payload["count"]))
    screen = JournalScreen(store, today, bus=bus)
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

ENTRIES_LOADED = "journal.entries.loaded"
FETCH_FAILED = "journal.fetch.failed"
ENTRY_SAVED = "journal.entry.saved"
MONTH_CHANGED = "calendar.month.changed"
DAY_SELECTED = "calendar.day.selected"

# Level each event is logged at by ``log_event``
_LOG_LEVELS = {
    FETCH_FAILED: "WARNING",
    ENTRY_SAVED: "INFO",
    MONTH_CHANGED: "INFO",
}


@dataclass(frozen=True)
class Event:
    """Something the journal screen did."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


Hook = Callable[[Event], None]


class EventBus:
    """Synchronous pub/sub for screen events."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)
        self._wildcard_hooks: list[Hook] = []

    def on(self, event_name: str, hook: Hook) -> None:
        self._hooks[event_name].append(hook)

    def on_all(self, hook: Hook) -> None:
        """Register *hook* for every event."""
        self._wildcard_hooks.append(hook)

    def off(self, event_name: str, hook: Hook) -> None:
        if hook in self._hooks.get(event_name, []):
            self._hooks[event_name].remove(hook)

    def emit(self, event: Event) -> None:
        """Run the hooks for ``event``. A failing hook is logged and the rest still run."""
        for hook in [*self._hooks.get(event.name, []), *self._wildcard_hooks]:
            try:
                hook(event)
            except Exception as exc:
                logger.warning(f"Event hook failed for {event.name}: {exc}")


def log_event(event: Event) -> None:
    """Hook that writes events to the log (fetch failures as warnings, loads at DEBUG)."""
    details = ", ".join(f"{key}={value}" for key, value in event.payload.items())
    logger.log(_LOG_LEVELS.get(event.name, "DEBUG"), f"{event.name}: {details}")
