"""Presentation helpers for entry lists and the entry detail card.

Unreadable values never raise here: they render as a placeholder.
"""

from __future__ import annotations

from datetime import date

from daybook.calendar.grid import YearMonth

from .models import JournalEntry

INVALID_DATE = "Invalid Date"
INVALID_TIME = "Invalid Time"
NO_TIME = "No time recorded"
DEFAULT_EMOJI = "📝"

FEELING_EMOJI: dict[str, str] = {
    "sad": "😢",
    "neutral": "😐",
    "happy": "😊",
    "excited": "😃",
    "excellent": "🤩",
    "anxious": "😰",
    "angry": "😠",
    "grateful": "🙏",
    "tired": "😴",
    "peaceful": "😌",
}


def feeling_emoji(feeling: str | None) -> str:
    return FEELING_EMOJI.get(feeling or "", DEFAULT_EMOJI)


def _clock(hour: int, minute: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def format_date(day: date, long: bool = False) -> str:
    """``Sep 3, 2025`` or ``Wednesday, September 3, 2025``."""
    if long:
        return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}, {day.year}"
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def format_entry_date(entry: JournalEntry, long: bool = False) -> str:
    if entry.date is None:
        return INVALID_DATE
    return format_date(entry.date, long=long)


def format_entry_time(entry: JournalEntry) -> str:
    if entry.time is not None:
        return _clock(entry.time.hour, entry.time.minute)
    # A stored but unparsable value is different from no value at all
    if entry.raw.get("time") not in (None, ""):
        return INVALID_TIME
    return NO_TIME


def format_created_at(entry: JournalEntry) -> str:
    if entry.created_at is None:
        return INVALID_DATE
    created = entry.created_at
    return f"{format_date(created.date())} at {_clock(created.hour, created.minute)}"


def format_confidence(entry: JournalEntry) -> str:
    return f"{round(entry.score)}%"


def entry_preview(entry: JournalEntry, limit: int = 100) -> str:
    """Summary if there is one, else the start of the text."""
    if entry.summary:
        return entry.summary
    return entry.text[:limit] + "..."


def format_emotions(entry: JournalEntry) -> list[str]:
    return [f"{name}: {round(intensity * 100)}%" for name, intensity in entry.emotions.items()]


def format_insights(entry: JournalEntry) -> list[str]:
    if entry.insights is None:
        return []
    if isinstance(entry.insights, str):
        return [entry.insights]
    return list(entry.insights)


def entry_count_label(count: int) -> str:
    return f"{count} {'entry' if count == 1 else 'entries'}"


def list_heading(query: str, month: YearMonth) -> str:
    if query.strip():
        return f'Search results for "{query}"'
    return f"Journal Entries - {month.label}"


def empty_message(query: str) -> str:
    if query.strip():
        return f'No entries found for "{query}"'
    return "No journal entries for this month"


def detail_lines(entry: JournalEntry) -> list[str]:
    """The entry detail card as plain text lines."""
    lines = [
        f"{feeling_emoji(entry.feeling)} {entry.feeling or 'unknown'}",
        format_entry_date(entry, long=True),
        format_entry_time(entry),
    ]
    if entry.score > 0:
        lines.append(f"Confidence: {format_confidence(entry)}")
    if entry.summary:
        lines += ["", "Summary", entry.summary]
    lines += ["", entry.text]
    if entry.emotions:
        lines += ["", "Emotions", *(f"  {item}" for item in format_emotions(entry))]
    insights = format_insights(entry)
    if insights:
        lines += ["", "Insights", *(f"  • {item}" for item in insights)]
    lines += ["", f"Created: {format_created_at(entry)}"]
    return lines
