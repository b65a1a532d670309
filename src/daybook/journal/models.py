"""Journal entry model and tolerant record parsing.

Entries arrive as plain dict records from the persistence service.
Optional fields that are missing or malformed become "not provided"
rather than errors; the raw record stays on the entry so display code
can tell "absent" apart from "present but unreadable".
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum
from typing import Any

from loguru import logger

from daybook.core.exceptions import DataProcessingError


class Feeling(StrEnum):
    """The fixed mood vocabulary. Stored values outside it are tolerated."""

    SAD = "sad"
    NEUTRAL = "neutral"
    HAPPY = "happy"
    EXCITED = "excited"
    EXCELLENT = "excellent"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    GRATEFUL = "grateful"
    TIRED = "tired"
    PEACEFUL = "peaceful"


@dataclass(frozen=True)
class JournalEntry:
    """A saved journal entry.

    Attributes:
        id: Opaque identifier assigned by the store (None for a draft).
        date: The authoring day; None when the stored value is unreadable.
        text: Entry body.
        feeling: Mood tag, normally a ``Feeling`` value.
        time: Optional clock time of writing.
        summary: Optional derived abstract.
        confidence_score: Optional 0-100 score from the analysis service.
        emotions: Emotion name -> intensity in [0, 1].
        insights: A list of insight strings, a single string, or None.
        created_at: Timestamp assigned by the store.
        raw: The record this entry was parsed from.
    """

    id: str | None
    date: date | None
    text: str
    feeling: str = ""
    time: time | None = None
    summary: str | None = None
    confidence_score: float | None = None
    emotions: dict[str, float] = field(default_factory=dict)
    insights: list[str] | str | None = None
    created_at: datetime | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def draft(
        cls,
        entry_date: date,
        text: str,
        feeling: Feeling | str = "",
        entry_time: time | None = None,
        **extra: Any,
    ) -> JournalEntry:
        """A not-yet-saved entry; the store assigns ``id`` and ``created_at``."""
        return cls(id=None, date=entry_date, text=text, feeling=str(feeling), time=entry_time, **extra)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> JournalEntry:
        """Parse a persistence record.

        Raises:
            DataProcessingError: If the record is not a dict or has no id.
        """
        if not isinstance(record, dict):
            raise DataProcessingError(f"Journal record must be a mapping, got {type(record).__name__}")
        if record.get("id") in (None, ""):
            raise DataProcessingError("Journal record has no id")

        entry_id = str(record["id"])
        return cls(
            id=entry_id,
            date=_parse_date(record.get("date"), entry_id),
            text=str(record.get("text") or ""),
            feeling=str(record.get("feeling") or ""),
            time=_parse_time(record.get("time"), entry_id),
            summary=record.get("summary") or None,
            confidence_score=_parse_score(record.get("confidence_score"), entry_id),
            emotions=_parse_emotions(record.get("emotions"), entry_id),
            insights=_parse_insights(record.get("insights")),
            created_at=_parse_datetime(record.get("created_at"), entry_id),
            raw=dict(record),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize for the persistence service, omitting unset fields."""
        record: dict[str, Any] = {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "time": self.time.isoformat(timespec="seconds") if self.time else None,
            "feeling": self.feeling,
            "text": self.text,
            "summary": self.summary,
            "confidence_score": self.confidence_score,
            "emotions": dict(self.emotions) or None,
            "insights": list(self.insights) if isinstance(self.insights, list) else self.insights,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        return {k: v for k, v in record.items() if v is not None}

    @property
    def score(self) -> float:
        """Confidence score for ranking; missing counts as 0."""
        return self.confidence_score if self.confidence_score is not None else 0.0


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


def _parse_date(value: Any, entry_id: str) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # Accept both "2025-09-03" and full timestamps
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.warning(f"Entry {entry_id}: unreadable date {value!r}")
        return None


def _parse_time(value: Any, entry_id: str) -> time | None:
    if value in (None, ""):
        return None
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError:
        logger.warning(f"Entry {entry_id}: unreadable time {value!r}")
        return None


def _parse_datetime(value: Any, entry_id: str) -> datetime | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Entry {entry_id}: unreadable created_at {value!r}")
        return None


def _parse_score(value: Any, entry_id: str) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Entry {entry_id}: non-numeric confidence_score {value!r}")
        return None


def _parse_emotions(value: Any, entry_id: str) -> dict[str, float]:
    if value in (None, ""):
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Entry {entry_id}: emotions is not JSON")
            return {}
    if not isinstance(value, dict):
        logger.warning(f"Entry {entry_id}: emotions must be a mapping, got {type(value).__name__}")
        return {}

    emotions: dict[str, float] = {}
    for name, intensity in value.items():
        try:
            emotions[str(name)] = float(intensity)
        except (TypeError, ValueError):
            logger.warning(f"Entry {entry_id}: dropping emotion {name!r} with intensity {intensity!r}")
    return emotions


def _parse_insights(value: Any) -> list[str] | str | None:
    if value in (None, "", []):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return json.dumps(value, indent=2, default=str)
