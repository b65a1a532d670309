"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``DaybookConfig``
instance.  Dict-based access keeps working unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    cache_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "cache_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class CalendarSection(BaseModel):
    """Month grid and navigation behaviour."""

    week_start: Literal["sunday", "monday"] = "sunday"
    selection_policy: Literal["reset", "keep"] = "reset"

    @field_validator("week_start", "selection_policy", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class PersistenceSection(BaseModel):
    """Where journal entries are read from and written to."""

    backend: Literal["file", "supabase", "memory"] = "file"
    path: str = ""
    url: str = ""
    api_key: str = ""
    table: str = "journals"
    timeout: int = 15

    @model_validator(mode="after")
    def _backend_requirements(self) -> PersistenceSection:
        if self.backend == "supabase" and not self.url:
            raise ValueError("persistence.url is required for the supabase backend")
        if self.backend == "file" and not self.path:
            raise ValueError("persistence.path is required for the file backend")
        return self


class LoggingSection(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


class DaybookConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.daybook"))
    calendar: CalendarSection = CalendarSection()
    persistence: PersistenceSection = PersistenceSection(path="~/.daybook/entries.yaml")
    logging: LoggingSection = LoggingSection()
