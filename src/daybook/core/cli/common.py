"""Shared setup logic for CLI commands."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click

from daybook.core.config import Config
from daybook.core.exceptions import ConfigurationError

DAYBOOK_DIR = Path.home() / ".daybook"
CONFIG_PATH = DAYBOOK_DIR / "config.yaml"


def load_config(config_file: str | None = None) -> Config:
    """Load config from ``config_file`` or ~/.daybook/config.yaml."""
    return Config(config_file=config_file or str(CONFIG_PATH), data_dir=str(DAYBOOK_DIR))


def create_store(config: Config):
    """Build the JournalStore selected by ``persistence.backend``."""
    try:
        settings = config.validated().persistence
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if settings.backend == "supabase":
        from daybook.integrations.supabase import SupabaseJournalStore

        if not settings.api_key:
            raise click.ClickException("persistence.api_key is required for the supabase backend")
        return SupabaseJournalStore(
            url=settings.url,
            api_key=settings.api_key,
            table=settings.table,
            timeout=settings.timeout,
        )

    from daybook.journal.store import FileJournalStore, InMemoryJournalStore

    if settings.backend == "memory":
        return InMemoryJournalStore()
    return FileJournalStore(settings.path)


def screen_bus():
    """Event bus for CLI screens: every screen event goes to the log."""
    from daybook.core.events import EventBus, log_event

    bus = EventBus()
    bus.on_all(log_event)
    return bus


def calendar_settings(config: Config):
    from daybook.journal.config import CalendarConfig

    try:
        return CalendarConfig.from_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def month_option(ctx: click.Context, param: click.Parameter, value: str | None):
    """Click callback turning ``YYYY-MM`` into a YearMonth (None = current month)."""
    from daybook.calendar.grid import YearMonth

    if value is None:
        return None
    try:
        return YearMonth.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def date_option(ctx: click.Context, param: click.Parameter, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}") from e
