"""daybook entries / show / add — list, inspect and write journal entries."""

from __future__ import annotations

import asyncio
from datetime import date, datetime

import click

from daybook.core.exceptions import DaybookError, EntryNotFoundError
from daybook.journal.models import Feeling

from .common import calendar_settings, create_store, date_option, month_option, screen_bus


@click.command()
@click.option("--month", callback=month_option, help="Month to list as YYYY-MM (default: this month).")
@click.option("--query", "-q", default="", help="Case-insensitive text search.")
@click.option("--mood", default=None, help="Only entries with exactly this feeling.")
@click.option("--date", "on_date", callback=date_option, help="Only entries written on YYYY-MM-DD.")
@click.option("--sort-confidence", is_flag=True, help="Highest confidence first.")
@click.pass_obj
def entries(config, month, query: str, mood: str | None, on_date: date | None, sort_confidence: bool) -> None:
    """List the month's journal entries, filtered."""
    from daybook.calendar.navigation import CalendarNavigationState
    from daybook.journal.display import feeling_emoji, format_entry_date
    from daybook.journal.screen import JournalScreen

    screen = JournalScreen(
        create_store(config), today=date.today(), calendar_config=calendar_settings(config), bus=screen_bus()
    )
    if month is not None:
        screen.state = CalendarNavigationState(reference_month=month, selected_day=1)

    if not asyncio.run(screen.refresh()):
        raise click.ClickException(f"Could not load entries: {screen.last_error}. Run the command again to retry.")

    screen.set_query(query)
    screen.set_mood(mood)
    screen.set_date_filter(on_date)
    if sort_confidence:
        screen.toggle_sort_by_confidence()

    visible = screen.visible_entries()
    click.echo(f"{screen.heading} ({screen.count_label})")
    if not visible:
        click.echo(screen.empty_message)
        return
    for entry in visible:
        click.echo(
            f"{feeling_emoji(entry.feeling)} {format_entry_date(entry):<13} {entry.feeling:<10} "
            f"[{entry.id}] {screen.preview(entry)}"
        )


@click.command()
@click.argument("entry_id")
@click.pass_obj
def show(config, entry_id: str) -> None:
    """Print the detail card of one entry."""
    from daybook.journal.display import detail_lines
    from daybook.journal.store import require_entry

    store = create_store(config)
    try:
        entry = require_entry(store, entry_id)
    except EntryNotFoundError as e:
        raise click.ClickException(str(e)) from e
    except DaybookError as e:
        raise click.ClickException(f"Could not load entry {entry_id}: {e}") from e
    for line in detail_lines(entry):
        click.echo(line)


@click.command()
@click.argument("text")
@click.option("--feeling", type=click.Choice([f.value for f in Feeling]), required=True, help="How you feel.")
@click.option("--date", "on_date", callback=date_option, help="Entry date (default: today).")
@click.pass_obj
def add(config, text: str, feeling: str, on_date: date | None) -> None:
    """Write a new journal entry."""
    from daybook.journal.models import JournalEntry
    from daybook.journal.screen import JournalScreen

    now = datetime.now()
    entry = JournalEntry.draft(
        on_date or now.date(),
        text,
        feeling=feeling,
        entry_time=now.time().replace(microsecond=0),
    )
    screen = JournalScreen(create_store(config), today=now.date(), bus=screen_bus())
    try:
        stored = asyncio.run(screen.save_entry(entry))
    except DaybookError as e:
        raise click.ClickException(f"Entry not saved: {e}") from e
    click.echo(f"Saved entry {stored.id} for {stored.date.isoformat()}")
