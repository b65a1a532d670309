"""daybook calendar — print a month grid."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import date

import click

from .common import calendar_settings, create_store, month_option, screen_bus


def _render_cell(cell, has_entry: bool) -> str:
    if not cell.is_current_month:
        return f"[{cell.day:>2}] "
    mark = ">" if cell.is_selected else "*" if cell.is_today else " "
    return f"{mark}{cell.day:>2}{'•' if has_entry else ' '} "


def render_month(screen) -> list[str]:
    """Text rendering of the screen's calendar card."""
    from daybook.calendar.grid import weekday_labels, weeks

    days = screen.calendar_days()
    markers = screen.entry_markers()
    lines = [screen.reference_month.label.center(35).rstrip()]
    lines.append("".join(f" {label:>2}  " for label in weekday_labels(screen.calendar_config.first_weekday)).rstrip())
    index = 0
    for row in weeks(days):
        cells = []
        for cell in row:
            cells.append(_render_cell(cell, markers[index]))
            index += 1
        lines.append("".join(cells).rstrip())
    return lines


@click.command("calendar")
@click.option("--month", callback=month_option, help="Month to show as YYYY-MM (default: this month).")
@click.option("--week-start", type=click.Choice(["sunday", "monday"]), default=None, help="First column of the grid.")
@click.option("--select", "select_day", type=int, default=None, help="Day of the month to highlight.")
@click.pass_obj
def calendar_cmd(config, month, week_start: str | None, select_day: int | None) -> None:
    """Show a month calendar with a dot on days that have entries."""
    from daybook.calendar.grid import parse_week_start
    from daybook.calendar.navigation import CalendarNavigationState
    from daybook.journal.screen import JournalScreen

    settings = calendar_settings(config)
    if week_start:
        settings = replace(settings, first_weekday=parse_week_start(week_start))

    screen = JournalScreen(create_store(config), today=date.today(), calendar_config=settings, bus=screen_bus())
    if month is not None and month != screen.reference_month:
        screen.state = CalendarNavigationState(reference_month=month, selected_day=1)
    if select_day is not None:
        if not 1 <= select_day <= screen.reference_month.days_in_month:
            raise click.BadParameter(f"{screen.reference_month} has no day {select_day}", param_hint="--select")
        screen.state = replace(screen.state, selected_day=select_day)

    if not asyncio.run(screen.refresh()):
        click.echo(f"Could not load entries: {screen.last_error}", err=True)

    for line in render_month(screen):
        click.echo(line)
