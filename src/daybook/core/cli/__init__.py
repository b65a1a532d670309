"""Daybook CLI — entry point for the calendar, entries, show and add commands."""

import click

from daybook import __version__


@click.group()
@click.version_option(version=__version__, package_name="daybook")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="Path to config.yaml.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, log_level: str | None) -> None:
    """Daybook — browse your mood journal by month."""
    from daybook.core.cli.common import load_config
    from daybook.core.utils.logging import setup_logging_from_config

    config = load_config(config_file)
    setup_logging_from_config(config, level_override=log_level)
    ctx.obj = config


# Register subcommands (lazy imports keep startup fast)
from .calendar_cmd import calendar_cmd
from .entries_cmd import add, entries, show

main.add_command(calendar_cmd)
main.add_command(entries)
main.add_command(show)
main.add_command(add)
