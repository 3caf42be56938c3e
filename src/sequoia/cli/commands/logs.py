"""Logs command group for sequoia CLI.

Provides log file commands for the built-in levels. Reads and writes go
through the same serial queue as logging, so they never interleave with a
message being written by this process.
"""

from __future__ import annotations

__all__ = ["logs"]

import click

from sequoia.exceptions import ConfigurationError, LogDeletionError
from sequoia.log import Log
from sequoia.registry import get_registry

from ..styling import format_size, style_dim, style_error, style_label, style_success
from ._helpers import LEVEL_CHOICE, level_or_exit


@click.group()
def logs() -> None:
    """Log file commands.

    View, clear and delete the log files of the built-in levels.
    Use 'logs list' to see where they are.
    """
    pass


@logs.command("list")
def logs_list() -> None:
    """List the built-in levels and their log files."""
    try:
        registry = get_registry()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    click.echo("\n" + style_label("Log files") + "\n")

    for level in registry:
        destination = level.destination
        tag = destination.console_tag.tag_value
        click.echo(f"  {level.priority}  {tag:12} {level.description}")

        if not destination.logs_to_file:
            click.echo(f"     {style_dim('console only')}")
            continue

        file = destination.file
        if file.exists():
            size = format_size(file.stat().st_size)
            status = click.style("exists", fg="green")
            click.echo(f"     {status} ({size})")
        else:
            click.echo(f"     {click.style('not created', fg='yellow')}")
        click.echo(f"     {file}")

    click.echo()


@logs.command("path")
@click.argument("level", type=LEVEL_CHOICE)
def logs_path(level: str) -> None:
    """Print the log file path of LEVEL."""
    click.echo(str(level_or_exit(level).destination.file))


@logs.command("show")
@click.argument("level", type=LEVEL_CHOICE)
@click.option(
    "--limit",
    "-n",
    default=50,
    show_default=True,
    help="Number of lines to show (0 shows everything)",
)
def logs_show(level: str, limit: int) -> None:
    """Show the most recent lines of LEVEL's log file."""
    log_level = level_or_exit(level)
    if not log_level.destination.logs_to_file:
        click.echo(style_dim(f"The {log_level.description} level does not log to a file."))
        return

    lines = Log.read(log_level).splitlines()
    if not lines:
        click.echo(style_dim("No entries."))
        return

    if limit > 0:
        lines = lines[-limit:]
    for line in lines:
        click.echo(line)


@logs.command("clear")
@click.argument("level", type=LEVEL_CHOICE)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
def logs_clear(level: str, yes: bool) -> None:
    """Empty LEVEL's log file."""
    log_level = level_or_exit(level)
    if not log_level.destination.logs_to_file:
        click.echo(style_dim(f"The {log_level.description} level does not log to a file."))
        return
    if not yes and not click.confirm(f"Clear the {log_level.description} log?"):
        click.echo(style_dim("Cancelled."))
        return

    Log.clear(log_level)
    click.echo(style_success(f"Cleared {log_level.destination.file}"))


@logs.command("delete")
@click.argument("level", type=LEVEL_CHOICE)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
def logs_delete(level: str, yes: bool) -> None:
    """Delete LEVEL's log file."""
    log_level = level_or_exit(level)
    if not log_level.destination.logs_to_file:
        click.echo(style_dim(f"The {log_level.description} level does not log to a file."))
        return
    if not yes and not click.confirm(f"Delete the {log_level.description} log?"):
        click.echo(style_dim("Cancelled."))
        return

    try:
        Log.delete(log_level)
    except LogDeletionError as e:
        click.echo(style_error(str(e)))
        raise SystemExit(1)
    click.echo(style_success(f"Deleted {log_level.destination.file}"))
