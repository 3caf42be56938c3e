"""Emit command for sequoia CLI.

Logs a message from a shell script. The write is synchronous, so the message
is on disk when the command exits.
"""

from __future__ import annotations

__all__ = ["emit"]

import click

from sequoia.log import Log

from ._helpers import LEVEL_CHOICE, level_or_exit


@click.command()
@click.argument("level", type=LEVEL_CHOICE)
@click.argument("message", nargs=-1, required=True)
@click.option("--silent", "-s", is_flag=True, help="Write to the log file only, don't print")
def emit(level: str, message: tuple[str, ...], silent: bool) -> None:
    """Log MESSAGE at LEVEL.

    Words of MESSAGE are joined with spaces. A fatal message is recorded
    like any other; it does not stop anything.
    """
    logger = Log(level_or_exit(level), prints=not silent)
    logger.log_sync(" ".join(message))
