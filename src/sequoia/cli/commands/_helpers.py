"""Shared helpers for CLI subcommands."""

from __future__ import annotations

__all__ = [
    "LEVEL_CHOICE",
    "level_or_exit",
]

import click

from sequoia.constants import BUILTIN_LEVELS
from sequoia.exceptions import ConfigurationError
from sequoia.level import LogLevel
from sequoia.registry import builtin_level

LEVEL_CHOICE = click.Choice(list(BUILTIN_LEVELS), case_sensitive=False)


def level_or_exit(name: str) -> LogLevel:
    """Resolve a built-in level, turning configuration errors into CLI errors."""
    try:
        return builtin_level(name.lower())
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
