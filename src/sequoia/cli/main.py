"""Main CLI entry point for sequoia.

Defines the CLI group and registers all subcommands.

Commands:
    emit - Log a message at a built-in level
    logs - Log file management (list, show, path, clear, delete)

Subcommand help:
    sequoia COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli"]

import sys
from pathlib import Path

import click

from sequoia import __version__
from sequoia.config import LoggingConfig, configure, get_config
from sequoia.exceptions import ConfigurationError

from .commands.emit import emit
from .commands.logs import logs


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option("--app-name", help="Application name used as the log folder")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Base log directory (default: platform log directory)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON logging config file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    app_name: str | None,
    log_dir: Path | None,
    config_path: Path | None,
) -> None:
    """sequoia: leveled logging to the console and per-level log files."""
    if version:
        click.echo(f"sequoia {__version__}")
        sys.exit(0)

    if config_path is not None:
        try:
            config = LoggingConfig.load_from_file(config_path)
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e
    else:
        config = get_config()

    if app_name or log_dir:
        config = config.model_copy(
            update={
                "app_name": app_name or config.app_name,
                "log_dir": str(log_dir) if log_dir else config.log_dir,
            }
        )
    configure(config)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(emit)
cli.add_command(logs)


def main() -> None:
    """CLI entry point."""
    cli()
