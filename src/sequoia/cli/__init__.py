"""Command-line interface for sequoia.

Provides commands for inspecting, clearing and deleting log files, and for
emitting messages from shell scripts.
"""

from .main import cli, main

__all__ = ["cli", "main"]
