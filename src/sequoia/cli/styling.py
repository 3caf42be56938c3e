"""CLI output styling utilities.

Provides consistent styling helpers for CLI output:
- Cyan bold for section headers and labels
- Green for success messages (with checkmark)
- Red for error messages (with cross)
- Dim for neutral/empty state messages
"""

from __future__ import annotations

__all__ = [
    "format_size",
    "style_dim",
    "style_error",
    "style_label",
    "style_success",
]

import click


def style_label(label: str) -> str:
    """Style a label for list/summary headers.

    Example:
        >>> click.echo(style_label("Log files"))
        Log files:
    """
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_success(message: str) -> str:
    """Style a success message with checkmark."""
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    """Style an error message with cross mark."""
    return click.style(f"✗ {message}", fg="red")


def style_dim(message: str) -> str:
    """Style a neutral/empty state message as dim."""
    return click.style(message, dim=True)


def format_size(size_bytes: int) -> str:
    """Format a byte count for humans, e.g. "512 B", "1.5 KB", "2.0 MB"."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"
