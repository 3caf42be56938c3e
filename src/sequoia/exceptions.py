"""Custom exceptions for sequoia.

Exceptions are organized by how far they travel:

Fatal (the process cannot log at all):
    - ConfigurationError: No application identity for the default log directory

Propagated to the caller:
    - LogDeletionError: An explicit delete of a log file failed

Everything else (write failures, corrupted files) is reported through the
diagnostic logger and never raised to the logging caller.

Usage:
    from sequoia.exceptions import ConfigurationError, LogDeletionError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "LogDeletionError",
    "SequoiaError",
]

from pathlib import Path


class SequoiaError(Exception):
    """Base exception for all sequoia errors."""


class ConfigurationError(SequoiaError):
    """Logging configuration is incomplete.

    Raised when:
    - No display name or bundle identifier is available to name the
      default log folder
    - A config file contains invalid JSON or fails validation

    There is no reasonable default location to write to, so callers should
    not try to continue logging to named destinations after this.
    """


class LogDeletionError(SequoiaError):
    """A log file could not be deleted.

    Attributes:
        path: The backing file that was not removed.
    """

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize LogDeletionError.

        Args:
            path: The backing file that was not removed.
            reason: Human-readable cause from the filesystem.
        """
        self.path = path
        super().__init__(f"Could not delete log file at {path}: {reason}")
