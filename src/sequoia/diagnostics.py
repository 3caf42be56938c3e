"""Diagnostic logger for the logging facility itself.

sequoia cannot report its own problems through its own queue: a failed write
or a corrupted log file is discovered while the queue is already busy, and
the destination involved is exactly the one that cannot be trusted. These
messages go through a separate stdlib logger instead.

Logging strategy:
- Console (stderr): WARNING and above by default
- No file handler - a broken log file must never hide its own diagnostic
"""

from __future__ import annotations

__all__ = [
    "DiagnosticFormatter",
    "get_diagnostic_logger",
]

import logging
import sys

from sequoia.constants import DIAGNOSTIC_LOGGER_NAME, DIAGNOSTIC_PREFIX


class DiagnosticFormatter(logging.Formatter):
    """Human-readable formatter for diagnostic output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human-readable console output.

        Args:
            record: The log record to format.

        Returns:
            str: Formatted log message with prefix and level.
        """
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
        else:
            msg = record.getMessage()
        return f"{DIAGNOSTIC_PREFIX} {record.levelname}: {msg}"


# Module-level singleton logger - created on first use
_diagnostic_logger: logging.Logger | None = None


def get_diagnostic_logger() -> logging.Logger:
    """Get the singleton diagnostic logger instance.

    Creates the logger on first call with a stderr handler only.

    Returns:
        logging.Logger: Configured diagnostic logger instance.

    Example:
        >>> from sequoia.diagnostics import get_diagnostic_logger
        >>> get_diagnostic_logger().warning(
        ...     {"event": "log_write_failed", "message": "Could not write ..."}
        ... )
    """
    global _diagnostic_logger

    if _diagnostic_logger is not None:
        return _diagnostic_logger

    _diagnostic_logger = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    _diagnostic_logger.setLevel(logging.INFO)
    _diagnostic_logger.propagate = False

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in _diagnostic_logger.handlers:
        handler.close()
    _diagnostic_logger.handlers.clear()

    stderr_handler = _StderrHandler()
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(DiagnosticFormatter())
    _diagnostic_logger.addHandler(stderr_handler)

    return _diagnostic_logger


class _StderrHandler(logging.StreamHandler):
    """StreamHandler that always writes to the current sys.stderr.

    Resolving the stream per record keeps output visible when sys.stderr is
    swapped after the logger was created (pytest capture, daemonization).
    """

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr
