"""The logger.

Either create a Log for a level, or use one of the module-level functions
that wrap a shared Log per built-in level:

    logger = Log(builtin_level("notice"))
    logger.log_async("A message.")

    sequoia.notice("A message.")

Every call writes; there is no minimum-level filter. A message is printed to
stdout as "<TAG> <message>" when the logger prints, and appended to the
destination's file as "[yyyy-MM-dd HH:mm:ss:mmm] <message>" when the
destination logs to file. Both happen on the process-wide serial queue.
"""

from __future__ import annotations

__all__ = [
    "Log",
    "console",
    "critical",
    "debug",
    "error",
    "fatal",
    "flush",
    "info",
    "notice",
    "silent",
    "warning",
]

import os
import sys
import threading
from concurrent.futures import Future
from datetime import datetime
from typing import Any

import click

from sequoia.constants import FATAL_EXIT_CODE, TIMESTAMP_FORMAT
from sequoia.destination import LogDestination
from sequoia.level import LogLevel
from sequoia.message import LogMessage, render_message, to_message
from sequoia.registry import LevelRegistry, get_registry, resolve_level
from sequoia.serial_queue import get_serial_queue


def format_timestamp(moment: datetime) -> str:
    """Format a moment as the log file line prefix, e.g. "[2024-01-15 10:30:00:042]"."""
    millis = moment.microsecond // 1000
    return f"[{moment.strftime(TIMESTAMP_FORMAT)}:{millis:03d}]"


class Log:
    """A logger bound to one level.

    Log instances are cheap and hold no resources; all writes go through the
    shared serial queue.

    Attributes:
        prints: Whether messages are also printed to the console.
    """

    def __init__(self, level: LogLevel | str, prints: bool = True) -> None:
        self._level = resolve_level(level)
        self.prints = prints

    @property
    def level(self) -> LogLevel:
        """The level of this logger."""
        return self._level

    @property
    def destination(self) -> LogDestination:
        """The destination this logger writes to."""
        return self._level.destination

    def __repr__(self) -> str:
        return f"Log(level={self._level.description!r}, prints={self.prints})"

    # =========================================================================
    # Logging
    # =========================================================================

    def _log(self, message: LogMessage) -> None:
        # Runs on the serial queue only
        text = render_message(message)
        if self.prints:
            click.echo(f"{self.destination.console_tag.tag_value} {text}")
        if self.destination.logs_to_file:
            line = f"{format_timestamp(datetime.now())} {text}\n"
            self.destination.append(line)

    def log_async(self, message: Any) -> Future[None]:
        """Log a message without waiting for it to be written.

        Messages are written in submission order across all loggers.

        Args:
            message: A LogMessage or a plain value (see message.to_message).

        Returns:
            Future that completes once the message has been written. Waiting
            on it is optional.
        """
        return get_serial_queue().submit(self._log, to_message(message))

    def log_sync(self, message: Any) -> None:
        """Log a message and block until it has been written.

        Every message submitted before it, by any logger, has been written
        too when this returns.

        Args:
            message: A LogMessage or a plain value (see message.to_message).
        """
        get_serial_queue().run_sync(self._log, to_message(message))

    # =========================================================================
    # Log file maintenance
    # =========================================================================

    @staticmethod
    def clear(level: LogLevel | str) -> None:
        """Overwrite the log file of the given level with an empty string."""
        destination = resolve_level(level).destination
        get_serial_queue().run_sync(destination.write, "")

    @staticmethod
    def delete(level: LogLevel | str) -> None:
        """Delete the log file of the given level.

        Raises:
            LogDeletionError: If the file could not be deleted.
        """
        destination = resolve_level(level).destination
        get_serial_queue().run_sync(destination.delete)

    @staticmethod
    def read(level: LogLevel | str) -> str:
        """Return the contents of the log file of the given level."""
        destination = resolve_level(level).destination
        return get_serial_queue().run_sync(destination.read)


# =============================================================================
# Module-level logging functions
# =============================================================================

# One shared Log per built-in level, rebuilt with the registry
_shared_registry: LevelRegistry | None = None
_shared_logs: dict[str, Log] = {}
_shared_lock = threading.Lock()


def _shared_log(name: str) -> Log:
    global _shared_registry
    registry = get_registry()
    with _shared_lock:
        if registry is not _shared_registry:
            _shared_logs.clear()
            _shared_registry = registry
        if name not in _shared_logs:
            _shared_logs[name] = Log(registry.get(name))
        return _shared_logs[name]


def console(message: Any) -> None:
    """Log a console-only message. Nothing is written to a file."""
    _shared_log("console").log_async(message)


def debug(message: Any) -> None:
    """Log a debug message. Debug messages are printed, not written to a file."""
    _shared_log("debug").log_async(message)


def info(message: Any) -> None:
    """Log general information to "info.log" in the default log folder."""
    _shared_log("info").log_async(message)


def notice(message: Any) -> None:
    """Log information that needs more attention than info but is not a warning.

    Written to "notice.log" in the default log folder.
    """
    _shared_log("notice").log_async(message)


def warning(message: Any) -> None:
    """Log a warning to "warning.log" in the default log folder."""
    _shared_log("warning").log_async(message)


def error(message: Any) -> None:
    """Log an error to "error.log" in the default log folder."""
    _shared_log("error").log_async(message)


def critical(message: Any) -> None:
    """Log a critical condition to "critical.log" in the default log folder."""
    _shared_log("critical").log_async(message)


def fatal(message: Any, stop_execution: bool = True) -> None:
    """Log a message where the program's integrity is compromised, then halt.

    The message is written synchronously to "fatal.log" before the process
    terminates, so it is never lost.

    Args:
        message: A LogMessage or a plain value.
        stop_execution: Terminate the process after logging. Pass False to
            record the message and keep running.
    """
    message = to_message(message)
    _shared_log("fatal").log_sync(message)
    if stop_execution:
        _terminate(render_message(message))


def silent(level: LogLevel | str, message: Any) -> None:
    """Log a message to a level's file without printing it to the console.

    Args:
        level: A level, or the name of a built-in level.
        message: A LogMessage or a plain value.
    """
    Log(level, prints=False).log_async(message)


def flush() -> None:
    """Block until every message logged so far has been written."""
    get_serial_queue().flush()


def _terminate(reason: str) -> None:
    """Halt the process after a fatal message."""
    click.echo(f"Fatal error: {reason}", err=True)
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(FATAL_EXIT_CODE)
