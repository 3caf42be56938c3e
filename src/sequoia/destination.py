"""Log destinations: where a level's messages end up.

A destination pairs a console tag with an optional backing file:

    destination = LogDestination.from_file(Path("/var/log/my-app/jobs.log"))
    destination = LogDestination.from_name("jobs")

Created with from_file(), the file path is used exactly as provided. Created
with from_name(), the file lives in the default log folder (see
config.default_log_dir) and gets a ".log" extension unless it already has one.

Corrupted files:
  If the backing file exists but cannot be read as UTF-8 text, the
  destination moves forward to a new file next to it ("info.log" ->
  "info 1.log" -> "info 2.log") and leaves the unreadable file in place for
  inspection. The unreadable file is never retried.

  Recovery does not look at what is already in the new file: the next write
  replaces it. An "info 1.log" left by an earlier run is overwritten when
  "info.log" is found corrupted again after a restart.
"""

from __future__ import annotations

__all__ = [
    "LogDestination",
    "recovery_path",
]

import re
from pathlib import Path

from sequoia.config import default_log_dir
from sequoia.console_tag import ConsoleTag
from sequoia.constants import LOG_FILE_ENCODING, LOG_FILE_EXTENSION
from sequoia.diagnostics import get_diagnostic_logger
from sequoia.exceptions import ConfigurationError, LogDeletionError
from sequoia.utils.file_helpers import write_text_creating_parents

# Trailing run of digits in a file stem ("info 12" -> "12")
_TRAILING_DIGITS = re.compile(r"^(.*?)(\d+)$")


def recovery_path(file: Path) -> Path:
    """Get the file a destination moves to when its current file is corrupted.

    The trailing number of the file stem is incremented, or " 1" is appended
    when the stem has no trailing number. Folder and extension are kept.

    Args:
        file: The unreadable log file.

    Returns:
        Path: The next file to write to.

    Example:
        >>> recovery_path(Path("/logs/info.log"))
        PosixPath('/logs/info 1.log')
        >>> recovery_path(Path("/logs/info 1.log"))
        PosixPath('/logs/info 2.log')
    """
    stem = file.stem
    match = _TRAILING_DIGITS.match(stem)
    if match:
        new_stem = f"{match.group(1)}{int(match.group(2)) + 1}"
    else:
        new_stem = f"{stem} 1"
    return file.with_name(new_stem + file.suffix)


class LogDestination:
    """A destination that a Log instance sends its messages to.

    Attributes:
        name: Stable identity of the destination.
        console_tag: Tag printed before messages in the console.
        logs_to_file: Whether messages are persisted to the backing file.
    """

    def __init__(
        self,
        file: Path,
        name: str,
        console_tag: ConsoleTag,
        logs_to_file: bool = True,
    ) -> None:
        self._file = Path(file)
        self.name = name
        self.console_tag = console_tag
        self.logs_to_file = logs_to_file

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_file(
        cls,
        file: str | Path,
        name: str | None = None,
        console_tag: ConsoleTag | str | None = None,
    ) -> LogDestination:
        """Create a destination assigned to the given file.

        The path is used verbatim, extension included. File logging is
        always enabled.

        Args:
            file: The file that messages are written to.
            name: Name of the destination. Defaults to the file's stem.
            console_tag: Console tag. Defaults to a tag built from the name.

        Returns:
            LogDestination: The new destination.
        """
        file = Path(file)
        name = name if name is not None else file.stem
        if console_tag is None:
            console_tag = ConsoleTag(name)
        elif isinstance(console_tag, str):
            console_tag = ConsoleTag(console_tag)
        return cls(file, name, console_tag, True)

    @classmethod
    def from_name(
        cls,
        name: str,
        logs_to_file: bool = True,
        *,
        log_dir: Path | None = None,
    ) -> LogDestination:
        """Create a destination in the default log folder.

        A console-only destination never touches its file, so it does not
        need an application identity; its path is then left relative.

        Args:
            name: Name of the destination; also the file name, with ".log"
                appended if missing.
            logs_to_file: Whether messages are written to the file.
            log_dir: Folder to use instead of the default log folder.

        Returns:
            LogDestination: The new destination.

        Raises:
            ConfigurationError: If no application identity is available to
                name the default log folder.
        """
        file_name = name if name.endswith(LOG_FILE_EXTENSION) else name + LOG_FILE_EXTENSION
        if log_dir is None:
            try:
                log_dir = default_log_dir()
            except ConfigurationError:
                if logs_to_file:
                    raise
                log_dir = Path()
        return cls(log_dir / file_name, name, ConsoleTag(name), logs_to_file)

    # =========================================================================
    # File access
    # =========================================================================

    @property
    def file(self) -> Path:
        """The log file associated with this destination."""
        return self._file

    @property
    def file_exists(self) -> bool:
        """Whether a file exists at this destination."""
        return self._file.exists()

    @property
    def contents(self) -> str:
        """The contents of the log file. Always "" when logs_to_file is False."""
        return self.read()

    @contents.setter
    def contents(self, text: str) -> None:
        self.write(text)

    def read(self) -> str:
        """Read the full contents of the backing file.

        A missing file is created empty, so the destination is initialized
        after its first read. An unreadable file triggers recovery to a new
        file and reads as "".

        Returns:
            str: The file's text, or "" if file logging is disabled.
        """
        if not self.logs_to_file:
            return ""

        if not self.file_exists:
            self.write("")
            return ""

        try:
            return self._file.read_bytes().decode(LOG_FILE_ENCODING)
        except (OSError, UnicodeDecodeError):
            self._handle_corrupted_file()
            return ""

    def write(self, text: str) -> None:
        """Replace the contents of the backing file.

        Missing folders are created. Failures are reported as a diagnostic
        warning and never raised: a failed log write must not break the
        caller that logged.

        Args:
            text: The complete new file contents.
        """
        if not self.logs_to_file:
            return
        try:
            write_text_creating_parents(self._file, text)
        except OSError as e:
            get_diagnostic_logger().warning(
                {
                    "event": "log_write_failed",
                    "path": str(self._file),
                    "error": str(e),
                    "message": f"Could not write to log file at path {self._file}.",
                }
            )

    def append(self, text: str) -> None:
        """Append text by rewriting the whole file (read, concatenate, write)."""
        if not self.logs_to_file:
            return
        existing = self.read()
        self.write(existing + text)

    def delete(self) -> None:
        """Remove the backing file. Does nothing if logs_to_file is False.

        Raises:
            LogDeletionError: If the file could not be removed, including
                when it does not exist.
        """
        if not self.logs_to_file:
            return
        try:
            self._file.unlink()
        except OSError as e:
            raise LogDeletionError(self._file, e.strerror or str(e)) from e

    def _handle_corrupted_file(self) -> None:
        """Move this destination to a fresh file next to the unreadable one."""
        old_file = self._file
        new_file = recovery_path(old_file)
        get_diagnostic_logger().warning(
            {
                "event": "log_file_corrupted",
                "path": str(old_file),
                "new_path": str(new_file),
                "message": (
                    f'Could not read log file at path "{old_file}". '
                    "The log file may be corrupted. "
                    f'A new file will be created at "{new_file}".'
                ),
            }
        )
        self._file = new_file

    # =========================================================================
    # Identity
    # =========================================================================

    def _key(self) -> tuple[ConsoleTag, str, Path, bool]:
        return (self.console_tag, self.name, self._file, self.logs_to_file)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogDestination):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"LogDestination(name={self.name!r}, file={str(self._file)!r}, "
            f"console_tag={self.console_tag.tag_value!r}, logs_to_file={self.logs_to_file})"
        )
