"""Unit tests for the Log dispatcher and module-level logging functions.

Tests verify behavior through actual log files in temp directories.
"""

from __future__ import annotations

import re
import threading
from datetime import datetime
from pathlib import Path

import pytest

import sequoia
from sequoia.destination import LogDestination
from sequoia.exceptions import LogDeletionError
from sequoia.level import LogLevel
from sequoia.log import Log, format_timestamp
from sequoia.message import ListMessage, TextMessage
from sequoia.registry import builtin_level

LINE_PATTERN = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}:\d{3}\] (?P<text>.*)$")


def logged_texts(contents: str) -> list[str]:
    """Strip timestamps from log file contents."""
    texts = []
    for line in contents.splitlines():
        match = LINE_PATTERN.match(line)
        assert match, f"Malformed log line: {line!r}"
        texts.append(match.group("text"))
    return texts


@pytest.fixture
def file_level(tmp_path: Path) -> LogLevel:
    """A file-logging level with its own file."""
    destination = LogDestination.from_file(tmp_path / "custom" / "events.log", console_tag="events")
    return LogLevel(destination, 10, "events")


class TestFormatTimestamp:
    """Tests for the log line timestamp."""

    def test_format(self) -> None:
        """Timestamps are [yyyy-MM-dd HH:mm:ss:mmm]."""
        moment = datetime(2024, 1, 5, 9, 3, 7, 42_999)

        assert format_timestamp(moment) == "[2024-01-05 09:03:07:042]"


class TestLogSync:
    """Tests for Log.log_sync()."""

    def test_writes_line_with_timestamp(self, file_level: LogLevel) -> None:
        """A sync write is on disk when the call returns."""
        Log(file_level, prints=False).log_sync("hello")

        contents = file_level.destination.file.read_text()
        assert contents.endswith("hello\n")
        assert logged_texts(contents) == ["hello"]

    def test_appends_to_existing_contents(self, file_level: LogLevel) -> None:
        """New lines go after what is already in the file."""
        file_level.destination.write("previous line\n")

        Log(file_level, prints=False).log_sync("next")

        assert file_level.destination.read().startswith("previous line\n")
        assert file_level.destination.read().endswith("next\n")

    def test_prints_tag_and_message(self, file_level: LogLevel, capsys: pytest.CaptureFixture[str]) -> None:
        """Printing loggers write "<TAG> <message>" to stdout."""
        Log(file_level).log_sync("visible")

        assert capsys.readouterr().out == "[EVENTS] visible\n"

    def test_prints_false_is_silent(self, file_level: LogLevel, capsys: pytest.CaptureFixture[str]) -> None:
        """prints=False keeps the console clean but still writes the file."""
        Log(file_level, prints=False).log_sync("quiet")

        assert capsys.readouterr().out == ""
        assert file_level.destination.read().endswith("quiet\n")

    def test_console_level_writes_no_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The console level only prints."""
        level = builtin_level("console")

        Log(level).log_sync("just print")

        assert capsys.readouterr().out == "[CONSOLE] just print\n"
        assert not level.destination.file_exists

    def test_renders_structured_messages(self, file_level: LogLevel) -> None:
        """Plain values and message variants are rendered before writing."""
        logger = Log(file_level, prints=False)

        logger.log_sync({"user": "ada", "retries": 3})
        logger.log_sync(ListMessage((TextMessage("x"), TextMessage("y"))))
        logger.log_sync(False)

        assert logged_texts(file_level.destination.read()) == [
            '["user": "ada", "retries": 3]',
            '["x", "y"]',
            "false",
        ]


class TestLogAsync:
    """Tests for Log.log_async()."""

    def test_flush_makes_async_writes_visible(self, file_level: LogLevel) -> None:
        """After flush(), async writes are on disk like sync ones."""
        Log(file_level, prints=False).log_async("later")

        sequoia.flush()

        assert file_level.destination.read().endswith("later\n")

    def test_future_completes_after_write(self, file_level: LogLevel) -> None:
        """The returned future can be waited on."""
        future = Log(file_level, prints=False).log_async("waited")

        future.result(timeout=5)

        assert file_level.destination.file.read_text().endswith("waited\n")

    def test_submission_order_is_kept(self, file_level: LogLevel) -> None:
        """"A" submitted before "B" is written before "B"."""
        logger = Log(file_level, prints=False)

        logger.log_async("A")
        logger.log_async("B")
        sequoia.flush()

        assert logged_texts(file_level.destination.read()) == ["A", "B"]

    def test_order_across_loggers_and_levels(self, file_level: LogLevel, app_log_dir: Path) -> None:
        """A sync write waits for async writes submitted earlier to any level."""
        Log("info", prints=False).log_async("first")
        Log(file_level, prints=False).log_sync("second")

        assert (app_log_dir / "info.log").read_text().endswith("first\n")

    def test_concurrent_callers_never_lose_lines(self, file_level: LogLevel) -> None:
        """Read-modify-write through the queue keeps every line intact."""
        logger = Log(file_level, prints=False)

        def emit(worker: int) -> None:
            for i in range(20):
                logger.log_async(f"w{worker}-{i}")

        threads = [threading.Thread(target=emit, args=(n,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        sequoia.flush()

        texts = logged_texts(file_level.destination.read())
        assert len(texts) == 100
        for n in range(5):
            mine = [t for t in texts if t.startswith(f"w{n}-")]
            assert mine == [f"w{n}-{i}" for i in range(20)]


class TestMaintenance:
    """Tests for Log.clear / Log.delete / Log.read."""

    def test_delete_read_then_log_scenario(self, app_log_dir: Path) -> None:
        """Deleting the info log, reading it, then logging recreates it."""
        info = builtin_level("info")
        try:
            Log.delete(info)
        except LogDeletionError:
            pass

        assert Log.read(info) == ""
        Log(info, prints=False).log_sync("hello")

        assert Log.read(info).endswith("hello\n")
        assert (app_log_dir / "info.log").exists()

    def test_read_creates_missing_file(self, app_log_dir: Path) -> None:
        """Reading a level whose file doesn't exist creates it empty."""
        assert Log.read("notice") == ""
        assert (app_log_dir / "notice.log").read_text() == ""

    def test_clear_empties_file(self, file_level: LogLevel) -> None:
        """clear() keeps the file but removes its contents."""
        Log(file_level, prints=False).log_sync("gone soon")

        Log.clear(file_level)

        assert file_level.destination.file.exists()
        assert Log.read(file_level) == ""

    def test_delete_missing_file_propagates(self, file_level: LogLevel) -> None:
        """Delete failures reach the caller."""
        with pytest.raises(LogDeletionError):
            Log.delete(file_level)

    def test_accepts_level_names(self, app_log_dir: Path) -> None:
        """Maintenance functions accept built-in level names."""
        Log("error", prints=False).log_sync("named")

        assert Log.read("error").endswith("named\n")
        Log.delete("error")
        assert not (app_log_dir / "error.log").exists()


class TestModuleFunctions:
    """Tests for sequoia.info(), sequoia.silent(), sequoia.fatal() and friends."""

    @pytest.mark.parametrize("name", ["info", "notice", "warning", "error", "critical"])
    def test_file_levels(self, name: str, app_log_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Each function prints and appends to its level's file."""
        getattr(sequoia, name)(f"Testing {name}.")
        sequoia.flush()

        assert (app_log_dir / f"{name}.log").read_text().endswith(f"Testing {name}.\n")
        assert f"[{name.upper()}] Testing {name}." in capsys.readouterr().out

    @pytest.mark.parametrize("name", ["console", "debug"])
    def test_console_only_levels(self, name: str, app_log_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """console and debug print but never create a file."""
        getattr(sequoia, name)("Testing.")
        sequoia.flush()

        assert capsys.readouterr().out == f"[{name.upper()}] Testing.\n"
        assert not (app_log_dir / f"{name}.log").exists()

    def test_silent_writes_without_printing(self, app_log_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """silent() writes the file only."""
        sequoia.silent("warning", "shh")
        sequoia.flush()

        assert capsys.readouterr().out == ""
        assert (app_log_dir / "warning.log").read_text().endswith("shh\n")

    def test_silent_with_custom_level(self, app_log_dir: Path) -> None:
        """silent() accepts custom levels."""
        level = LogLevel.custom_higher_than(builtin_level("critical"), "SUPER CRITICAL")

        sequoia.silent(level, "Testing custom.")
        sequoia.flush()

        assert (app_log_dir / "custom-level-7.log").read_text().endswith("Testing custom.\n")

    def test_fatal_writes_then_terminates(
        self, app_log_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """fatal() records the message durably before halting."""
        halted: list[tuple[str, bool]] = []

        def fake_terminate(reason: str) -> None:
            written = (app_log_dir / "fatal.log").read_text().endswith("it broke\n")
            halted.append((reason, written))

        monkeypatch.setattr("sequoia.log._terminate", fake_terminate)

        sequoia.fatal("it broke")

        assert halted == [("it broke", True)]

    def test_fatal_without_stopping(self, app_log_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """stop_execution=False records the message and returns."""
        halted: list[str] = []
        monkeypatch.setattr("sequoia.log._terminate", halted.append)

        sequoia.fatal(["code", 3], stop_execution=False)

        assert halted == []
        assert (app_log_dir / "fatal.log").read_text().endswith('["code", 3]\n')

    def test_terminate_exits_process(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """_terminate reports the reason and exits with the fatal exit code."""
        from sequoia import log as log_module
        from sequoia.constants import FATAL_EXIT_CODE

        codes: list[int] = []
        monkeypatch.setattr(log_module.os, "_exit", codes.append)

        log_module._terminate("bye")

        assert codes == [FATAL_EXIT_CODE]
        assert "Fatal error: bye" in capsys.readouterr().err

    def test_shared_loggers_follow_configuration(self, tmp_path: Path) -> None:
        """Module functions write to the folder of the current configuration."""
        sequoia.configure(app_name="moved", log_dir=tmp_path / "new-root")

        sequoia.info("after move")
        sequoia.flush()

        assert (tmp_path / "new-root" / "moved" / "info.log").read_text().endswith("after move\n")


class TestLogInstance:
    """Tests for Log attributes."""

    def test_attributes(self) -> None:
        """A Log exposes its level and destination; prints is mutable."""
        level = builtin_level("notice")
        logger = Log(level)

        logger.prints = False

        assert logger.level is level
        assert logger.destination is level.destination
        assert logger.prints is False
        assert repr(logger) == "Log(level='notice', prints=False)"

    def test_level_is_read_only(self) -> None:
        """The level cannot be swapped on an existing logger."""
        logger = Log("info")

        with pytest.raises(AttributeError):
            logger.level = builtin_level("error")  # type: ignore[misc]
