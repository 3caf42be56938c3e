"""Shared fixtures for sequoia tests.

Every test gets its own log folder: the process-wide configuration points at
a temp directory and the built-in registry is rebuilt for it.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from sequoia.config import configure, reset_config
from sequoia.constants import APP_NAME_ENV, BUNDLE_ID_ENV, LOG_DIR_ENV
from sequoia.registry import reset_registry
from sequoia.serial_queue import get_serial_queue

TEST_APP_NAME = "sequoia-tests"


@pytest.fixture(autouse=True)
def log_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point all named destinations at a temp folder.

    Yields:
        The base log directory; files land in <log_root>/sequoia-tests/.
    """
    for var in (APP_NAME_ENV, BUNDLE_ID_ENV, LOG_DIR_ENV):
        monkeypatch.delenv(var, raising=False)
    base = tmp_path / "logs"
    configure(app_name=TEST_APP_NAME, log_dir=base)
    reset_registry()
    yield base
    # Let queued writes finish before the temp folder goes away
    get_serial_queue().flush()
    reset_config()
    reset_registry()


@pytest.fixture
def app_log_dir(log_root: Path) -> Path:
    """The folder that built-in and named destinations write to."""
    return log_root / TEST_APP_NAME
