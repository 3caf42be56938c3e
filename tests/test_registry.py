"""Unit tests for the built-in level registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from sequoia.config import configure, reset_config
from sequoia.constants import BUILTIN_LEVELS
from sequoia.exceptions import ConfigurationError
from sequoia.registry import builtin_level, get_registry, resolve_level


class TestBuiltinLevels:
    """Tests for the eight built-in levels."""

    def test_priorities_in_increasing_severity(self) -> None:
        """console=0 through fatal=7."""
        registry = get_registry()

        assert [(lvl.description, lvl.priority) for lvl in registry] == list(BUILTIN_LEVELS.items())

    def test_console_and_debug_do_not_log_to_file(self) -> None:
        """Only info and above persist messages."""
        registry = get_registry()

        assert registry.console.destination.logs_to_file is False
        assert registry.debug.destination.logs_to_file is False
        for name in ("info", "notice", "warning", "error", "critical", "fatal"):
            assert registry.get(name).destination.logs_to_file is True

    def test_files_live_in_app_log_dir(self, app_log_dir: Path) -> None:
        """Built-in destinations are named destinations in the default folder."""
        assert builtin_level("warning").destination.file == app_log_dir / "warning.log"

    def test_lookups_share_objects(self) -> None:
        """The same level and destination objects are returned every time."""
        assert builtin_level("info") is get_registry().info
        assert builtin_level("info").destination is builtin_level("info").destination

    def test_unknown_name(self) -> None:
        """Unknown names list the valid ones."""
        with pytest.raises(KeyError, match="Valid levels: console"):
            builtin_level("verbose")

    def test_resolve_level_accepts_names_and_levels(self) -> None:
        """resolve_level passes levels through and looks up names."""
        info = builtin_level("info")

        assert resolve_level(info) is info
        assert resolve_level("info") is info


class TestRegistryLifecycle:
    """Tests for rebuilding the registry when configuration changes."""

    def test_reconfigure_builds_new_registry(self, tmp_path: Path) -> None:
        """configure() points new lookups at the new folder."""
        before = get_registry()

        configure(app_name="other-app", log_dir=tmp_path / "elsewhere")
        after = get_registry()

        assert after is not before
        assert after.info.destination.file == tmp_path / "elsewhere" / "other-app" / "info.log"

    def test_missing_identity_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a display name or bundle identifier nothing can be placed."""
        reset_config()
        monkeypatch.setattr("sequoia.config._detect_bundle_id", lambda: None)

        with pytest.raises(ConfigurationError):
            get_registry()
