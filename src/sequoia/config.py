"""Process configuration for sequoia.

Named destinations write to a per-application log folder, so the facility
needs to know which application it is running in. That identity comes from,
in order of precedence:

1. An explicit call to configure() (usually at process startup)
2. The SEQUOIA_APP_NAME / SEQUOIA_BUNDLE_ID / SEQUOIA_LOG_DIR environment
3. The __main__ module's package or script name (bundle identifier fallback)

Example usage:
    # At startup
    configure(app_name="My App")

    # Or from a JSON file
    configure(LoggingConfig.load_from_file(config_path))
"""

from __future__ import annotations

__all__ = [
    "LoggingConfig",
    "configure",
    "default_log_dir",
    "get_config",
    "reset_config",
]

import os
import sys
import threading
from pathlib import Path

from platformdirs import user_log_dir
from pydantic import BaseModel, ConfigDict, Field

from sequoia.constants import APP_NAME_ENV, BUNDLE_ID_ENV, LOG_DIR_ENV
from sequoia.exceptions import ConfigurationError
from sequoia.utils.file_helpers import load_validated_json


class LoggingConfig(BaseModel):
    """Where named destinations keep their log files.

    Attributes:
        app_name: Display name of the application. Preferred folder name.
        bundle_id: Reverse-DNS style identifier, used when app_name is unset.
        log_dir: Base folder that replaces the platform log directory.
    """

    app_name: str | None = Field(default=None, min_length=1)
    bundle_id: str | None = Field(default=None, min_length=1)
    log_dir: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def identity(self) -> str | None:
        """The folder name for this application's logs, if one is known."""
        return self.app_name or self.bundle_id

    @classmethod
    def from_environment(cls) -> LoggingConfig:
        """Build config from environment variables and the running program.

        Returns:
            LoggingConfig: Config with whatever identity could be found.
        """
        return cls(
            app_name=os.environ.get(APP_NAME_ENV) or None,
            bundle_id=os.environ.get(BUNDLE_ID_ENV) or _detect_bundle_id(),
            log_dir=os.environ.get(LOG_DIR_ENV) or None,
        )

    @classmethod
    def load_from_file(cls, config_path: Path) -> LoggingConfig:
        """Load configuration from a JSON file.

        Args:
            config_path: Path to the JSON config file.

        Returns:
            LoggingConfig: Validated configuration.

        Raises:
            ConfigurationError: If the file is missing, not JSON, or invalid.
        """
        try:
            return load_validated_json(config_path, cls, file_type="logging config")
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def save_to_file(self, config_path: Path) -> None:
        """Write configuration as JSON, creating parent folders."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2, exclude_none=True) + "\n", encoding="utf-8")


def _detect_bundle_id() -> str | None:
    """Derive an identifier from the program that is running.

    Uses the package of ``python -m pkg`` or the stem of the script file.
    Interactive sessions have neither and return None.
    """
    main = sys.modules.get("__main__")
    if main is None:
        return None

    spec = getattr(main, "__spec__", None)
    if spec is not None and spec.name:
        name = spec.name
        # "pkg.__main__" -> "pkg"
        if name.endswith(".__main__"):
            name = name[: -len(".__main__")]
        return name or None

    main_file = getattr(main, "__file__", None)
    if main_file:
        return Path(main_file).stem or None
    return None


# =============================================================================
# Process-wide configuration
# =============================================================================

_config: LoggingConfig | None = None
_config_lock = threading.Lock()


def get_config() -> LoggingConfig:
    """Get the active configuration, reading the environment on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = LoggingConfig.from_environment()
        return _config


def configure(
    config: LoggingConfig | None = None,
    *,
    app_name: str | None = None,
    bundle_id: str | None = None,
    log_dir: str | Path | None = None,
) -> LoggingConfig:
    """Replace the active configuration.

    Call this before the first message is logged. Built-in destinations are
    rebuilt from the new configuration the next time they are looked up.

    Args:
        config: A complete configuration. Keyword arguments are ignored if given.
        app_name: Display name of the application.
        bundle_id: Identifier used when app_name is unset.
        log_dir: Base folder that replaces the platform log directory.

    Returns:
        LoggingConfig: The configuration now in effect.
    """
    global _config
    if config is None:
        config = LoggingConfig(
            app_name=app_name,
            bundle_id=bundle_id,
            log_dir=str(log_dir) if log_dir is not None else None,
        )
    with _config_lock:
        _config = config
    return config


def reset_config() -> None:
    """Forget the active configuration so the environment is read again."""
    global _config
    with _config_lock:
        _config = None


def default_log_dir(config: LoggingConfig | None = None) -> Path:
    """Get the folder that named destinations write to.

    Platform conventions (via platformdirs):
        - macOS: ~/Library/Logs/<identity>
        - Linux: ~/.local/state/<identity>/log
        - Windows: %LOCALAPPDATA%\\<identity>\\Logs

    When log_dir is configured, the result is <log_dir>/<identity>.

    Args:
        config: Configuration to resolve. Defaults to the active one.

    Returns:
        Path: The default log folder (not created).

    Raises:
        ConfigurationError: If neither a display name nor a bundle identifier
            is available.
    """
    config = config or get_config()
    identity = config.identity
    if identity is None:
        raise ConfigurationError(
            "No valid bundle identifier or display name is available to use as a "
            f"log folder. Set {APP_NAME_ENV}, call sequoia.configure(app_name=...), "
            "or choose a destination file manually instead."
        )
    if config.log_dir:
        return Path(config.log_dir).expanduser() / identity
    return Path(user_log_dir(identity, appauthor=False))
