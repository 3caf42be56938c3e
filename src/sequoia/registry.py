"""Registry of the built-in destinations and levels.

The eight built-in levels are built once from the active configuration and
then shared by reference, so every lookup of "info" returns the same level
and the same destination object:

    >>> get_registry().info is builtin_level("info")
    True

If configure() installs a new configuration, the next lookup builds a fresh
registry for it.
"""

from __future__ import annotations

__all__ = [
    "LevelRegistry",
    "build_registry",
    "builtin_level",
    "get_registry",
    "reset_registry",
    "resolve_level",
]

import threading
from collections.abc import Iterator
from dataclasses import dataclass

from sequoia.config import LoggingConfig, default_log_dir, get_config
from sequoia.constants import BUILTIN_LEVELS, FILE_LOGGING_LEVELS
from sequoia.destination import LogDestination
from sequoia.level import LogLevel


@dataclass(frozen=True)
class LevelRegistry:
    """The built-in levels, in increasing severity."""

    config: LoggingConfig
    console: LogLevel
    debug: LogLevel
    info: LogLevel
    notice: LogLevel
    warning: LogLevel
    error: LogLevel
    critical: LogLevel
    fatal: LogLevel

    def get(self, name: str) -> LogLevel:
        """Look up a built-in level by name.

        Raises:
            KeyError: If name is not a built-in level.
        """
        if name not in BUILTIN_LEVELS:
            valid = ", ".join(BUILTIN_LEVELS)
            raise KeyError(f"Unknown level: '{name}'. Valid levels: {valid}")
        level: LogLevel = getattr(self, name)
        return level

    def __iter__(self) -> Iterator[LogLevel]:
        return (self.get(name) for name in BUILTIN_LEVELS)


def build_registry(config: LoggingConfig) -> LevelRegistry:
    """Create the built-in destinations and levels for a configuration.

    Raises:
        ConfigurationError: If the configuration has no application identity.
    """
    log_dir = default_log_dir(config)

    levels: dict[str, LogLevel] = {}
    for name, priority in BUILTIN_LEVELS.items():
        logs_to_file = name in FILE_LOGGING_LEVELS
        destination = LogDestination.from_name(name, logs_to_file, log_dir=log_dir)
        levels[name] = LogLevel(destination, priority, name)
    return LevelRegistry(config=config, **levels)


_registry: LevelRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> LevelRegistry:
    """Get the registry for the active configuration, building it if needed."""
    global _registry
    config = get_config()
    with _registry_lock:
        if _registry is None or _registry.config is not config:
            _registry = build_registry(config)
        return _registry


def reset_registry() -> None:
    """Drop the registry so the next lookup rebuilds it."""
    global _registry
    with _registry_lock:
        _registry = None


def builtin_level(name: str) -> LogLevel:
    """Get a built-in level by name ("console", "debug", ..., "fatal")."""
    return get_registry().get(name)


def resolve_level(level: LogLevel | str) -> LogLevel:
    """Accept either a level or the name of a built-in level."""
    if isinstance(level, LogLevel):
        return level
    return builtin_level(level)
