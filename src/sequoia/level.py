"""Log levels.

A level binds a priority and a description to a destination. Besides the
eight built-in levels (see registry.py), custom levels can be derived from an
existing level's priority:

    critical = builtin_level("critical")
    super_critical = LogLevel.custom_higher_than(critical, "SUPER CRITICAL")

Custom levels write to "custom-level-<priority>.log" in the default log
folder. Two custom levels with the same priority share that file.
"""

from __future__ import annotations

__all__ = ["LogLevel"]

from dataclasses import dataclass

from sequoia.constants import CUSTOM_LEVEL_DESCRIPTION_PREFIX, CUSTOM_LEVEL_NAME_PREFIX
from sequoia.destination import LogDestination


@dataclass(frozen=True)
class LogLevel:
    """A named severity that routes messages to a destination.

    Levels are ordered by priority only.

    Attributes:
        destination: Where messages of this level are sent. Shared, not owned.
        priority: Ordering key; higher is more severe.
        description: Human-readable name of the level.
    """

    destination: LogDestination
    priority: int
    description: str

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.priority < other.priority

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.priority <= other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.priority > other.priority

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.priority >= other.priority

    def __hash__(self) -> int:
        # destination.file moves on recovery; its name does not
        return hash((self.priority, self.description, self.destination.name))

    def __str__(self) -> str:
        return self.description

    @classmethod
    def _custom(cls, priority: int, description: str, logs_to_file: bool) -> LogLevel:
        description = description or f"{CUSTOM_LEVEL_DESCRIPTION_PREFIX}{priority}"
        destination = LogDestination.from_name(
            f"{CUSTOM_LEVEL_NAME_PREFIX}{priority}",
            logs_to_file=logs_to_file,
        )
        return cls(destination, priority, description)

    @classmethod
    def custom_higher_than(
        cls,
        level: LogLevel,
        description: str = "",
        logs_to_file: bool = True,
    ) -> LogLevel:
        """A custom level with a priority one higher than the given level.

        Args:
            level: The level this level's priority is higher than.
            description: Description of the level. Defaults to
                "CUSTOM LEVEL: <priority>".
            logs_to_file: Whether the level writes its messages to a file.

        Returns:
            LogLevel: The new level.

        Raises:
            ConfigurationError: If logs_to_file is set and no application
                identity is available.
        """
        return cls._custom(level.priority + 1, description, logs_to_file)

    @classmethod
    def custom_lower_than(
        cls,
        level: LogLevel,
        description: str = "",
        logs_to_file: bool = True,
    ) -> LogLevel:
        """A custom level with a priority one lower than the given level.

        See custom_higher_than() for the arguments.
        """
        return cls._custom(level.priority - 1, description, logs_to_file)

    @classmethod
    def custom_equal_to(
        cls,
        level: LogLevel,
        description: str = "",
        logs_to_file: bool = True,
    ) -> LogLevel:
        """A custom level with the same priority as the given level.

        See custom_higher_than() for the arguments.
        """
        return cls._custom(level.priority, description, logs_to_file)
