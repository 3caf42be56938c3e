"""sequoia: leveled logging to the console and per-level log files.

Usage:
    import sequoia

    sequoia.configure(app_name="My App")
    sequoia.info("Something happened.")
    sequoia.warning(["retrying", 3])

    logger = sequoia.Log(sequoia.builtin_level("notice"), prints=False)
    logger.log_sync("Written before this line returns.")
"""

from sequoia.config import LoggingConfig, configure, default_log_dir, get_config
from sequoia.console_tag import ConsoleTag, format_tag
from sequoia.destination import LogDestination
from sequoia.exceptions import ConfigurationError, LogDeletionError, SequoiaError
from sequoia.level import LogLevel
from sequoia.log import (
    Log,
    console,
    critical,
    debug,
    error,
    fatal,
    flush,
    info,
    notice,
    silent,
    warning,
)
from sequoia.message import (
    BooleanMessage,
    FloatMessage,
    IntegerMessage,
    ListMessage,
    LogMessage,
    MapMessage,
    TextMessage,
    render_message,
    to_message,
)
from sequoia.registry import LevelRegistry, builtin_level, get_registry

__version__ = "0.3.0"

__all__ = [
    "__version__",
    # Configuration
    "LoggingConfig",
    "configure",
    "default_log_dir",
    "get_config",
    # Routing
    "ConsoleTag",
    "format_tag",
    "LogDestination",
    "LogLevel",
    "LevelRegistry",
    "builtin_level",
    "get_registry",
    # Logging
    "Log",
    "console",
    "debug",
    "info",
    "notice",
    "warning",
    "error",
    "critical",
    "fatal",
    "silent",
    "flush",
    # Messages
    "LogMessage",
    "TextMessage",
    "IntegerMessage",
    "FloatMessage",
    "BooleanMessage",
    "ListMessage",
    "MapMessage",
    "render_message",
    "to_message",
    # Errors
    "SequoiaError",
    "ConfigurationError",
    "LogDeletionError",
]
