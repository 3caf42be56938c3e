"""Library-wide constants for sequoia.

Constants that define logging behavior.
For user-configurable settings per process, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME_ENV",
    "BUNDLE_ID_ENV",
    "LOG_DIR_ENV",
    # Log files
    "LOG_FILE_EXTENSION",
    "LOG_FILE_ENCODING",
    "TIMESTAMP_FORMAT",
    # Built-in levels
    "BUILTIN_LEVELS",
    "FILE_LOGGING_LEVELS",
    "CUSTOM_LEVEL_NAME_PREFIX",
    "CUSTOM_LEVEL_DESCRIPTION_PREFIX",
    # Serial queue
    "QUEUE_THREAD_NAME",
    # Process termination
    "FATAL_EXIT_CODE",
    # Diagnostics
    "DIAGNOSTIC_LOGGER_NAME",
    "DIAGNOSTIC_PREFIX",
]

# ============================================================================
# Application Identity
# ============================================================================

# Environment variables read when no explicit configuration is given.
# A display name wins over a bundle identifier when both are present.
APP_NAME_ENV: str = "SEQUOIA_APP_NAME"
BUNDLE_ID_ENV: str = "SEQUOIA_BUNDLE_ID"

# Overrides the platform log directory entirely (identity is still required).
LOG_DIR_ENV: str = "SEQUOIA_LOG_DIR"

# ============================================================================
# Log Files
# ============================================================================

LOG_FILE_EXTENSION: str = ".log"
LOG_FILE_ENCODING: str = "utf-8"

# Rendered as [yyyy-MM-dd HH:mm:ss:mmm]; milliseconds are appended separately
# because strftime only knows microseconds.
TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

# ============================================================================
# Built-in Levels
# ============================================================================

# Name -> priority, in increasing severity
BUILTIN_LEVELS: dict[str, int] = {
    "console": 0,
    "debug": 1,
    "info": 2,
    "notice": 3,
    "warning": 4,
    "error": 5,
    "critical": 6,
    "fatal": 7,
}

# Built-in destinations that persist messages to disk.
# console and debug only ever print.
FILE_LOGGING_LEVELS: frozenset[str] = frozenset(
    {"info", "notice", "warning", "error", "critical", "fatal"}
)

CUSTOM_LEVEL_NAME_PREFIX: str = "custom-level-"
CUSTOM_LEVEL_DESCRIPTION_PREFIX: str = "CUSTOM LEVEL: "

# ============================================================================
# Serial Queue
# ============================================================================

QUEUE_THREAD_NAME: str = "sequoia-log"

# ============================================================================
# Process Termination
# ============================================================================

# Exit code used when a fatal-level message halts the process
FATAL_EXIT_CODE: int = 70

# ============================================================================
# Diagnostics
# ============================================================================

DIAGNOSTIC_LOGGER_NAME: str = "sequoia.diagnostics"
DIAGNOSTIC_PREFIX: str = "[Log]"
