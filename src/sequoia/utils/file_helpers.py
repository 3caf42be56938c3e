"""Shared file utilities for sequoia.

Provides the filesystem primitives used by log destinations:
- ensure_parent_directory: Create a file's missing parent folders
- write_text_creating_parents: Whole-file write that creates folders first
- set_secure_permissions: Owner-only permissions for log folders
- load_validated_json: JSON file + Pydantic validation for config files
"""

from __future__ import annotations

__all__ = [
    "ensure_parent_directory",
    "load_validated_json",
    "set_secure_permissions",
    "write_text_creating_parents",
]

import json
import sys
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from sequoia.constants import LOG_FILE_ENCODING

# Type variable for Pydantic models
T = TypeVar("T", bound=BaseModel)


def set_secure_permissions(path: Path, *, is_directory: bool = False) -> None:
    """Set secure permissions on file or directory.

    Sets permissions to restrict access to owner only:
    - Directory: 0o700 (rwx------)
    - File: 0o600 (rw-------)

    Does nothing on Windows. Silently ignores permission errors
    (some systems don't allow permission changes).

    Args:
        path: Path to file or directory.
        is_directory: If True, use directory permissions (0o700).
    """
    if sys.platform == "win32":
        return

    try:
        mode = 0o700 if is_directory else 0o600
        path.chmod(mode)
    except OSError:
        pass  # Permission changes might fail on some systems


def ensure_parent_directory(file_path: Path) -> None:
    """Create the parent folder of a log file if it doesn't exist.

    Newly created folders get owner-only permissions. Existing folders are
    left untouched, so a shared log directory chosen by the user keeps its
    own permissions.

    Args:
        file_path: Path to the log file (parent directory will be created).

    Raises:
        OSError: If directory creation fails.
    """
    parent = file_path.parent
    if parent.exists():
        return
    parent.mkdir(parents=True, exist_ok=True)
    set_secure_permissions(parent, is_directory=True)


def write_text_creating_parents(file_path: Path, text: str) -> None:
    """Replace a file's contents, creating the file and its folders as needed.

    Args:
        file_path: Path to the file to write.
        text: The complete new contents.

    Raises:
        OSError: If the folder or file cannot be created or written.
    """
    if not file_path.exists():
        ensure_parent_directory(file_path)
    with file_path.open("w", encoding=LOG_FILE_ENCODING, newline="") as f:
        f.write(text)


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
) -> T:
    """Load JSON file and validate against Pydantic model.

    Combines file reading, JSON parsing, and Pydantic validation with
    consistent error messages.

    Args:
        file_path: Path to JSON file.
        model_class: Pydantic model class to validate against.
        file_type: Description for error messages (e.g., "config").

    Returns:
        Validated Pydantic model instance.

    Raises:
        ValueError: If the file is unreadable, JSON is invalid or validation fails.
    """
    try:
        with open(file_path, "r", encoding=LOG_FILE_ENCODING) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise ValueError(
            f"Invalid {file_type} configuration in {file_path}:\n" + "\n".join(errors)
        ) from e
