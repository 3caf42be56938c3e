"""Shared utilities for sequoia."""

from sequoia.utils.file_helpers import (
    ensure_parent_directory,
    load_validated_json,
    set_secure_permissions,
    write_text_creating_parents,
)

__all__ = [
    "ensure_parent_directory",
    "load_validated_json",
    "set_secure_permissions",
    "write_text_creating_parents",
]
