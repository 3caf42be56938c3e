"""Console tags shown before log messages.

Whatever label is provided is converted into the bracketed, uppercase tag
format. For example, a tag with the raw value "warning" is displayed in the
console as "[WARNING]".
"""

from __future__ import annotations

__all__ = [
    "ConsoleTag",
    "format_tag",
]

from pydantic import BaseModel, ConfigDict, computed_field


def format_tag(raw: str) -> str:
    """Convert a free-form label into a console prefix.

    Brackets are only added where missing, so formatting an already
    formatted tag returns it unchanged.

    Args:
        raw: The label, e.g. "warning" or "[custom]".

    Returns:
        str: The uppercased, bracketed tag, e.g. "[WARNING]".
    """
    tag = raw.upper()
    if not tag.startswith("["):
        tag = "[" + tag
    if not tag.endswith("]"):
        tag += "]"
    return tag


class ConsoleTag(BaseModel):
    """A tag displayed before a log message in the console.

    Attributes:
        raw_value: The label as provided.
        tag_value: The formatted tag that is printed.
    """

    raw_value: str

    model_config = ConfigDict(frozen=True)

    def __init__(self, raw_value: str | None = None, /, **data: str) -> None:
        if raw_value is not None:
            data["raw_value"] = raw_value
        super().__init__(**data)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tag_value(self) -> str:
        return format_tag(self.raw_value)

    def __str__(self) -> str:
        return self.tag_value
