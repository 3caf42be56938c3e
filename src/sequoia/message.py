"""Log message values.

A message is one of six variants: text, integer, float, boolean, an ordered
list of messages, or a mapping of text keys to messages. Every variant has a
canonical text rendering that is used for both console and file output.

Plain Python values are accepted anywhere a message is expected and are
converted with to_message():

    >>> render_message(to_message(["a", 1, True]))
    '["a", 1, true]'
    >>> render_message(to_message({"retries": 3}))
    '["retries": 3]'
"""

from __future__ import annotations

__all__ = [
    "BooleanMessage",
    "FloatMessage",
    "IntegerMessage",
    "ListMessage",
    "LogMessage",
    "MapMessage",
    "TextMessage",
    "render_message",
    "to_message",
]

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TextMessage:
    """A plain text message."""

    value: str

    def __str__(self) -> str:
        return render_message(self)


@dataclass(frozen=True)
class IntegerMessage:
    """An integer message."""

    value: int

    def __str__(self) -> str:
        return render_message(self)


@dataclass(frozen=True)
class FloatMessage:
    """A floating-point message."""

    value: float

    def __str__(self) -> str:
        return render_message(self)


@dataclass(frozen=True)
class BooleanMessage:
    """A boolean message, rendered as "true" or "false"."""

    value: bool

    def __str__(self) -> str:
        return render_message(self)


@dataclass(frozen=True)
class ListMessage:
    """An ordered list of messages."""

    items: tuple[LogMessage, ...] = ()

    @classmethod
    def of(cls, values: Iterable[Any]) -> ListMessage:
        """Build a list message, converting each element with to_message()."""
        return cls(tuple(to_message(v) for v in values))

    def __str__(self) -> str:
        return render_message(self)


@dataclass(frozen=True)
class MapMessage:
    """A mapping of text keys to messages, in insertion order.

    Stored as key/value pairs so the message stays immutable and hashable.
    """

    entries: tuple[tuple[str, LogMessage], ...] = ()

    @classmethod
    def of(cls, values: Mapping[Any, Any]) -> MapMessage:
        """Build a map message. Keys are converted with str()."""
        return cls(tuple((str(k), to_message(v)) for k, v in values.items()))

    def __str__(self) -> str:
        return render_message(self)


LogMessage = Union[
    TextMessage,
    IntegerMessage,
    FloatMessage,
    BooleanMessage,
    ListMessage,
    MapMessage,
]

_MESSAGE_TYPES = (
    TextMessage,
    IntegerMessage,
    FloatMessage,
    BooleanMessage,
    ListMessage,
    MapMessage,
)


def to_message(value: Any) -> LogMessage:
    """Convert a Python value into a log message.

    Args:
        value: A message, str, int, float, bool, list/tuple, or mapping.
            Any other object becomes a text message holding its str().

    Returns:
        LogMessage: The matching variant.
    """
    if isinstance(value, _MESSAGE_TYPES):
        return value
    if isinstance(value, str):
        return TextMessage(value)
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return BooleanMessage(value)
    if isinstance(value, int):
        return IntegerMessage(value)
    if isinstance(value, float):
        return FloatMessage(value)
    if isinstance(value, Mapping):
        return MapMessage.of(value)
    if isinstance(value, (list, tuple)):
        return ListMessage.of(value)
    return TextMessage(str(value))


def render_message(message: LogMessage) -> str:
    """Render a message as the text written to the console and log files.

    Top-level text is written as-is. Text nested inside a list or map is
    quoted so element boundaries stay readable. Empty maps render as "[:]".

    Args:
        message: The message to render.

    Returns:
        str: The canonical text.

    Raises:
        TypeError: If message is not a LogMessage variant.
    """
    if isinstance(message, TextMessage):
        return message.value
    return _render(message)


def _render(message: LogMessage) -> str:
    if isinstance(message, TextMessage):
        return _quote(message.value)
    if isinstance(message, BooleanMessage):
        return "true" if message.value else "false"
    if isinstance(message, IntegerMessage):
        return str(message.value)
    if isinstance(message, FloatMessage):
        return repr(message.value)
    if isinstance(message, ListMessage):
        return "[" + ", ".join(_render(item) for item in message.items) + "]"
    if isinstance(message, MapMessage):
        if not message.entries:
            return "[:]"
        body = ", ".join(f"{_quote(key)}: {_render(value)}" for key, value in message.entries)
        return "[" + body + "]"
    raise TypeError(f"Not a log message: {type(message).__name__}")


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'
