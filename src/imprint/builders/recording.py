"""Builder that records the exact call sequence it receives."""

from __future__ import annotations

from typing import Any

Call = tuple[Any, ...]


class RecordedElement:
    """Handle returned by ``RecordingBuilder.open``; logs assignments."""

    __slots__ = ("_calls", "tag")

    def __init__(self, tag: str, calls: list[Call]):
        self.tag = tag
        self._calls = calls

    def set_attribute(self, name: str, value: Any) -> None:
        self._calls.append(("attribute", self.tag, name, value))

    def set_property(self, name: str, value: Any) -> None:
        self._calls.append(("property", self.tag, name, value))


class RecordingBuilder:
    """Record builder calls as tuples.

    Example:
        >>> builder = RecordingBuilder()
        >>> render(parse_template("<div>{{ foo }}</div>"), builder, {"foo": "x"})
        >>> builder.calls
        [('open', 'div'), ('text', 'x'), ('close', 'div')]
    """

    __slots__ = ("calls",)

    def __init__(self) -> None:
        self.calls: list[Call] = []

    def open(self, tag: str) -> RecordedElement:
        self.calls.append(("open", tag))
        return RecordedElement(tag, self.calls)

    def close(self, tag: str) -> None:
        self.calls.append(("close", tag))

    def text(self, value: Any) -> None:
        self.calls.append(("text", value))

    def structure(self) -> list[Call]:
        """Calls without attribute/property assignments."""
        return [call for call in self.calls if call[0] in ("open", "text", "close")]
