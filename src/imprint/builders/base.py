"""Builder sink protocols.

The walker never touches an output document directly. It issues a strictly
nested, balanced sequence of calls against a ``Builder``:

    open("div") → attribute/property assignment on the handle → children → close("div")

Any object with these methods can receive a render: a tree builder, a call
recorder, or an adapter onto a live document.
"""

from __future__ import annotations

from typing import Any, Protocol


class ElementHandle(Protocol):
    """The element returned by ``Builder.open``."""

    def set_attribute(self, name: str, value: Any) -> None:
        """Set a literal markup attribute (visible when serialized)."""
        ...

    def set_property(self, name: str, value: Any) -> None:
        """Assign a property, keeping ``value`` as its native type."""
        ...


class Builder(Protocol):
    def open(self, tag: str) -> ElementHandle: ...

    def close(self, tag: str) -> None: ...

    def text(self, value: Any) -> None: ...
