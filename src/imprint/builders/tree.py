"""In-memory output tree builder.

``TreeBuilder`` turns the walker's call sequence into a small output tree
that can be inspected or serialized to HTML. Properties are kept on the
element but, like DOM properties, never appear in serialized markup.

Example:
    >>> builder = TreeBuilder()
    >>> div = builder.open("div")
    >>> div.set_attribute("class", "card")
    >>> builder.text("hi")
    >>> builder.close("div")
    >>> builder.to_html()
    '<div class="card">hi</div>'

"""

from __future__ import annotations

from html import escape
from typing import Any

from imprint.environment.exceptions import BuilderError

# Elements serialized without an end tag
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


class OutputText:
    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def to_html(self) -> str:
        return escape(self.value, quote=False)

    def __repr__(self) -> str:
        return f"OutputText({self.value!r})"


class OutputFragment:
    """Root container; also the base for elements."""

    __slots__ = ("children",)

    def __init__(self) -> None:
        self.children: list[OutputElement | OutputText] = []

    @property
    def text_content(self) -> str:
        parts: list[str] = []
        for child in self.children:
            parts.append(child.value if isinstance(child, OutputText) else child.text_content)
        return "".join(parts)

    def inner_html(self) -> str:
        return "".join(child.to_html() for child in self.children)

    def to_html(self) -> str:
        return self.inner_html()

    def find_all(self, tag: str) -> list[OutputElement]:
        """Return every descendant element with ``tag`` in document order."""
        found: list[OutputElement] = []
        for child in self.children:
            if isinstance(child, OutputElement):
                if child.tag == tag:
                    found.append(child)
                found.extend(child.find_all(tag))
        return found

    def find(self, tag: str) -> OutputElement | None:
        matches = self.find_all(tag)
        return matches[0] if matches else None


class OutputElement(OutputFragment):
    """Element produced by ``TreeBuilder.open``."""

    __slots__ = ("attributes", "properties", "tag")

    def __init__(self, tag: str):
        super().__init__()
        self.tag = tag
        self.attributes: dict[str, Any] = {}
        self.properties: dict[str, Any] = {}

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def to_html(self) -> str:
        attrs = "".join(
            f' {name}="{escape(_attribute_text(value), quote=True)}"'
            for name, value in self.attributes.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"

    def __repr__(self) -> str:
        return f"<OutputElement {self.tag} children={len(self.children)}>"


def _attribute_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class TreeBuilder:
    """Builder that assembles an ``OutputFragment`` tree.

    Raises:
        BuilderError: If ``close(tag)`` does not match the innermost open element
    """

    __slots__ = ("_stack", "root")

    def __init__(self) -> None:
        self.root = OutputFragment()
        self._stack: list[OutputFragment] = [self.root]

    def open(self, tag: str) -> OutputElement:
        element = OutputElement(tag)
        self._stack[-1].children.append(element)
        self._stack.append(element)
        return element

    def close(self, tag: str) -> None:
        current = self._stack[-1]
        if not isinstance(current, OutputElement) or current.tag != tag:
            open_tag = current.tag if isinstance(current, OutputElement) else None
            raise BuilderError(
                f"close('{tag}') does not match the open element '{open_tag}'",
                suggestion="Builder calls must be strictly nested",
            )
        self._stack.pop()

    def text(self, value: Any) -> None:
        self._stack[-1].children.append(OutputText(str(value)))

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack) - 1

    def to_html(self) -> str:
        return self.root.inner_html()
