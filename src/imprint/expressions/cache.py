"""Per-node expression cache.

Text and attribute nodes whose content is wrapped in ``{{ }}`` are parsed
on first sight and the parsed form is stored in a side table keyed by node
identity. Later renders with a different model reuse the parse; only the
evaluation runs again.

Recognition rules for a node's text content:
- ``None`` → ``None``
- starts with ``{{`` and ends with ``}}`` → expression (inner text stripped)
- starts with ``\\{{`` → literal, leading backslash removed
- anything else → returned verbatim

The table belongs to one prepared template, so entries live exactly as long
as the template (and the nodes it holds) do. Entries are only ever added.
A lock guards insertion and the counters, so concurrent first renders still
parse each node once and ``stats()`` stays exact.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from imprint.expressions.evaluator import PythonExpressionParser

if TYPE_CHECKING:
    from imprint.expressions.protocol import Expression, ExpressionParser
    from imprint.nodes import Attribute, Text

EXPRESSION_START = "{{"
EXPRESSION_END = "}}"
ESCAPED_START = "\\{{"


def extract_expression(text: str) -> str | None:
    """Return the inner expression text, or None if ``text`` is not a placeholder.

    Example:
        >>> extract_expression("{{  user.name }}")
        'user.name'
        >>> extract_expression("Hello {{ name }}") is None
        True
    """
    if (
        len(text) >= len(EXPRESSION_START) + len(EXPRESSION_END)
        and text.startswith(EXPRESSION_START)
        and text.endswith(EXPRESSION_END)
    ):
        return text[len(EXPRESSION_START) : -len(EXPRESSION_END)].strip()
    return None


class ExpressionCache:
    """Identity-keyed side table of parsed expressions.

    Attributes:
        parses: Number of times the parser was invoked
        hits: Number of lookups served from the table

    Example:
        >>> cache = ExpressionCache()
        >>> node = Text("{{ n + 1 }}")
        >>> [cache.get_value(node, {"n": n}) for n in range(3)]
        [1, 2, 3]
        >>> cache.parses, cache.hits
        (1, 2)
    """

    __slots__ = ("_entries", "_lock", "_parser", "hits", "parses")

    def __init__(self, parser: ExpressionParser | None = None):
        self._parser: ExpressionParser = PythonExpressionParser() if parser is None else parser
        self._entries: dict[Text | Attribute, Expression] = {}
        self._lock = threading.Lock()
        self.parses = 0
        self.hits = 0

    @property
    def parser(self) -> ExpressionParser:
        return self._parser

    def get_value(self, node: Text | Attribute, model: Any) -> Any:
        """Evaluate ``node`` against ``model``, parsing it at most once."""
        expression = self._entries.get(node)
        if expression is not None:
            with self._lock:
                self.hits += 1
            return expression.evaluate(model)

        value = node.text_content
        if value is None:
            return None

        source = extract_expression(value)
        if source is not None:
            with self._lock:
                expression = self._entries.get(node)
                if expression is None:
                    expression = self._parser.parse(source)
                    self.parses += 1
                    self._entries[node] = expression
                else:
                    self.hits += 1
            return expression.evaluate(model)

        if value.startswith(ESCAPED_START):
            return value[1:]
        return value

    def __contains__(self, node: object) -> bool:
        return node in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"entries": len(self._entries), "parses": self.parses, "hits": self.hits}
