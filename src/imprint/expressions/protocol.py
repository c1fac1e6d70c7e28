"""The expression capability the walker depends on.

The engine does not define an expression language. It only needs a parser
that turns placeholder text into something evaluable against a model. Any
object satisfying these protocols can be plugged in through
``RenderOptions.expression_parser``.
"""

from __future__ import annotations

from typing import Any, Protocol


class Expression(Protocol):
    """A parsed placeholder, reusable across models."""

    def evaluate(self, model: Any) -> Any: ...


class ExpressionParser(Protocol):
    def parse(self, text: str) -> Expression: ...
