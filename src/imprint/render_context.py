"""imprint RenderContext — the bundle passed down every walk.

A fresh context is created for each render call. Walking never mutates it:
entering a ``repeat`` iteration derives a copy with a new model layer, and
crossing a block or ``super`` boundary derives a copy with a new renderer
registry.

Fields:
    model             the current model (opaque, possibly a Scope chain)
    renderers         block name → Renderer
    handlers          directive type → Handler
    builder           output sink receiving open/text/close calls
    expressions       per-template expression cache
    attribute_handler optional interceptor for claimed attribute names
    attribute_policy  default attribute/property assignment
    diagnostics       sink for non-fatal diagnostics

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from imprint.attributes import assign_attribute
from imprint.diagnostics import Diagnostic, DiagnosticCode, LoggingDiagnostics, Severity

if TYPE_CHECKING:
    from imprint.attributes import AttributeHandler, AttributePolicy
    from imprint.builders.base import Builder
    from imprint.diagnostics import DiagnosticSink
    from imprint.expressions.cache import ExpressionCache
    from imprint.nodes import Attribute, Element, Node, Text
    from imprint.registry import Registry

Renderer = Callable[["RenderContext"], None]
Handler = Callable[["Element", "RenderContext"], None]


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-walk state. Immutable; derive instead of mutating."""

    model: Any
    renderers: Registry[Renderer]
    handlers: Registry[Handler]
    builder: Builder
    expressions: ExpressionCache
    attribute_handler: AttributeHandler | None = None
    attribute_policy: AttributePolicy = assign_attribute
    diagnostics: DiagnosticSink = LoggingDiagnostics()

    def get_value(self, node: Text | Attribute) -> Any:
        """Evaluate a text or attribute node against the current model."""
        return self.expressions.get_value(node, self.model)

    def with_model(self, model: Any) -> RenderContext:
        return replace(self, model=model)

    def with_renderers(self, renderers: Registry[Renderer]) -> RenderContext:
        if renderers is self.renderers:
            return self
        return replace(self, renderers=renderers)

    def report(
        self,
        code: DiagnosticCode,
        message: str,
        node: Node | None = None,
        severity: Severity = Severity.WARNING,
    ) -> None:
        self.diagnostics.report(Diagnostic(code, message, node, severity))
