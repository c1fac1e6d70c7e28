"""Tree walker: interprets a source node tree into builder calls.

Dispatch by node type:

    Fragment            walk children in order
    Element (template)  type=...  → directive handler
                        name=...  → block renderer, else default content
                        neither   → inert, renders nothing
    Element (other)     evaluate default attributes → open → assign →
                        claimed attributes → children → close
    Text                evaluate, emit text (skipped only for None)
    Comment             nothing
    anything else       non-fatal diagnostic

Evaluation order:
    Default attribute expressions are evaluated in source order *before*
    ``builder.open`` is called. Claimed attributes are handed to the
    attribute handler after open, after every default attribute has been
    assigned. Expressions may have side effects, so this order is part of
    the contract.

Complexity: O(n) in the number of nodes reached; each node is visited once
per render (a ``repeat`` body once per item).

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from imprint.diagnostics import DiagnosticCode, Severity
from imprint.nodes import Attribute, Comment, Element, Fragment, Text

if TYPE_CHECKING:
    from imprint.nodes import Node
    from imprint.render_context import RenderContext


def render_node(node: Node, context: RenderContext) -> None:
    """Render ``node`` and everything below it into ``context.builder``."""
    renderer = _NODE_RENDERERS.get(type(node))
    if renderer is None:
        context.report(
            DiagnosticCode.UNHANDLED_NODE,
            f"Unhandled node type {type(node).__name__}",
            node,
        )
        return
    renderer(node, context)


def _render_fragment(node: Fragment, context: RenderContext) -> None:
    for child in node.children:
        render_node(child, context)


def _render_element(node: Element, context: RenderContext) -> None:
    if node.is_template:
        _render_template_element(node, context)
        return

    attribute_handler = context.attribute_handler
    assignments: list[tuple[str, Any]] = []
    claimed: list[Attribute] = []
    for attr in node.attributes:
        if attribute_handler is not None and attribute_handler.matches(attr.name):
            claimed.append(attr)
        else:
            assignments.append((attr.name, context.get_value(attr)))

    builder = context.builder
    element = builder.open(node.tag)
    assign = context.attribute_policy
    for name, value in assignments:
        assign(element, name, value)

    if attribute_handler is not None:
        for attr in claimed:
            attribute_handler.handle(element, attr.name, attr.value, context.model)

    for child in node.children:
        render_node(child, context)
    builder.close(node.tag)


def _render_template_element(node: Element, context: RenderContext) -> None:
    directive = node.get_attribute("type")
    if directive:
        handler = context.handlers.get(directive)
        if handler is None:
            context.report(
                DiagnosticCode.UNKNOWN_DIRECTIVE,
                f"No handler for template type '{directive}'",
                node,
            )
            return
        handler(node, context)
        return

    name = node.get_attribute("name")
    if name:
        block_renderer = context.renderers.get(name)
        if block_renderer is not None:
            block_renderer(context)
            return
        context.report(
            DiagnosticCode.UNRESOLVED_BLOCK,
            f"No renderer for block '{name}', rendering default content",
            node,
            Severity.DEBUG,
        )
        render_content(node, context)

    # Templates with neither type nor name are inert


def render_content(template: Element, context: RenderContext) -> None:
    """Walk a template element's ``content`` fragment, if it has one."""
    if template.content is not None:
        _render_fragment(template.content, context)


def _render_text(node: Text, context: RenderContext) -> None:
    value = context.get_value(node)
    if value is not None:
        context.builder.text(value)


def _render_comment(node: Comment, context: RenderContext) -> None:
    pass


_NODE_RENDERERS: dict[type, Callable[[Any, RenderContext], None]] = {
    Fragment: _render_fragment,
    Element: _render_element,
    Text: _render_text,
    Comment: _render_comment,
}
