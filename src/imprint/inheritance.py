"""Named blocks and template inheritance.

A template that extends a parent either splices the parent in at an
explicit ``<template name="super">`` node, or, without one, *is* an
override set applied to the parent:

    parent:  <header>...</header><template name="body">default</template>
    child:   <template name="body">child body</template>
    result:  <header>...</header>child body

    child:   <nav/><template name="super"><template name="body">x</template></template>
    result:  <nav/><header>...</header>x

Resolution runs once per prepared template. ``compose`` reduces a chain of
any depth to repeated two-template composition and returns a single
``Renderer`` closure.

Precedence for a hole rendered inside an ancestor:
    nearer descendant override > farther descendant override
    > caller-supplied renderer > the hole's default content

The reserved ``super`` name is hidden from incoming registries at every
content boundary and bound only here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from imprint.nodes import Element, iter_elements
from imprint.registry import Registry
from imprint.walker import render_content

if TYPE_CHECKING:
    from imprint.render_context import Renderer, RenderContext

SUPER = "super"

_NO_OVERRIDES: Registry[Renderer] = Registry()


def _named_templates(template: Element) -> list[tuple[str, Element]]:
    if template.content is None:
        return []
    return [
        (name, element)
        for element in iter_elements(template.content)
        if element.is_template and (name := element.get_attribute("name"))
    ]


def block_renderer(block: Element) -> Renderer:
    """Renderer that walks ``block``'s content, whatever node invokes it."""

    def render_block(context: RenderContext) -> None:
        render_content(block, context)

    render_block.__name__ = f"render_block_{block.get_attribute('name')}"
    return render_block


def collect_blocks(template: Element) -> dict[str, Renderer]:
    """Export every named, non-``super`` block declared in ``template``.

    Blocks are found in document order, descending through ordinary
    elements but not into another template's content. A later block with
    the same name replaces an earlier one.
    """
    return {
        name: block_renderer(block)
        for name, block in _named_templates(template)
        if name != SUPER
    }


def find_super(template: Element) -> Element | None:
    """Return the first ``<template name="super">`` in ``template``, if any."""
    for name, block in _named_templates(template):
        if name == SUPER:
            return block
    return None


def content_renderer(
    template: Element,
    overrides: Registry[Renderer],
    super_renderer: Renderer | None = None,
) -> Renderer:
    """Renderer for ``template``'s content with ``overrides`` over the caller's registry."""

    def render_template(context: RenderContext) -> None:
        renderers = context.renderers.without(SUPER).layer(overrides)
        if super_renderer is not None:
            renderers = renderers.layer({SUPER: super_renderer})
        render_content(template, context.with_renderers(renderers))

    return render_template


def compose(
    template: Element,
    ancestors: Sequence[Element],
    overrides: Registry[Renderer] = _NO_OVERRIDES,
) -> Renderer:
    """Resolve ``template`` against its ``ancestors`` (nearest parent first).

    Args:
        template: The template being rendered
        ancestors: Parent, grandparent, ... in that order
        overrides: Block overrides accumulated from descendants of ``template``

    Returns:
        A Renderer that emits the fully resolved chain.
    """
    if not ancestors:
        return content_renderer(template, overrides)

    parent, rest = ancestors[0], ancestors[1:]
    own = Registry(collect_blocks(template))
    super_node = find_super(template)

    if super_node is None:
        # Implicit super: render the parent directly with our blocks,
        # keeping descendants' blocks on top.
        return compose(parent, rest, own.layer(overrides))

    own = own.layer(collect_blocks(super_node))
    super_renderer = compose(parent, rest, own.layer(overrides))
    return content_renderer(template, overrides, super_renderer)
