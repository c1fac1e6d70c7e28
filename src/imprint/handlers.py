"""Built-in directive handlers.

A handler receives the ``<template type="...">`` element and the current
context, and decides whether and how often to walk the element's content.

    <template type="if" if="{{ user.admin }}">...</template>
    <template type="repeat" repeat="{{ items }}">{{ index }}: {{ item }}</template>

Custom handlers follow the same signature:

    def unless_handler(template: Element, context: RenderContext) -> None:
        attr = template.get_attribute_node("unless")
        if attr is not None and not context.get_value(attr):
            render_content(template, context)

    handlers = {**DEFAULT_HANDLERS, "unless": unless_handler}

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from imprint.registry import Registry
from imprint.scope import Scope
from imprint.walker import render_content

if TYPE_CHECKING:
    from imprint.nodes import Element
    from imprint.render_context import Handler, RenderContext

ITEM_NAME = "item"
INDEX_NAME = "index"


def if_handler(template: Element, context: RenderContext) -> None:
    """Render the content once when the ``if`` attribute is truthy."""
    condition = template.get_attribute_node("if")
    if condition is not None and context.get_value(condition):
        render_content(template, context)


def repeat_handler(template: Element, context: RenderContext) -> None:
    """Render the content once per item of the ``repeat`` attribute.

    Each iteration sees ``item`` and ``index`` (0-based) layered over the
    enclosing model. Only sequences repeat (strings iterate per character);
    ``None``, mappings, sets, generators and other values render nothing.
    Items are matched by position only.
    """
    source = template.get_attribute_node("repeat")
    if source is None:
        return
    items = context.get_value(source)
    if not isinstance(items, Sequence):
        return
    model = context.model
    for index, item in enumerate(items):
        scope = Scope({ITEM_NAME: item, INDEX_NAME: index}, parent=model)
        render_content(template, context.with_model(scope))


DEFAULT_HANDLERS: Registry[Handler] = Registry(
    {
        "if": if_handler,
        "repeat": repeat_handler,
    }
)
