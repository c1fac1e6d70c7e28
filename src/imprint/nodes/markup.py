"""Markup nodes for imprint source trees."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from imprint.nodes.base import Node

TEMPLATE_TAG = "template"


@dataclass(frozen=True, slots=True, eq=False)
class Fragment(Node):
    """Ordered children without a tag or attributes."""

    children: Sequence[Node] = ()


@dataclass(frozen=True, slots=True, eq=False)
class Attribute(Node):
    """A single ``name="value"`` pair on an element."""

    name: str
    value: str | None

    @property
    def text_content(self) -> str | None:
        return self.value


@dataclass(frozen=True, slots=True, eq=False)
class Element(Node):
    """Tagged element with ordered attributes and children.

    Template elements (``<template>``) keep their body in ``content``
    instead of ``children``, mirroring the inert-content model of HTML.
    """

    tag: str
    attributes: Sequence[Attribute] = ()
    children: Sequence[Node] = ()
    content: Fragment | None = None

    @property
    def is_template(self) -> bool:
        return self.tag == TEMPLATE_TAG

    def get_attribute_node(self, name: str) -> Attribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def get_attribute(self, name: str) -> str | None:
        attr = self.get_attribute_node(name)
        return attr.value if attr is not None else None


@dataclass(frozen=True, slots=True, eq=False)
class Text(Node):
    """Literal text, or an expression when wrapped in ``{{ }}``."""

    text: str | None

    @property
    def text_content(self) -> str | None:
        return self.text


@dataclass(frozen=True, slots=True, eq=False)
class Comment(Node):
    """Markup comment. Never rendered."""

    text: str


def _iter_elements(nodes: Sequence[Node]) -> Iterator[Element]:
    for node in nodes:
        if isinstance(node, Element):
            yield node
            yield from _iter_elements(node.children)
        elif isinstance(node, Fragment):
            yield from _iter_elements(node.children)


def iter_elements(node: Fragment | Element) -> Iterator[Element]:
    """Yield elements below ``node`` in document order.

    Like a DOM query, the scan descends through ordinary elements but never
    into a nested template's ``content``.
    """
    return _iter_elements(node.children)
