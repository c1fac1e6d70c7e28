"""Markup source → imprint node tree.

Parsing is delegated to BeautifulSoup with the ``html.parser`` backend; the
resulting soup is walked once and mapped onto imprint nodes. The backend is
forgiving in the way HTML is: stray end tags are ignored and unclosed
elements are closed at the end of input or when an enclosing element closes.

Shape of the result:
    - ``<template>`` children are collected into ``Element.content``
    - void elements (``<br>``, ``<input>``, ...) have no children
    - comments become ``Comment`` nodes
    - doctype, declarations and processing instructions are dropped
    - boolean attributes get the value ``""``
    - character references are decoded; adjacent text is merged
    - whitespace-only text is collapsed to a single newline or space

Elements record the (1-based) line and the column where they started. Text
and comments take the position of the closest preceding element.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from bs4 import BeautifulSoup
from bs4.element import (
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)
from bs4.element import Comment as SoupComment

from imprint.nodes import TEMPLATE_TAG, Attribute, Comment, Element, Fragment, Text
from imprint.nodes.base import Node

_DROPPED = (Doctype, Declaration, ProcessingInstruction)


def _position(tag: Tag) -> tuple[int, int]:
    return tag.sourceline or 1, tag.sourcepos or 0


def _convert_children(
    soup_children: Sequence[object], position: tuple[int, int]
) -> tuple[Node, ...]:
    nodes: list[Node] = []
    lineno, col_offset = position
    for child in soup_children:
        if isinstance(child, Tag):
            element = _convert_tag(child)
            lineno, col_offset = element.lineno, element.col_offset
            nodes.append(element)
        elif isinstance(child, SoupComment):
            nodes.append(Comment(str(child), lineno=lineno, col_offset=col_offset))
        elif isinstance(child, _DROPPED):
            continue
        elif isinstance(child, NavigableString):
            previous = nodes[-1] if nodes else None
            if isinstance(previous, Text):
                # The backend splits text around ignored end tags
                nodes[-1] = Text(
                    (previous.text or "") + str(child),
                    lineno=previous.lineno,
                    col_offset=previous.col_offset,
                )
            else:
                nodes.append(Text(str(child), lineno=lineno, col_offset=col_offset))
    return tuple(nodes)


def _convert_tag(tag: Tag) -> Element:
    lineno, col_offset = _position(tag)
    attributes = tuple(
        Attribute(name, "" if value is None else str(value), lineno=lineno, col_offset=col_offset)
        for name, value in tag.attrs.items()
    )
    children = _convert_children(tag.contents, (lineno, col_offset))
    if tag.name == TEMPLATE_TAG:
        content = Fragment(children, lineno=lineno, col_offset=col_offset)
        return Element(
            tag.name,
            attributes,
            content=content,
            lineno=lineno,
            col_offset=col_offset,
        )
    return Element(tag.name, attributes, children, lineno=lineno, col_offset=col_offset)


def parse_markup(source: str) -> Fragment:
    """Parse ``source`` into a ``Fragment``.

    Example:
        >>> fragment = parse_markup("<div>{{ foo }}</div>")
        >>> fragment.children[0].tag
        'div'
        >>> [type(n).__name__ for n in parse_markup("<p>a<br>b</p>").children[0].children]
        ['Text', 'Element', 'Text']
    """
    # multi_valued_attributes=None keeps ``class`` and friends as plain strings
    soup = BeautifulSoup(source, "html.parser", multi_valued_attributes=None)
    return Fragment(_convert_children(soup.contents, (1, 0)), lineno=1)


def _is_insignificant(node: Node) -> bool:
    if isinstance(node, Comment):
        return True
    return isinstance(node, Text) and not (node.text or "").strip()


def parse_template(source: str) -> Element:
    """Parse ``source`` into a template element.

    A source whose only significant top-level node is a plain ``<template>``
    (no ``name`` or ``type``) yields that element. Anything else, including a
    lone named block or directive, is wrapped in a synthetic template whose
    content is the whole parsed fragment.

    Example:
        >>> parse_template('<template id="card"><b>hi</b></template>').get_attribute("id")
        'card'
        >>> parse_template('<template name="body">x</template>').get_attribute("name") is None
        True
    """
    return as_template(parse_markup(source))


def as_template(fragment: Fragment) -> Element:
    """Template for a parsed document; see ``parse_template``."""
    significant = [node for node in fragment.children if not _is_insignificant(node)]
    if len(significant) == 1:
        only = significant[0]
        if isinstance(only, Element) and _is_plain_template(only):
            return only
    return Element(TEMPLATE_TAG, content=fragment, lineno=1)


def _is_plain_template(element: Element) -> bool:
    return (
        element.is_template
        and element.get_attribute("name") is None
        and element.get_attribute("type") is None
    )


def _iter_all_templates(nodes: Sequence[Node]) -> Iterator[Element]:
    for node in nodes:
        if isinstance(node, Element):
            if node.is_template:
                yield node
                if node.content is not None:
                    yield from _iter_all_templates(node.content.children)
            else:
                yield from _iter_all_templates(node.children)
        elif isinstance(node, Fragment):
            yield from _iter_all_templates(node.children)


def find_template(root: Fragment | Element, key: str) -> Element | None:
    """Find a template element by ``id``, falling back to ``name``.

    Unlike block collection, this search also descends into template content.
    """
    nodes = root.content.children if isinstance(root, Element) and root.content else root.children
    templates = list(_iter_all_templates(nodes))
    for attribute in ("id", "name"):
        for template in templates:
            if template.get_attribute(attribute) == key:
                return template
    return None
