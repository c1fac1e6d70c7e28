"""Markup source parsing for imprint.

Turns HTML text into the node tree the walker consumes::

    >>> template = parse_template("<ul><template type='repeat' repeat='{{ xs }}'><li>{{ item }}</li></template></ul>")
    >>> template.content.children[0].tag
    'ul'

"""

from imprint.parser.markup import (
    as_template,
    find_template,
    parse_markup,
    parse_template,
)

__all__ = [
    "as_template",
    "find_template",
    "parse_markup",
    "parse_template",
]
