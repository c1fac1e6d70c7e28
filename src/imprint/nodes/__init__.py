"""Source node tree consumed by the imprint walker.

The engine never mutates these nodes. A template is an ``Element`` with
``tag == "template"`` whose body lives in ``content``.
"""

from imprint.nodes.base import Node
from imprint.nodes.markup import (
    TEMPLATE_TAG,
    Attribute,
    Comment,
    Element,
    Fragment,
    Text,
    iter_elements,
)

__all__ = [
    "TEMPLATE_TAG",
    "Attribute",
    "Comment",
    "Element",
    "Fragment",
    "Node",
    "Text",
    "iter_elements",
]
