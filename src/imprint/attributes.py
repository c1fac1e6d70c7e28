"""Attribute assignment policy.

Default policy for an attribute ``name`` with evaluated ``value``:

    name ends with "$"  → literal attribute: set_attribute("name", value)
    otherwise           → property: set_property(camel_case(name), value)

Only the first hyphen is normalized (``data-user-id`` → ``dataUser-id``);
markup parsers lowercase attribute names, so a single hyphen is how an
author spells a camel-cased property (``text-content`` → ``textContent``).

An ``AttributeHandler`` can claim attribute names. Claimed attributes skip
the policy and are handed to the handler with their raw, unevaluated value
right after the element opens, once every default attribute is assigned.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from imprint.builders.base import ElementHandle

LITERAL_SUFFIX = "$"

_HYPHEN_RE = re.compile(r"-(\w)")

AttributePolicy = Callable[["ElementHandle", str, Any], None]


class AttributeHandler(Protocol):
    """Caller-supplied interceptor for selected attribute names."""

    def matches(self, name: str) -> bool: ...

    def handle(self, element: ElementHandle, name: str, value: str | None, model: Any) -> None: ...


def to_camel_case(name: str) -> str:
    """Convert the first ``-x`` in ``name`` to ``X``.

    Example:
        >>> to_camel_case("inner-html")
        'innerHtml'
        >>> to_camel_case("aria-label-text")
        'ariaLabel-text'
    """
    return _HYPHEN_RE.sub(lambda m: m.group(1).upper(), name, count=1)


def assign_attribute(element: ElementHandle, name: str, value: Any) -> None:
    """Default ``AttributePolicy``."""
    if name.endswith(LITERAL_SUFFIX):
        element.set_attribute(name[: -len(LITERAL_SUFFIX)], value)
    else:
        element.set_property(to_camel_case(name), value)


class PrefixAttributeHandler:
    """Claim attributes whose name starts with ``prefix`` and forward them.

    Example:
        >>> events = PrefixAttributeHandler("on-", lambda el, n, v, m: ...)
        >>> events.matches("on-click"), events.matches("class")
        (True, False)
    """

    __slots__ = ("_callback", "prefix")

    def __init__(
        self,
        prefix: str,
        callback: Callable[[ElementHandle, str, str | None, Any], None],
    ):
        self.prefix = prefix
        self._callback = callback

    def matches(self, name: str) -> bool:
        return name.startswith(self.prefix)

    def handle(self, element: ElementHandle, name: str, value: str | None, model: Any) -> None:
        self._callback(element, name, value, model)
