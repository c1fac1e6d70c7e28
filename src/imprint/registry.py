"""Persistent name → callback registries for imprint.

Block renderers and directive handlers travel through the render context as
``Registry`` values. A registry is never mutated: ``layer()`` and
``without()`` return new registries that share their parent.

Merge rule:
    registry.layer(overrides)[name]
        → overrides[name] if present
        → otherwise registry[name]

Example:
    >>> base = Registry({"header": render_header, "footer": render_footer})
    >>> page = base.layer({"header": render_page_header})
    >>> page["header"] is render_page_header, page["footer"] is render_footer
    (True, True)
    >>> "header" in base.without("header")
    False

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Generic, TypeVar

V = TypeVar("V")

_EMPTY: Mapping = {}


class Registry(Mapping[str, V], Generic[V]):
    """Immutable layered mapping.

    Supports:
        - registry["name"] / registry.get("name")
        - "name" in registry
        - iteration over every visible name, nearest layer first
        - layer(overrides) / without(*names) for copy-on-write derivation

    Complexity: lookup is O(depth) in the number of layers, which stays
    proportional to the inheritance depth of a template chain.
    """

    __slots__ = ("_entries", "_hidden", "_parent")

    def __init__(
        self,
        entries: Mapping[str, V] | None = None,
        parent: Registry[V] | None = None,
        hidden: frozenset[str] = frozenset(),
    ):
        self._entries: Mapping[str, V] = dict(entries) if entries else _EMPTY
        self._parent = parent
        self._hidden = hidden

    def __getitem__(self, name: str) -> V:
        registry: Registry[V] | None = self
        while registry is not None:
            if name in registry._entries:
                return registry._entries[name]
            if name in registry._hidden:
                break
            registry = registry._parent
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        try:
            self[name]  # type: ignore[index]
        except KeyError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        hidden: set[str] = set()
        registry: Registry[V] | None = self
        while registry is not None:
            for name in registry._entries:
                if name not in seen and name not in hidden:
                    seen.add(name)
                    yield name
            hidden.update(registry._hidden)
            registry = registry._parent

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def layer(self, overrides: Mapping[str, V] | None) -> Registry[V]:
        """Return a registry where ``overrides`` win and everything else falls through."""
        if not overrides:
            return self
        return Registry(overrides, parent=self)

    def without(self, *names: str) -> Registry[V]:
        """Return a registry that hides ``names`` from this one."""
        if not any(name in self for name in names):
            return self
        return Registry(None, parent=self, hidden=frozenset(names))

    def copy(self) -> dict[str, V]:
        """Flatten into a plain dict (nearest layer wins)."""
        return {name: self[name] for name in self}

    def __repr__(self) -> str:
        return f"Registry({sorted(self)!r})"


def as_registry(value: Mapping[str, V] | None) -> Registry[V]:
    """Wrap a caller-supplied mapping, passing registries through unchanged."""
    if isinstance(value, Registry):
        return value
    return Registry(value)
