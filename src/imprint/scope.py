"""Layered model lookup for imprint expressions.

A model is opaque to the engine: a mapping, an object with attributes, or a
``Scope`` stacked on top of either. ``repeat`` pushes one ``Scope`` frame per
iteration so ``item`` and ``index`` shadow the outer model while every other
name falls through to it.

Lookup order:
    innermost Scope frame → ... → outermost Scope frame → root model
    (mapping key first, then attribute)

Thread-Safety:
Frames are never mutated after construction, so a scope chain can be shared
freely between nested renders.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class _Missing:
    """Sentinel for names no frame or root model binds."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class Scope:
    """One scope frame layered over a parent model.

    Example:
        >>> outer = {"title": "Fruit", "item": "shadowed"}
        >>> scope = Scope({"item": "apple", "index": 0}, parent=outer)
        >>> lookup_name(scope, "item"), lookup_name(scope, "title")
        ('apple', 'Fruit')
    """

    __slots__ = ("_frame", "_parent")

    def __init__(self, frame: Mapping[str, Any], parent: Any = None):
        self._frame = dict(frame)
        self._parent = parent

    @property
    def parent(self) -> Any:
        return self._parent

    def child(self, frame: Mapping[str, Any]) -> Scope:
        """Return a new frame layered over this one."""
        return Scope(frame, parent=self)

    def lookup(self, name: str) -> Any:
        """Resolve ``name`` innermost-first, returning MISSING when unbound."""
        scope: Any = self
        while isinstance(scope, Scope):
            if name in scope._frame:
                return scope._frame[name]
            scope = scope._parent
        return _lookup_root(scope, name)

    def names(self) -> frozenset[str]:
        """All names visible from this frame (used for "did you mean" hints)."""
        found: set[str] = set()
        scope: Any = self
        while isinstance(scope, Scope):
            found.update(scope._frame)
            scope = scope._parent
        found.update(_root_names(scope))
        return frozenset(found)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"<Scope {sorted(self._frame)} parent={type(self._parent).__name__}>"


def _lookup_root(model: Any, name: str) -> Any:
    if model is None:
        return MISSING
    if isinstance(model, Mapping):
        return model.get(name, MISSING)
    return getattr(model, name, MISSING)


def _root_names(model: Any) -> frozenset[str]:
    if model is None:
        return frozenset()
    if isinstance(model, Mapping):
        return frozenset(k for k in model if isinstance(k, str))
    return frozenset(n for n in dir(model) if not n.startswith("_"))


def lookup_name(model: Any, name: str) -> Any:
    """Resolve a bare name against any model shape.

    Returns:
        The bound value, or MISSING when nothing binds ``name``.
    """
    if isinstance(model, Scope):
        return model.lookup(name)
    return _lookup_root(model, name)


def visible_names(model: Any) -> frozenset[str]:
    if isinstance(model, Scope):
        return model.names()
    return _root_names(model)


def lookup_member(value: Any, name: str) -> Any:
    """Resolve ``value.name``: mapping key first, then attribute.

    Returns:
        The member, or MISSING.
    """
    if isinstance(value, Scope):
        return value.lookup(name)
    if isinstance(value, Mapping) and name in value:
        return value[name]
    return getattr(value, name, MISSING)
