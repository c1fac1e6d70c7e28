"""Base node class for imprint source trees."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, eq=False)
class Node:
    """Base class for all source nodes.

    Nodes are immutable and compared by identity: two structurally equal
    nodes are still distinct keys for the expression cache.

    """

    lineno: int = field(default=0, kw_only=True)
    col_offset: int = field(default=0, kw_only=True)
