"""Host protocols the layout engine is written against."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Iterable, Protocol


class HostNode(Protocol):
    """A rectangular node owned by the host."""

    id: str
    x: float
    y: float
    width: float
    height: float
    visible: bool
    state: MutableMapping[str, Any]


class HostEdge(Protocol):
    """A directed connector; ``start`` is the logical parent."""

    start: str
    end: str
    visible: bool
    order: int


class NodeRegistry(Protocol):
    """Protocol that every host graph must implement."""

    def get_node(self, node_id: str) -> HostNode | None:
        """Resolve an identifier to a live node, or None if absent."""
        ...

    def edges_of(self, node_id: str) -> Iterable[HostEdge]:
        """All edges with either endpoint equal to ``node_id``."""
        ...
