"""Tree graph: the default host graph store, backed by a networkx DiGraph.

Nodes and edges are plain dataclasses attached to the DiGraph as the ``data``
attribute. The layout engine only sees them through the ``NodeRegistry``
protocol; this module adds construction, mutation, and (de)serialization
helpers used by tests and the CLI.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from tree_autolayout.state import BOX, BOX_DIRTY
from tree_autolayout.types import Box


@dataclass
class NodeData:
    id: str
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    visible: bool = True
    state: dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeData:
    start: str
    end: str
    visible: bool = True
    order: int = 0


class TreeGraph:
    """A directed tree of rectangular nodes.

    Wraps a networkx DiGraph and exposes the lookups the layout engine needs
    plus topology helpers for hosts.
    """

    def __init__(self, digraph: nx.DiGraph | None = None) -> None:
        self.digraph: nx.DiGraph = digraph if digraph is not None else nx.DiGraph()
        self._edge_order = itertools.count()

    # ─── NodeRegistry ────────────────────────────────────────────────────────

    def get_node(self, node_id: str) -> NodeData | None:
        if node_id not in self.digraph:
            return None
        return self.digraph.nodes[node_id]["data"]

    def edges_of(self, node_id: str) -> list[EdgeData]:
        if node_id not in self.digraph:
            return []
        edges = [d["data"] for _, _, d in self.digraph.in_edges(node_id, data=True)]
        edges.extend(d["data"] for _, _, d in self.digraph.out_edges(node_id, data=True))
        edges.sort(key=lambda e: e.order)
        return edges

    # ─── Mutation ────────────────────────────────────────────────────────────

    def add_node(
        self,
        node_id: str,
        width: float,
        height: float,
        x: float = 0,
        y: float = 0,
        visible: bool = True,
    ) -> NodeData:
        if node_id in self.digraph:
            raise ValueError(f"Duplicate node id '{node_id}'")
        data = NodeData(id=node_id, x=x, y=y, width=width, height=height, visible=visible)
        self.digraph.add_node(node_id, data=data)
        return data

    def add_edge(self, start: str, end: str, visible: bool = True) -> EdgeData:
        for node_id in (start, end):
            if node_id not in self.digraph:
                raise KeyError(node_id)
        if self.digraph.has_edge(start, end):
            raise ValueError(f"Duplicate edge '{start}' -> '{end}'")
        data = EdgeData(start=start, end=end, visible=visible, order=next(self._edge_order))
        self.digraph.add_edge(start, end, data=data)
        self.mark_dirty(start)
        return data

    def remove_edge(self, start: str, end: str) -> None:
        if not self.digraph.has_edge(start, end):
            raise KeyError((start, end))
        self.digraph.remove_edge(start, end)
        self.mark_dirty(start)

    def remove_node(self, node_id: str) -> None:
        if node_id not in self.digraph:
            raise KeyError(node_id)
        parents = list(self.digraph.predecessors(node_id))
        self.digraph.remove_node(node_id)
        for parent in parents:
            self.mark_dirty(parent)

    def resize(self, node_id: str, width: float, height: float) -> NodeData:
        node = self.get_node(node_id)
        if node is None:
            raise KeyError(node_id)
        node.width = width
        node.height = height
        self.mark_dirty(node_id)
        return node

    def mark_dirty(self, node_id: str) -> None:
        """Flag the cached box of a node and of its ancestor chain as stale."""
        from tree_autolayout.layout.box import invalidate_box

        node = self.get_node(node_id)
        if node is not None:
            invalidate_box(self, node)

    # ─── Topology ────────────────────────────────────────────────────────────

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def nodes(self) -> list[NodeData]:
        return [d["data"] for _, d in self.digraph.nodes(data=True)]

    def roots(self) -> list[NodeData]:
        return [self.digraph.nodes[n]["data"] for n, deg in self.digraph.in_degree() if deg == 0]

    def is_forest(self) -> bool:
        if self.node_count() == 0:
            return True
        return nx.is_branching(self.digraph)

    # ─── Serialization ───────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> TreeGraph:
        """Build a TreeGraph from ``{"nodes": [...], "edges": [...]}``."""
        if not isinstance(doc, dict):
            raise ValueError("Tree document must be an object with 'nodes' and 'edges'")
        graph = cls()
        for raw in doc.get("nodes", []):
            try:
                node = graph.add_node(
                    str(raw["id"]),
                    width=float(raw["width"]),
                    height=float(raw["height"]),
                    x=float(raw.get("x", 0)),
                    y=float(raw.get("y", 0)),
                    visible=bool(raw.get("visible", True)),
                )
                node.state.update(_load_state(raw.get("state", {})))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Malformed node entry {raw!r}: {e}") from e
        for raw in doc.get("edges", []):
            try:
                graph.add_edge(str(raw["start"]), str(raw["end"]), visible=bool(raw.get("visible", True)))
            except KeyError as e:
                raise ValueError(f"Malformed edge entry {raw!r}: unknown or missing {e}") from e
        return graph

    def to_dict(self) -> dict[str, Any]:
        edges = sorted((d["data"] for _, _, d in self.digraph.edges(data=True)), key=lambda e: e.order)
        return {
            "nodes": [
                {
                    "id": n.id,
                    "x": n.x,
                    "y": n.y,
                    "width": n.width,
                    "height": n.height,
                    "visible": n.visible,
                    "state": _dump_state(n.state),
                }
                for n in self.nodes()
            ],
            "edges": [{"start": e.start, "end": e.end, "visible": e.visible} for e in edges],
        }


def _load_state(raw: dict[str, Any]) -> dict[str, Any]:
    loaded = dict(raw)
    box = loaded.get(BOX)
    if box is not None and not isinstance(box, dict):
        raise ValueError(f"Malformed box {box!r}")
    if box is not None:
        if "orientation" in box:
            loaded[BOX] = Box.from_dict(box)
        else:
            # Untagged boxes are recomputed on first read.
            del loaded[BOX]
            loaded[BOX_DIRTY] = True
    return loaded


def _dump_state(values: dict[str, Any]) -> dict[str, Any]:
    dumped = dict(values)
    box = dumped.get(BOX)
    if isinstance(box, Box):
        dumped[BOX] = box.to_dict()
    return dumped
