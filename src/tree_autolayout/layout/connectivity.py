"""Connectivity resolver: parent/child relationships from the raw edge set."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tree_autolayout.types import LayoutContext

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostEdge, HostNode, NodeRegistry
    from tree_autolayout.layout.transaction import LayoutTransaction

logger = logging.getLogger(__name__)


@dataclass
class Link:
    """A related node together with the edge that connects it."""

    node: HostNode
    edge: HostEdge


@dataclass
class Connections:
    node: HostNode
    parents: list[Link] = field(default_factory=list)
    children: list[Link] = field(default_factory=list)

    @property
    def first_parent(self) -> HostNode | None:
        return self.parents[0].node if self.parents else None


def find_connections(
    graph: NodeRegistry,
    node: HostNode,
    context: LayoutContext | None = None,
    tx: LayoutTransaction | None = None,
) -> Connections:
    """Classify every edge touching ``node`` as a parent or child link.

    Parents are ordered by edge creation order, so ``parents[0]`` is the
    deterministic layout parent when the input is not a strict tree.
    Children are ordered along the cross axis of ``context.sort_orientation``
    (ties by edge order); without a context they keep edge order.
    Endpoints that do not resolve to a live node are skipped.
    """
    conns = Connections(node=node)
    for edge in sorted(graph.edges_of(node.id), key=lambda e: e.order):
        if edge.start == edge.end:
            logger.debug("ignoring self-loop edge on '%s'", node.id)
            continue
        if edge.start == node.id:
            other_id, bucket = edge.end, conns.children
        elif edge.end == node.id:
            other_id, bucket = edge.start, conns.parents
        else:
            continue
        other = graph.get_node(other_id)
        if other is None:
            logger.debug("edge %s -> %s: endpoint '%s' not found, skipped", edge.start, edge.end, other_id)
            continue
        bucket.append(Link(node=other, edge=edge))

    if context is not None:
        axis = context.sort_orientation.cross_coord
        conns.children.sort(key=lambda link: (_read(link.node, axis, tx), link.edge.order))
    return conns


def _read(node: Any, axis: str, tx: LayoutTransaction | None) -> float:
    if tx is None:
        return getattr(node, axis)
    return tx.coord(node, axis)
