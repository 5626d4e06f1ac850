"""Public layout entry points.

Each call opens a LayoutSession, runs the phases against its transaction, and
commits the batched writes only when every phase succeeded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tree_autolayout.config import LayoutConfig
from tree_autolayout.errors import LayoutError
from tree_autolayout.layout.box import compute_box
from tree_autolayout.layout.cascade import CascadeDirection, cascade
from tree_autolayout.layout.connectivity import find_connections
from tree_autolayout.layout.placement import position_children
from tree_autolayout.layout.session import LayoutSession
from tree_autolayout.types import LayoutContext, Orientation

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostNode, NodeRegistry

logger = logging.getLogger(__name__)


def auto_layout(
    graph: NodeRegistry,
    root: HostNode,
    context: LayoutContext | Orientation,
    config: LayoutConfig | None = None,
) -> int:
    """Compute every box under ``root`` and place its subtree; ``root`` stays put.

    Returns the number of coordinate writes committed.
    """
    session = LayoutSession.begin(graph, context, config)
    compute_box(session, root)
    position_children(session, root)
    return session.commit()


def cascade_layout_change(
    graph: NodeRegistry,
    node: HostNode,
    context: LayoutContext | Orientation,
    config: LayoutConfig | None = None,
) -> tuple[CascadeDirection, ...]:
    """Re-stabilize the tree after ``node`` changed size, visibility, or children.

    Returns the cascade directions that ran. Raises
    StructuralInconsistencyError without touching any node position when the
    edge set is inconsistent.
    """
    if not node.visible:
        logger.debug("'%s' is hidden; nothing to cascade", node.id)
        return ()

    session = LayoutSession.begin(graph, context, config)
    try:
        directions = cascade(session, node)
    except LayoutError:
        session.tx.discard()
        raise
    session.commit()
    return directions


def find_root(graph: NodeRegistry, node: HostNode) -> HostNode:
    """Follow first parents up from ``node``."""
    seen = {node.id}
    current = node
    while True:
        parent = find_connections(graph, current).first_parent
        if parent is None:
            return current
        if parent.id in seen:
            raise LayoutError(f"Cycle in parent chain at '{parent.id}'")
        seen.add(parent.id)
        current = parent


def relayout(
    graph: NodeRegistry,
    node: HostNode,
    context: LayoutContext | Orientation,
    config: LayoutConfig | None = None,
) -> HostNode:
    """Run ``auto_layout`` on the root of the tree containing ``node``; returns that root."""
    root = find_root(graph, node)
    auto_layout(graph, root, context, config)
    return root
