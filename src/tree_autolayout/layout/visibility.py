"""Collapse/expand: subtree visibility and footprint opacity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tree_autolayout.layout.box import invalidate_box
from tree_autolayout.layout.connectivity import find_connections
from tree_autolayout.layout.transaction import LayoutTransaction
from tree_autolayout.state import CHILDREN_COUNT, HIDE_CHILDREN, set_state
from tree_autolayout.types import LayoutContext, Orientation

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostNode, NodeRegistry

logger = logging.getLogger(__name__)


def collapse(graph: NodeRegistry, node: HostNode, context: LayoutContext | Orientation) -> int:
    """Hide every descendant of ``node`` and mark it collapsed.

    Descendants are collapsed first, whatever their current state. Returns the
    number of direct children.
    """
    tx = LayoutTransaction()
    count = _collapse(graph, node, LayoutContext.of(context), tx)
    tx.commit()
    invalidate_box(graph, node)
    logger.debug("collapsed '%s' (%d direct children)", node.id, count)
    return count


def _collapse(graph: NodeRegistry, node: HostNode, context: LayoutContext, tx: LayoutTransaction) -> int:
    children = find_connections(graph, node, context, tx).children
    for link in children:
        _collapse(graph, link.node, context, tx)
        tx.set_visible(link.node, False)
        tx.set_visible(link.edge, False)
    set_state(node, CHILDREN_COUNT, len(children))
    if children:
        set_state(node, HIDE_CHILDREN, True)
    return len(children)


def expand(
    graph: NodeRegistry,
    node: HostNode,
    context: LayoutContext | Orientation,
    recursive: bool = False,
) -> int:
    """Show the direct children of ``node`` (all descendants if ``recursive``).

    Geometry is not updated here; call ``cascade_layout_change`` afterwards.
    Returns the number of direct children.
    """
    tx = LayoutTransaction()
    count = _expand(graph, node, LayoutContext.of(context), tx, recursive)
    tx.commit()
    invalidate_box(graph, node)
    logger.debug("expanded '%s' (%d direct children, recursive=%s)", node.id, count, recursive)
    return count


def _expand(
    graph: NodeRegistry,
    node: HostNode,
    context: LayoutContext,
    tx: LayoutTransaction,
    recursive: bool,
) -> int:
    children = find_connections(graph, node, context, tx).children
    for link in children:
        tx.set_visible(link.node, True)
        tx.set_visible(link.edge, True)
        if recursive:
            _expand(graph, link.node, context, tx, recursive)
    set_state(node, HIDE_CHILDREN, False)
    return len(children)
