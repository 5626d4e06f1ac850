"""Box model: cross-axis footprint of each node's visible subtree.

A node's Box is cached in its persisted state under ``box`` and reused by
siblings and ancestors. The cache is stale when it is missing, flagged by
``boxDirty``, or was computed for another orientation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_autolayout.layout.connectivity import Link, find_connections
from tree_autolayout.state import BOX, BOX_DIRTY, get_state, is_collapsed, set_state
from tree_autolayout.types import Box

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostNode, NodeRegistry
    from tree_autolayout.layout.session import LayoutSession


def cached_box(node: HostNode) -> Box | None:
    """The stored box, fresh or not."""
    return get_state(node, BOX)


def store_box(node: HostNode, box: Box) -> Box:
    set_state(node, BOX, box)
    set_state(node, BOX_DIRTY, False)
    return box


def is_stale(session: LayoutSession, node: HostNode) -> bool:
    box = cached_box(node)
    return box is None or box.orientation is not session.orientation or get_state(node, BOX_DIRTY) is True


def get_box(session: LayoutSession, node: HostNode) -> Box:
    if is_stale(session, node):
        return compute_box(session, node)
    return cached_box(node)


def _leaf_box(session: LayoutSession, node: HostNode) -> Box:
    return Box(extent=session.cross_size(node), offset=0, orientation=session.orientation)


def layout_children(session: LayoutSession, node: HostNode) -> list[Link]:
    """Children that take part in layout: none for a collapsed node, else the visible ones."""
    if is_collapsed(node):
        return []
    return session.visible_children(node)


def compute_box(session: LayoutSession, node: HostNode) -> Box:
    """Recompute the box of ``node`` and of every visible descendant."""
    children = layout_children(session, node)
    if not children:
        return store_box(node, _leaf_box(session, node))

    extent = sum(compute_box(session, link.node).extent for link in children)
    extent += (len(children) - 1) * session.spacing
    offset = calc_offset(session, extent, session.cross_size(node), children)
    return store_box(node, Box(extent=extent, offset=offset, orientation=session.orientation))


def update_parent_box(session: LayoutSession, parent: HostNode) -> Box:
    """Recompute the box of ``parent`` from its children's current boxes."""
    children = layout_children(session, parent)
    if not children:
        return store_box(parent, _leaf_box(session, parent))

    extent = sum(get_box(session, link.node).extent for link in children)
    extent += (len(children) - 1) * session.spacing
    offset = calc_offset(session, extent, session.cross_size(parent), children)
    return store_box(parent, Box(extent=extent, offset=offset, orientation=session.orientation))


def children_spread(session: LayoutSession, box_extent: float, children: list[Link]) -> float:
    """Span from the first child's near edge to the last child's own far edge.

    Bleed past the last child's own size, contributed by its descendants, is
    removed so centering uses the children's visual footprint.
    """
    first_box = get_box(session, children[0].node)
    last = children[-1].node
    last_box = get_box(session, last)
    bleed = last_box.extent - last_box.offset - session.cross_size(last)
    return box_extent - first_box.offset - bleed


def calc_offset(session: LayoutSession, parent_box_extent: float, parent_size: float, children: list[Link]) -> float:
    first_box = get_box(session, children[0].node)
    spread = children_spread(session, parent_box_extent, children)
    return first_box.offset + (spread - parent_size) / 2


def invalidate_box(graph: NodeRegistry, node: HostNode) -> None:
    """Mark ``node`` and its first-parent ancestor chain as needing recomputation."""
    seen: set[str] = set()
    current: HostNode | None = node
    while current is not None and current.id not in seen:
        seen.add(current.id)
        set_state(current, BOX_DIRTY, True)
        current = find_connections(graph, current).first_parent
