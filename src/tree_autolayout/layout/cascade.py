"""Cascade orchestrator: incremental re-stabilization after a local change.

Three directions:
  children  re-place the node's descendants
  siblings  re-pack the node's siblings flush around it
  parent    re-box and re-center the parent, then recurse upward
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from tree_autolayout.errors import LayoutError, StructuralInconsistencyError
from tree_autolayout.layout.box import (
    cached_box,
    children_spread,
    compute_box,
    get_box,
    layout_children,
    update_parent_box,
)
from tree_autolayout.layout.placement import position_children
from tree_autolayout.state import is_collapsed

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostNode
    from tree_autolayout.layout.session import LayoutSession

logger = logging.getLogger(__name__)


class CascadeDirection(Enum):
    Children = "children"
    Siblings = "siblings"
    Parent = "parent"


FULL_CASCADE = (CascadeDirection.Children, CascadeDirection.Siblings, CascadeDirection.Parent)


def cascade(session: LayoutSession, node: HostNode) -> tuple[CascadeDirection, ...]:
    """Recompute the box of ``node`` and propagate as far as needed.

    Returns the directions that ran. When the box is unchanged only the
    descendants are re-placed, since they may have been dragged by hand.
    """
    prev = cached_box(node)
    curr = compute_box(session, node)

    if curr.same_geometry(prev):
        logger.debug("box of '%s' unchanged; refreshing children only", node.id)
        directions: tuple[CascadeDirection, ...] = (CascadeDirection.Children,)
    else:
        logger.debug("box of '%s' changed %s -> %s; full cascade", node.id, prev, curr)
        directions = FULL_CASCADE

    for direction in directions:
        reposition(session, node, direction)
    return directions


def reposition(session: LayoutSession, node: HostNode, direction: CascadeDirection) -> None:
    if direction is CascadeDirection.Children:
        position_children(session, node)
    elif direction is CascadeDirection.Siblings:
        _reposition_siblings(session, node)
    elif direction is CascadeDirection.Parent:
        _reposition_parent(session, node)


def _reposition_siblings(session: LayoutSession, node: HostNode) -> None:
    parent = session.first_parent(node)
    if parent is None or is_collapsed(parent):
        return

    siblings = [link.node for link in layout_children(session, parent)]
    index = next((i for i, sibling in enumerate(siblings) if sibling.id == node.id), None)
    if index is None:
        raise StructuralInconsistencyError(node.id, parent.id)

    spacing = session.spacing
    for i in range(index - 1, -1, -1):
        move, ref = siblings[i], siblings[i + 1]
        ref_box, move_box = get_box(session, ref), get_box(session, move)
        near_edge = session.cross(ref) - ref_box.offset
        session.set_cross(move, near_edge - spacing - move_box.extent + move_box.offset)
        position_children(session, move)

    for i in range(index + 1, len(siblings)):
        move, ref = siblings[i], siblings[i - 1]
        ref_box, move_box = get_box(session, ref), get_box(session, move)
        far_edge = session.cross(ref) - ref_box.offset + ref_box.extent
        session.set_cross(move, far_edge + spacing + move_box.offset)
        position_children(session, move)


def _reposition_parent(session: LayoutSession, node: HostNode) -> None:
    # Never short-circuits: every ancestor up to the root or the first
    # collapsed one is re-centered.
    seen = {node.id}
    parent = session.first_parent(node)
    while parent is not None:
        if parent.id in seen:
            raise LayoutError(f"Cycle in parent chain at '{parent.id}'")
        seen.add(parent.id)
        if is_collapsed(parent):
            # Collapsed parents keep a leaf box.
            logger.debug("walk stopped at collapsed parent '%s'", parent.id)
            break

        parent_box = update_parent_box(session, parent)
        children = layout_children(session, parent)
        if children:
            spread = children_spread(session, parent_box.extent, children)
            first = children[0].node
            session.set_cross(parent, session.cross(first) + (spread - session.cross_size(parent)) / 2)

        _reposition_siblings(session, parent)
        parent = session.first_parent(parent)
