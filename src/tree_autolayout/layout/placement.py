"""Placement engine: turns cached boxes into absolute node coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_autolayout.layout.box import get_box
from tree_autolayout.state import HEIGHT_WITHOUT_TIP, WIDTH_WITHOUT_TIP, get_state, is_collapsed
from tree_autolayout.types import Orientation

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostNode
    from tree_autolayout.layout.session import LayoutSession


def effective_growth_size(node: HostNode, orientation: Orientation) -> float:
    """Size along the growth axis, ignoring a tip/decoration when one is recorded."""
    if orientation is Orientation.Vertical:
        return get_state(node, HEIGHT_WITHOUT_TIP) or node.height
    return get_state(node, WIDTH_WITHOUT_TIP) or node.width


def position_children(session: LayoutSession, anchor: HostNode) -> None:
    """Place the visible children of ``anchor`` one after another, then recurse."""
    if is_collapsed(anchor):
        return
    children = session.visible_children(anchor)
    if not children:
        return

    orientation = session.orientation
    row = (
        session.growth(anchor)
        + effective_growth_size(anchor, orientation)
        + session.config.growth_spacing(orientation)
    )
    anchor_box = get_box(session, anchor)

    prev = None
    for link in children:
        child = link.node
        box = get_box(session, child)
        session.set_growth(child, row)
        if prev is None:
            session.set_cross(child, session.cross(anchor) - anchor_box.offset + box.offset)
        else:
            prev_box = get_box(session, prev)
            trailing = session.cross(prev) - prev_box.offset + prev_box.extent
            session.set_cross(child, trailing + session.spacing + box.offset)
        position_children(session, child)
        prev = child
