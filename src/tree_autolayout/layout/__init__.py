"""Incremental tidy-tree layout engine and public API."""

from __future__ import annotations

from tree_autolayout.layout.box import (
    calc_offset,
    children_spread,
    compute_box,
    get_box,
    invalidate_box,
    update_parent_box,
)
from tree_autolayout.layout.cascade import CascadeDirection, reposition
from tree_autolayout.layout.connectivity import Connections, Link, find_connections
from tree_autolayout.layout.engine import auto_layout, cascade_layout_change, find_root, relayout
from tree_autolayout.layout.placement import effective_growth_size, position_children
from tree_autolayout.layout.session import LayoutSession
from tree_autolayout.layout.transaction import LayoutTransaction
from tree_autolayout.layout.visibility import collapse, expand

__all__ = [
    "CascadeDirection",
    "Connections",
    "LayoutSession",
    "LayoutTransaction",
    "Link",
    "auto_layout",
    "calc_offset",
    "cascade_layout_change",
    "children_spread",
    "collapse",
    "compute_box",
    "effective_growth_size",
    "expand",
    "find_connections",
    "find_root",
    "get_box",
    "invalidate_box",
    "position_children",
    "relayout",
    "reposition",
    "update_parent_box",
]
