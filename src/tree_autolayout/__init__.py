"""tree-autolayout: incremental tidy layout for directed trees of rectangular nodes."""

from tree_autolayout.config import LayoutConfig
from tree_autolayout.errors import LayoutError, StructuralInconsistencyError
from tree_autolayout.ir.graph import EdgeData, NodeData, TreeGraph
from tree_autolayout.layout import (
    auto_layout,
    cascade_layout_change,
    collapse,
    compute_box,
    expand,
    find_connections,
    get_box,
    relayout,
)
from tree_autolayout.state import get_state, set_state
from tree_autolayout.types import Box, LayoutContext, Orientation

__all__ = [
    "Box",
    "EdgeData",
    "LayoutConfig",
    "LayoutContext",
    "LayoutError",
    "NodeData",
    "Orientation",
    "StructuralInconsistencyError",
    "TreeGraph",
    "auto_layout",
    "cascade_layout_change",
    "collapse",
    "compute_box",
    "expand",
    "find_connections",
    "get_box",
    "get_state",
    "layout_document",
    "relayout",
    "set_state",
]


def layout_document(
    doc: dict,
    orientation: str = "vertical",
    previous_orientation: str | None = None,
    collapsed: tuple[str, ...] | list[str] = (),
    config: LayoutConfig | None = None,
) -> dict:
    """Lay out a JSON-style tree document and return the updated document.

    Args:
        doc: ``{"nodes": [...], "edges": [...]}`` as produced by ``TreeGraph.to_dict``.
        orientation: 'vertical' or 'horizontal'.
        previous_orientation: Orientation the coordinates in ``doc`` were laid out with.
        collapsed: Node ids to collapse before layout.
        config: Spacing override; None uses the defaults.

    Returns:
        The laid-out document.

    Raises:
        ValueError: If the document is malformed, an orientation or node id is unknown.
    """
    context = LayoutContext(
        orientation=Orientation.from_str(orientation),
        previous_orientation=Orientation.from_str(previous_orientation) if previous_orientation else None,
    )
    graph = TreeGraph.from_dict(doc)
    for node_id in collapsed:
        node = graph.get_node(node_id)
        if node is None:
            raise ValueError(f"Unknown node '{node_id}'")
        collapse(graph, node, context)
    for root in graph.roots():
        auto_layout(graph, root, context, config)
    return graph.to_dict()
