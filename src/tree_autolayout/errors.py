"""Exceptions raised by the layout engine."""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for layout failures."""


class StructuralInconsistencyError(LayoutError):
    """The edge set disagrees with itself, e.g. a node missing from its parent's children."""

    def __init__(self, node_id: str, parent_id: str) -> None:
        super().__init__(f"Node '{node_id}' not found among the children of its parent '{parent_id}'")
        self.node_id = node_id
        self.parent_id = parent_id
