"""Per-operation layout state threaded through every phase."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tree_autolayout.config import DEFAULT_CONFIG, LayoutConfig
from tree_autolayout.layout.connectivity import Connections, Link, find_connections
from tree_autolayout.layout.transaction import LayoutTransaction
from tree_autolayout.types import LayoutContext, Orientation

if TYPE_CHECKING:
    from tree_autolayout.ir.base import HostNode, NodeRegistry


@dataclass
class LayoutSession:
    """Graph, immutable context, spacing, and the pending write batch."""

    graph: NodeRegistry
    context: LayoutContext
    config: LayoutConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    tx: LayoutTransaction = field(default_factory=LayoutTransaction)

    @classmethod
    def begin(
        cls,
        graph: NodeRegistry,
        context: LayoutContext | Orientation,
        config: LayoutConfig | None = None,
    ) -> LayoutSession:
        return cls(graph=graph, context=LayoutContext.of(context), config=config or DEFAULT_CONFIG)

    @property
    def orientation(self) -> Orientation:
        return self.context.orientation

    @property
    def spacing(self) -> float:
        return self.config.cross_spacing(self.orientation)

    def connections(self, node: HostNode) -> Connections:
        return find_connections(self.graph, node, self.context, self.tx)

    def visible_children(self, node: HostNode) -> list[Link]:
        return [link for link in self.connections(node).children if self.tx.is_visible(link.node)]

    def first_parent(self, node: HostNode) -> HostNode | None:
        return self.connections(node).first_parent

    def cross(self, node: HostNode) -> float:
        return self.tx.coord(node, self.orientation.cross_coord)

    def set_cross(self, node: HostNode, value: float) -> None:
        self.tx.move(node, self.orientation.cross_coord, value)

    def growth(self, node: HostNode) -> float:
        return self.tx.coord(node, self.orientation.growth_coord)

    def set_growth(self, node: HostNode, value: float) -> None:
        self.tx.move(node, self.orientation.growth_coord, value)

    def cross_size(self, node: HostNode) -> float:
        return getattr(node, self.orientation.cross_size)

    def commit(self) -> int:
        return self.tx.commit()
