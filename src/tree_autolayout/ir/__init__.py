"""Host graph representation: protocols and the networkx-backed TreeGraph."""

from tree_autolayout.ir.base import HostEdge, HostNode, NodeRegistry
from tree_autolayout.ir.graph import EdgeData, NodeData, TreeGraph

__all__ = [
    "EdgeData",
    "HostEdge",
    "HostNode",
    "NodeData",
    "NodeRegistry",
    "TreeGraph",
]
