"""Tests for layout/cascade.py: incremental children/siblings/parent propagation."""

from __future__ import annotations

import pytest

from tree_autolayout.errors import LayoutError, StructuralInconsistencyError
from tree_autolayout.ir.graph import EdgeData, TreeGraph
from tree_autolayout.layout.cascade import FULL_CASCADE, CascadeDirection
from tree_autolayout.layout.engine import auto_layout, cascade_layout_change, find_root, relayout
from tree_autolayout.layout.visibility import collapse
from tree_autolayout.state import BOX, get_state
from tree_autolayout.types import Orientation

V = Orientation.Vertical

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_tree(*edges: tuple[str, str], sizes: dict[str, tuple[float, float]] | None = None) -> TreeGraph:
    """Build a TreeGraph from (parent, child) pairs; nodes default to 100x50."""
    g = TreeGraph()
    sizes = sizes or {}
    for src, tgt in edges:
        for node_id in (src, tgt):
            if g.get_node(node_id) is None:
                width, height = sizes.get(node_id, (100, 50))
                g.add_node(node_id, width=width, height=height)
        g.add_edge(src, tgt)
    return g


def positions(g: TreeGraph) -> dict[str, tuple[float, float]]:
    return {n.id: (n.x, n.y) for n in g.nodes()}


def x_of(g: TreeGraph, node_id: str) -> float:
    return g.get_node(node_id).x


class DesyncedGraph(TreeGraph):
    """A TreeGraph whose parent side forgets one edge the child side still reports."""

    def __init__(self) -> None:
        super().__init__()
        self.hidden: tuple[str, str] | None = None

    def edges_of(self, node_id: str) -> list[EdgeData]:
        edges = super().edges_of(node_id)
        if self.hidden is not None and node_id == self.hidden[0]:
            edges = [e for e in edges if (e.start, e.end) != self.hidden]
        return edges


FOUR_GRANDCHILDREN = (("R", "A"), ("R", "B"), ("A", "A1"), ("A", "A2"), ("B", "B1"), ("B", "B2"))


# ─── Entry decision ───────────────────────────────────────────────────────────


class TestEntryDecision:
    def test_unchanged_box_only_refreshes_children(self):
        g = make_tree(("R", "A"), ("R", "B"))
        auto_layout(g, g.get_node("R"), V)
        assert cascade_layout_change(g, g.get_node("A"), V) == (CascadeDirection.Children,)

    def test_changed_box_runs_all_directions(self):
        g = make_tree(("R", "A"), ("R", "B"))
        auto_layout(g, g.get_node("R"), V)
        g.resize("A", 300, 50)
        assert cascade_layout_change(g, g.get_node("A"), V) == FULL_CASCADE

    def test_missing_box_runs_all_directions(self):
        g = make_tree(("R", "A"), ("R", "B"))
        assert cascade_layout_change(g, g.get_node("A"), V) == FULL_CASCADE

    def test_orientation_change_runs_all_directions(self):
        g = make_tree(("R", "A"), ("R", "B"))
        auto_layout(g, g.get_node("R"), V)
        directions = cascade_layout_change(g, g.get_node("A"), Orientation.Horizontal)
        assert directions == FULL_CASCADE

    def test_hidden_node_is_ignored(self):
        g = make_tree(("R", "A"))
        g.get_node("A").visible = False
        assert cascade_layout_change(g, g.get_node("A"), V) == ()

    def test_manual_drag_is_repaired(self):
        g = make_tree(("R", "A"), ("A", "A1"), ("A", "A2"))
        auto_layout(g, g.get_node("R"), V)
        before = positions(g)
        g.get_node("A2").x += 333
        g.get_node("A1").y -= 12
        assert cascade_layout_change(g, g.get_node("A"), V) == (CascadeDirection.Children,)
        assert positions(g) == before


# ─── Resizing ─────────────────────────────────────────────────────────────────


class TestResize:
    def test_resize_repacks_sibling_and_recenters_parent(self):
        g = make_tree(("R", "A"), ("R", "B"))
        auto_layout(g, g.get_node("R"), V)
        g.resize("A", 300, 50)
        cascade_layout_change(g, g.get_node("A"), V)
        assert x_of(g, "A") == -90
        assert x_of(g, "B") == 290
        assert x_of(g, "R") == 100
        r = g.get_node("R")
        assert r.x + r.width / 2 == pytest.approx((x_of(g, "A") + x_of(g, "B") + 100) / 2)

    def test_shrink_pulls_siblings_in(self):
        g = make_tree(("R", "A"), ("R", "B"), ("R", "C"))
        auto_layout(g, g.get_node("R"), V)
        g.resize("B", 20, 50)
        cascade_layout_change(g, g.get_node("B"), V)
        assert x_of(g, "A") == x_of(g, "B") - 80 - 100
        assert x_of(g, "C") == x_of(g, "B") + 20 + 80

    def test_idempotent(self):
        g = make_tree(*FOUR_GRANDCHILDREN)
        auto_layout(g, g.get_node("R"), V)
        g.resize("A1", 200, 50)
        cascade_layout_change(g, g.get_node("A1"), V)
        first = positions(g)
        assert cascade_layout_change(g, g.get_node("A1"), V) == (CascadeDirection.Children,)
        assert positions(g) == first

    def test_deep_resize_only_touches_ancestor_boxes(self):
        g = make_tree(*FOUR_GRANDCHILDREN)
        auto_layout(g, g.get_node("R"), V)
        boxes = {n.id: get_state(n, BOX) for n in g.nodes()}
        g.resize("A1", 200, 50)
        cascade_layout_change(g, g.get_node("A1"), V)
        after = {n.id: get_state(n, BOX) for n in g.nodes()}
        for node_id in ("A1", "A", "R"):
            assert after[node_id] != boxes[node_id]
        for node_id in ("A2", "B", "B1", "B2"):
            assert after[node_id] is boxes[node_id]

    def test_incremental_matches_full_layout(self):
        g = make_tree(*FOUR_GRANDCHILDREN)
        auto_layout(g, g.get_node("R"), V)
        g.resize("A1", 200, 50)
        cascade_layout_change(g, g.get_node("A1"), V)

        fresh = make_tree(*FOUR_GRANDCHILDREN, sizes={"A1": (200, 50)})
        root = fresh.get_node("R")
        root.x, root.y = x_of(g, "R"), g.get_node("R").y
        auto_layout(fresh, root, V)
        assert positions(g) == positions(fresh)

    def test_deep_resize_values(self):
        g = make_tree(*FOUR_GRANDCHILDREN)
        auto_layout(g, g.get_node("R"), V)
        g.resize("A1", 200, 50)
        cascade_layout_change(g, g.get_node("A1"), V)
        assert x_of(g, "A1") == -270
        assert x_of(g, "A2") == 10
        assert x_of(g, "A") == -130
        assert x_of(g, "B") == 280
        assert x_of(g, "R") == 75

    def test_horizontal_resize(self):
        g = make_tree(("R", "A"), ("R", "B"))
        auto_layout(g, g.get_node("R"), Orientation.Horizontal)
        g.resize("A", 100, 150)
        cascade_layout_change(g, g.get_node("A"), Orientation.Horizontal)
        a, b, r = g.get_node("A"), g.get_node("B"), g.get_node("R")
        assert b.y == a.y + 150 + 80
        assert r.y + r.height / 2 == pytest.approx((a.y + b.y + b.height) / 2)
        assert a.x == b.x == 180


# ─── Structure ────────────────────────────────────────────────────────────────


class TestStructure:
    def test_new_child_is_placed(self):
        g = make_tree(("R", "A"))
        auto_layout(g, g.get_node("R"), V)
        g.add_node("B", width=100, height=50, x=500, y=0)
        g.add_edge("R", "B")
        cascade_layout_change(g, g.get_node("R"), V)
        assert g.get_node("B").y == 130
        assert x_of(g, "B") == x_of(g, "A") + 100 + 80

    def test_removed_child_closes_gap(self):
        g = make_tree(("R", "A"), ("R", "B"), ("R", "C"))
        auto_layout(g, g.get_node("R"), V)
        g.remove_node("B")
        cascade_layout_change(g, g.get_node("R"), V)
        assert x_of(g, "C") == x_of(g, "A") + 100 + 80

    def test_structural_inconsistency_aborts_without_writes(self):
        g = DesyncedGraph()
        for node_id in ("R", "A", "B"):
            g.add_node(node_id, width=100, height=50)
        g.add_edge("R", "A")
        g.add_edge("R", "B")
        auto_layout(g, g.get_node("R"), V)
        before = positions(g)

        g.hidden = ("R", "A")
        g.resize("A", 300, 50)
        with pytest.raises(StructuralInconsistencyError) as excinfo:
            cascade_layout_change(g, g.get_node("A"), V)
        assert excinfo.value.node_id == "A"
        assert excinfo.value.parent_id == "R"
        assert positions(g) == before

    def test_only_first_parent_propagates(self):
        g = TreeGraph()
        for node_id in ("P1", "P2", "C", "D"):
            g.add_node(node_id, width=100, height=50)
        g.add_edge("P2", "C")
        g.add_edge("P2", "D")
        g.add_edge("P1", "C")
        auto_layout(g, g.get_node("P2"), V)
        g.resize("C", 300, 50)
        cascade_layout_change(g, g.get_node("C"), V)
        assert x_of(g, "P1") == 0
        assert x_of(g, "P2") == x_of(g, "C") + (300 + 80 + 100 - 100) / 2

    def test_child_added_under_collapsed_parent_moves_nothing(self):
        g = make_tree(("R", "A"), ("R", "B"), ("A", "A1"))
        auto_layout(g, g.get_node("R"), V)
        collapse(g, g.get_node("A"), V)
        cascade_layout_change(g, g.get_node("A"), V)
        before = positions(g)

        g.add_node("N", width=100, height=50, x=5000, y=0)
        g.add_edge("A", "N")
        cascade_layout_change(g, g.get_node("N"), V)
        after = positions(g)
        for node_id in ("R", "A", "B"):
            assert after[node_id] == before[node_id]
        assert get_state(g.get_node("A"), BOX).extent == 100

    def test_hidden_child_of_collapsed_parent_is_ignored(self):
        g = make_tree(("R", "A"), ("R", "B"), ("A", "A1"))
        auto_layout(g, g.get_node("R"), V)
        collapse(g, g.get_node("A"), V)
        cascade_layout_change(g, g.get_node("A"), V)
        before = positions(g)

        g.resize("A1", 400, 50)
        assert cascade_layout_change(g, g.get_node("A1"), V) == ()
        assert positions(g) == before


# ─── Helpers around the cascade ───────────────────────────────────────────────


class TestRoots:
    def test_find_root(self):
        g = make_tree(("R", "A"), ("A", "A1"))
        assert find_root(g, g.get_node("A1")).id == "R"

    def test_find_root_cycle_raises(self):
        g = make_tree(("A", "B"), ("B", "A"))
        with pytest.raises(LayoutError):
            find_root(g, g.get_node("A"))

    def test_relayout_from_leaf(self):
        g = make_tree(("R", "A"), ("R", "B"), ("A", "A1"))
        auto_layout(g, g.get_node("R"), V)
        before = positions(g)
        g.get_node("B").x = 9999
        g.get_node("A1").y = -5
        assert relayout(g, g.get_node("A1"), V).id == "R"
        assert positions(g) == before
