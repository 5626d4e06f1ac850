"""Persisted per-node state.

Each host node carries a mutable ``state`` mapping that outlives a single
layout pass. Writes are visible to the next read on the same node.
"""

from __future__ import annotations

from typing import Any

BOX = "box"
BOX_DIRTY = "boxDirty"
HIDE_CHILDREN = "hideChildren"
CHILDREN_COUNT = "childrenCount"
HEIGHT_WITHOUT_TIP = "heightWithoutTip"
WIDTH_WITHOUT_TIP = "widthWithoutTip"


def get_state(node: Any, key: str, default: Any = None) -> Any:
    return node.state.get(key, default)


def set_state(node: Any, key: str, value: Any) -> Any:
    node.state[key] = value
    return value


def is_collapsed(node: Any) -> bool:
    return get_state(node, HIDE_CHILDREN) is True
