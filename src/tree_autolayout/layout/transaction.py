"""Batched writes to host nodes and edges.

Layout phases never assign to host objects directly. They record pending
positions and visibility in a LayoutTransaction, read them back through it,
and the whole batch is applied by ``commit`` once the operation succeeded.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class LayoutTransaction:
    """Pending position/visibility writes with read-through."""

    def __init__(self) -> None:
        self._targets: dict[int, Any] = {}
        self._writes: dict[int, dict[str, Any]] = {}
        self.committed = False

    def _pending(self, target: Any) -> dict[str, Any]:
        key = id(target)
        if key not in self._writes:
            self._targets[key] = target
            self._writes[key] = {}
        return self._writes[key]

    def get(self, target: Any, attr: str) -> Any:
        pending = self._writes.get(id(target))
        if pending is not None and attr in pending:
            return pending[attr]
        return getattr(target, attr)

    def set(self, target: Any, attr: str, value: Any) -> None:
        if self.committed:
            raise RuntimeError("Transaction already committed")
        self._pending(target)[attr] = value

    def coord(self, node: Any, axis: str) -> float:
        return self.get(node, axis)

    def move(self, node: Any, axis: str, value: float) -> None:
        self.set(node, axis, value)

    def is_visible(self, target: Any) -> bool:
        return bool(self.get(target, "visible"))

    def set_visible(self, target: Any, visible: bool) -> None:
        self.set(target, "visible", visible)

    def __len__(self) -> int:
        return sum(len(w) for w in self._writes.values())

    def commit(self) -> int:
        """Apply every pending write to its host object; returns the write count."""
        if self.committed:
            raise RuntimeError("Transaction already committed")
        count = 0
        for key, writes in self._writes.items():
            target = self._targets[key]
            for attr, value in writes.items():
                setattr(target, attr, value)
                count += 1
        self.committed = True
        logger.debug("committed %d layout writes on %d objects", count, len(self._writes))
        return count

    def discard(self) -> None:
        self._targets.clear()
        self._writes.clear()
