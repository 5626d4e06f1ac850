"""Shared type definitions for tree-autolayout.

Enums and small value types used across the host graph, the layout phases,
and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(Enum):
    """Direction in which generations grow away from the root.

    Vertical: children sit side by side below the parent (cross axis = x).
    Horizontal: children sit stacked to the right of the parent (cross axis = y).
    """

    Vertical = "vertical"
    Horizontal = "horizontal"

    @classmethod
    def from_str(cls, name: str) -> Orientation:
        key = name.strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown orientation '{name}'; use vertical or horizontal")

    @property
    def cross_coord(self) -> str:
        return "x" if self is Orientation.Vertical else "y"

    @property
    def growth_coord(self) -> str:
        return "y" if self is Orientation.Vertical else "x"

    @property
    def cross_size(self) -> str:
        return "width" if self is Orientation.Vertical else "height"

    @property
    def growth_size(self) -> str:
        return "height" if self is Orientation.Vertical else "width"


@dataclass(frozen=True)
class LayoutContext:
    """Orientation in effect, plus the one in effect before the current operation."""

    orientation: Orientation = Orientation.Vertical
    previous_orientation: Orientation | None = None

    @classmethod
    def of(cls, value: LayoutContext | Orientation) -> LayoutContext:
        if isinstance(value, LayoutContext):
            return value
        return cls(orientation=value)

    @property
    def sort_orientation(self) -> Orientation:
        """Axis used to order siblings.

        Right after a flip nodes still sit at their old coordinates, so the
        old axis is the one that reflects the established order.
        """
        if self.previous_orientation is not None and self.previous_orientation != self.orientation:
            return self.previous_orientation
        return self.orientation

    def flip(self, orientation: Orientation) -> LayoutContext:
        return LayoutContext(orientation=orientation, previous_orientation=self.orientation)


@dataclass(frozen=True)
class Box:
    """Cross-axis footprint of a node's visible subtree.

    extent: size of the footprint along the cross axis.
    offset: node's near edge minus the footprint's near edge.
    orientation: axis the values were computed for.
    """

    extent: float
    offset: float
    orientation: Orientation

    def same_geometry(self, other: Box | None) -> bool:
        if other is None or other.orientation is not self.orientation:
            return False
        return self.extent == other.extent and self.offset == other.offset

    def to_dict(self) -> dict[str, object]:
        return {"extent": self.extent, "offset": self.offset, "orientation": self.orientation.value}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Box:
        try:
            return cls(
                extent=float(data["extent"]),  # type: ignore[arg-type]
                offset=float(data["offset"]),  # type: ignore[arg-type]
                orientation=Orientation.from_str(str(data["orientation"])),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed box {data!r}: {e}") from e
