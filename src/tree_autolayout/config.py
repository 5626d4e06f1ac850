"""Centralized configuration for tree-autolayout."""

from __future__ import annotations

from dataclasses import dataclass

from tree_autolayout.types import Orientation


@dataclass
class LayoutConfig:
    """Spacing between nodes, in host coordinate units."""

    vertical_spacing: float = 80
    horizontal_spacing: float = 80

    def cross_spacing(self, orientation: Orientation) -> float:
        """Gap between neighbouring siblings."""
        if orientation is Orientation.Vertical:
            return self.horizontal_spacing
        return self.vertical_spacing

    def growth_spacing(self, orientation: Orientation) -> float:
        """Gap between a parent and its row of children."""
        if orientation is Orientation.Vertical:
            return self.vertical_spacing
        return self.horizontal_spacing


DEFAULT_CONFIG = LayoutConfig()
