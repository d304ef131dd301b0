"""Layout configuration model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


LayoutType = Literal["radial", "tree", "network"]
Orientation = Literal["horizontal", "vertical"]

LAYOUT_TYPES: tuple[str, ...] = ("radial", "tree", "network")
ORIENTATIONS: tuple[str, ...] = ("horizontal", "vertical")

DEFAULT_NODE_SPACING = 100.0
DEFAULT_LEVEL_SPACING = 150.0
DEFAULT_ITERATIONS = 50
DEFAULT_REPULSION = 1000.0
DEFAULT_ATTRACTION = 0.1

Position = tuple[float, float]


@dataclass(frozen=True)
class LayoutConfig:
    layout_type: LayoutType = "radial"
    orientation: Orientation = "horizontal"
    node_spacing: float = DEFAULT_NODE_SPACING
    level_spacing: float = DEFAULT_LEVEL_SPACING
    iterations: int = DEFAULT_ITERATIONS
    repulsion: float = DEFAULT_REPULSION
    attraction: float = DEFAULT_ATTRACTION
