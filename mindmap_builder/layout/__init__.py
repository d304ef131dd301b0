"""Layout strategies for mind map graphs."""

from mindmap_builder.layout.engine import apply_layout, compute_positions, sanitize_config
from mindmap_builder.layout.network import network_positions
from mindmap_builder.layout.radial import radial_positions
from mindmap_builder.layout.tree import tree_positions
from mindmap_builder.layout.types import LAYOUT_TYPES, ORIENTATIONS, LayoutConfig

__all__ = [
    "LAYOUT_TYPES",
    "LayoutConfig",
    "ORIENTATIONS",
    "apply_layout",
    "compute_positions",
    "network_positions",
    "radial_positions",
    "sanitize_config",
    "tree_positions",
]
