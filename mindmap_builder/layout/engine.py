"""Layout strategy dispatch and configuration sanitizing."""

from __future__ import annotations

from dataclasses import replace
import logging
import math

from mindmap_builder.graph import MindMapGraph
from mindmap_builder.layout.network import network_positions
from mindmap_builder.layout.radial import radial_positions
from mindmap_builder.layout.tree import tree_positions
from mindmap_builder.layout.types import LAYOUT_TYPES, ORIENTATIONS, LayoutConfig, Position


LOGGER = logging.getLogger(__name__)

MIN_SPACING = 1.0


def _safe_spacing(name: str, value: float) -> float:
    if isinstance(value, (int, float)) and math.isfinite(value) and value >= MIN_SPACING:
        return float(value)
    LOGGER.warning("Layout %s=%r is not usable; clamping to %.1f", name, value, MIN_SPACING)
    return MIN_SPACING


def sanitize_config(config: LayoutConfig) -> LayoutConfig:
    """Clamp spacing and iteration values to ones that produce finite coordinates."""
    layout_type = config.layout_type
    if layout_type not in LAYOUT_TYPES:
        LOGGER.warning("Unknown layout type %r; using radial", layout_type)
        layout_type = "radial"

    orientation = config.orientation
    if orientation not in ORIENTATIONS:
        LOGGER.warning("Unknown tree orientation %r; using horizontal", orientation)
        orientation = "horizontal"

    iterations = config.iterations
    if not isinstance(iterations, int) or iterations < 0:
        LOGGER.warning("Network iterations=%r is not usable; using 0", iterations)
        iterations = 0

    repulsion = config.repulsion if math.isfinite(config.repulsion) and config.repulsion >= 0 else 0.0
    attraction = config.attraction if math.isfinite(config.attraction) and config.attraction >= 0 else 0.0

    return replace(
        config,
        layout_type=layout_type,
        orientation=orientation,
        node_spacing=_safe_spacing("node_spacing", config.node_spacing),
        level_spacing=_safe_spacing("level_spacing", config.level_spacing),
        iterations=iterations,
        repulsion=repulsion,
        attraction=attraction,
    )


def compute_positions(graph: MindMapGraph, config: LayoutConfig) -> dict[str, Position]:
    """Return positions for every node without touching the graph."""
    safe = sanitize_config(config)

    if safe.layout_type == "tree":
        return tree_positions(graph, safe.orientation, safe.node_spacing, safe.level_spacing)

    seed = radial_positions(graph, safe.level_spacing)
    if safe.layout_type == "network":
        return network_positions(graph, safe, seed)
    return seed


def apply_layout(graph: MindMapGraph, config: LayoutConfig) -> MindMapGraph:
    """Assign ``position`` on every node; topology is left as is."""
    positions = compute_positions(graph, config)
    for node in graph:
        node.position = positions[node.node_id]
    graph.touch()
    LOGGER.info("Applied %s layout to %d nodes", config.layout_type, len(graph))
    return graph
