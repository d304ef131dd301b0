"""Layered tree layout with centred-parent alignment."""

from __future__ import annotations

from mindmap_builder.graph import MindMapGraph
from mindmap_builder.layout.types import Position


def tree_positions(
    graph: MindMapGraph,
    orientation: str,
    node_spacing: float,
    level_spacing: float,
) -> dict[str, Position]:
    """Place nodes depth-first in fixed-width sibling bands.

    Depth advances along the main axis (x for horizontal, y for vertical)
    by ``level_spacing``. Siblings occupy ``node_spacing`` bands on the
    cross axis, centred on their parent. Bands do not grow with subtree
    size, so wide neighbouring subtrees can overlap.
    """
    # (main, cross) coordinates, swapped into (x, y) at the end.
    placed: dict[str, Position] = {graph.root_id: (0.0, 0.0)}
    stack = [graph.root_id]
    while stack:
        node_id = stack.pop()
        main, cross = placed[node_id]
        children = graph.get(node_id).children
        center = (len(children) - 1) / 2
        for index, child_id in enumerate(children):
            placed[child_id] = (main + level_spacing, cross + (index - center) * node_spacing)
        stack.extend(reversed(children))

    if orientation == "vertical":
        return {node_id: (cross, main) for node_id, (main, cross) in placed.items()}
    return placed
