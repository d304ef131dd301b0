"""Radial layout: depth maps to radius, sibling order to angle."""

from __future__ import annotations

import math

from mindmap_builder.graph import MindMapGraph
from mindmap_builder.layout.types import Position


def _polar(angle: float, radius: float) -> Position:
    return (math.cos(angle) * radius, math.sin(angle) * radius)


def radial_positions(graph: MindMapGraph, level_spacing: float) -> dict[str, Position]:
    """Place the root at the origin and fan each subtree out around its parent's angle.

    The root's children split the full circle evenly, starting at angle 0.
    Deeper children spread over a window of ``pi / (k + 1)`` per sibling,
    centred on the angle of the node they hang from.
    """
    root = graph.root
    positions: dict[str, Position] = {root.node_id: (0.0, 0.0)}

    top_level = root.children
    if not top_level:
        return positions

    step = 2 * math.pi / len(top_level)
    stack: list[tuple[str, float, int]] = [
        (child_id, index * step, 1) for index, child_id in reversed(list(enumerate(top_level)))
    ]
    while stack:
        node_id, angle, depth = stack.pop()
        positions[node_id] = _polar(angle, level_spacing * depth)

        children = graph.get(node_id).children
        if not children:
            continue
        spread = math.pi / (len(children) + 1)
        center = (len(children) - 1) / 2
        for index in reversed(range(len(children))):
            stack.append((children[index], angle + (index - center) * spread, depth + 1))

    return positions
