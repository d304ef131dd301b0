"""Force-directed network layout."""

from __future__ import annotations

import logging

import numpy as np

from mindmap_builder.graph import MindMapGraph
from mindmap_builder.layout.types import LayoutConfig, Position


LOGGER = logging.getLogger(__name__)

MIN_DISTANCE = 1.0


def _repulsion_displacement(coords: np.ndarray, repulsion: float) -> np.ndarray:
    delta = coords[:, None, :] - coords[None, :, :]
    distance = np.sqrt(np.sum(delta * delta, axis=-1))
    floored = np.maximum(distance, MIN_DISTANCE)
    magnitude = repulsion / (floored * floored)
    np.fill_diagonal(magnitude, 0.0)
    unit = delta / floored[..., None]
    return np.sum(unit * magnitude[..., None], axis=1)


def _spring_displacement(
    coords: np.ndarray,
    child_index: np.ndarray,
    parent_index: np.ndarray,
    attraction: float,
) -> np.ndarray:
    displacement = np.zeros_like(coords)
    if child_index.size == 0:
        return displacement
    pull = (coords[parent_index] - coords[child_index]) * attraction
    np.add.at(displacement, child_index, pull)
    np.add.at(displacement, parent_index, -pull)
    return displacement


def _cap_step(displacement: np.ndarray, max_step: float) -> np.ndarray:
    length = np.sqrt(np.sum(displacement * displacement, axis=1))
    scale = np.where(length > max_step, max_step / np.maximum(length, MIN_DISTANCE), 1.0)
    return displacement * scale[:, None]


def network_positions(
    graph: MindMapGraph,
    config: LayoutConfig,
    seed: dict[str, Position],
) -> dict[str, Position]:
    """Relax ``seed`` positions for a fixed number of iterations.

    Every pair of nodes repels with ``repulsion / d**2`` (``d`` floored at
    ``MIN_DISTANCE``); every parent-child edge pulls both endpoints toward
    each other by ``attraction * d``. Forces are summed per iteration and a
    node moves at most ``level_spacing`` per step. There is no convergence
    test: ``config.iterations`` is the only stopping condition. The result
    is translated so the root sits at the origin.
    """
    nodes = graph.depth_first()
    index_of = {node.node_id: index for index, node in enumerate(nodes)}
    coords = np.array([seed.get(node.node_id, (0.0, 0.0)) for node in nodes], dtype=float)

    edges = [(index_of[node.node_id], index_of[node.parent_id]) for node in nodes if node.parent_id is not None]
    child_index = np.array([child for child, _ in edges], dtype=int)
    parent_index = np.array([parent for _, parent in edges], dtype=int)

    for _ in range(config.iterations):
        displacement = _repulsion_displacement(coords, config.repulsion)
        displacement += _spring_displacement(coords, child_index, parent_index, config.attraction)
        coords += _cap_step(displacement, config.level_spacing)

    coords -= coords[index_of[graph.root_id]]
    LOGGER.debug("Network layout relaxed %d nodes over %d iterations", len(nodes), config.iterations)
    return {node.node_id: (float(coords[index, 0]), float(coords[index, 1])) for index, node in enumerate(nodes)}
