"""Layout configuration loaded from the environment."""

from __future__ import annotations

import os

from mindmap_builder.env import load_env
from mindmap_builder.layout.types import (
    DEFAULT_ATTRACTION,
    DEFAULT_ITERATIONS,
    DEFAULT_LEVEL_SPACING,
    DEFAULT_NODE_SPACING,
    DEFAULT_REPULSION,
    LAYOUT_TYPES,
    ORIENTATIONS,
    LayoutConfig,
)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name, "").strip().lower()
    if raw in choices:
        return raw
    return default


def load_layout_config(load_dotenv: bool = True) -> LayoutConfig:
    if load_dotenv:
        load_env()

    return LayoutConfig(
        layout_type=_get_choice("MINDMAP_LAYOUT_TYPE", LAYOUT_TYPES, "radial"),
        orientation=_get_choice("MINDMAP_LAYOUT_ORIENTATION", ORIENTATIONS, "horizontal"),
        node_spacing=_get_float("MINDMAP_NODE_SPACING", DEFAULT_NODE_SPACING),
        level_spacing=_get_float("MINDMAP_LEVEL_SPACING", DEFAULT_LEVEL_SPACING),
        iterations=max(0, _get_int("MINDMAP_NETWORK_ITERATIONS", DEFAULT_ITERATIONS)),
        repulsion=_get_float("MINDMAP_NETWORK_REPULSION", DEFAULT_REPULSION),
        attraction=_get_float("MINDMAP_NETWORK_ATTRACTION", DEFAULT_ATTRACTION),
    )
