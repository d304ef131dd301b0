"""Mind map builder package."""

from mindmap_builder.analysis import extract_keywords, extract_structure, identify_relationships
from mindmap_builder.classifier import LineClass, classify_line
from mindmap_builder.config import load_layout_config
from mindmap_builder.graph import MindMapGraph, MindMapNode, build_mind_map, validate_graph
from mindmap_builder.ids import IdGenerator
from mindmap_builder.labels import format_label
from mindmap_builder.layout import LayoutConfig, apply_layout, compute_positions
from mindmap_builder.parser import ParsedContent, ParseMetadata, Section, iter_sections, parse_file, parse_text
from mindmap_builder.session import MindMapSession, generate_mind_map
from mindmap_builder.snapshot import (
    SnapshotError,
    export_snapshot_json,
    graph_to_outline,
    graph_to_snapshot,
    load_snapshot_json,
    print_mind_map,
    snapshot_to_graph,
)
from mindmap_builder.view_state import ViewState

__all__ = [
    "IdGenerator",
    "LayoutConfig",
    "LineClass",
    "MindMapGraph",
    "MindMapNode",
    "MindMapSession",
    "ParseMetadata",
    "ParsedContent",
    "Section",
    "SnapshotError",
    "ViewState",
    "apply_layout",
    "build_mind_map",
    "classify_line",
    "compute_positions",
    "export_snapshot_json",
    "extract_keywords",
    "extract_structure",
    "format_label",
    "generate_mind_map",
    "graph_to_outline",
    "graph_to_snapshot",
    "identify_relationships",
    "iter_sections",
    "load_layout_config",
    "load_snapshot_json",
    "parse_file",
    "parse_text",
    "print_mind_map",
    "snapshot_to_graph",
    "validate_graph",
]
