"""Parse -> build -> layout pipeline with view state for one active mind map."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Any

from mindmap_builder.graph import MindMapGraph, build_mind_map
from mindmap_builder.layout import LayoutConfig, apply_layout
from mindmap_builder.parser import ParsedContent, parse_text
from mindmap_builder.snapshot import snapshot_to_graph
from mindmap_builder.view_state import ViewState


LOGGER = logging.getLogger(__name__)


def generate_mind_map(text: str, config: LayoutConfig) -> tuple[ParsedContent, MindMapGraph]:
    """Run the full pipeline on raw text and return the parse and positioned graph."""
    parsed = parse_text(text)
    LOGGER.info(
        "Parsed content: title=%r sections=%d max_depth=%d has_code=%s has_list=%s",
        parsed.title,
        parsed.metadata.total_sections,
        parsed.metadata.max_depth,
        parsed.metadata.has_code,
        parsed.metadata.has_list,
    )
    graph = build_mind_map(parsed)
    apply_layout(graph, config)
    return parsed, graph


@dataclass
class MindMapSession:
    """Holds the current graph, its layout config, and its view state.

    Every generation replaces the graph and view state wholesale; nothing
    from a previous graph is merged into the new one.
    """

    config: LayoutConfig = field(default_factory=LayoutConfig)
    parsed: ParsedContent | None = None
    graph: MindMapGraph | None = None
    view: ViewState | None = None

    def generate_from_text(self, text: str) -> MindMapGraph:
        try:
            parsed, graph = generate_mind_map(text, self.config)
        except Exception:
            LOGGER.exception("Failed to generate mind map")
            raise
        self._install(graph, parsed)
        return graph

    def load_snapshot(self, data: dict[str, Any]) -> MindMapGraph:
        return self.load_graph(snapshot_to_graph(data))

    def load_graph(self, graph: MindMapGraph) -> MindMapGraph:
        self._install(graph, None)
        return graph

    def update_layout(self, **changes: Any) -> LayoutConfig:
        self.config = replace(self.config, **changes)
        if self.graph is not None:
            apply_layout(self.graph, self.config)
        return self.config

    def toggle_collapse(self, node_id: str) -> None:
        if self.view is not None:
            self.view.toggle_collapse(node_id)

    def select(self, node_id: str, multi_select: bool = False) -> None:
        if self.view is not None:
            self.view.select(node_id, multi_select=multi_select)

    def clear_selection(self) -> None:
        if self.view is not None:
            self.view.clear_selection()

    def search(self, query: str) -> set[str]:
        if self.view is None:
            return set()
        return self.view.search(query)

    def clear_search(self) -> None:
        if self.view is not None:
            self.view.clear_search()

    def reset(self) -> None:
        self.config = LayoutConfig()
        self.parsed = None
        self.graph = None
        self.view = None

    def _install(self, graph: MindMapGraph, parsed: ParsedContent | None) -> None:
        self.parsed = parsed
        self.graph = graph
        self.view = ViewState(graph)
