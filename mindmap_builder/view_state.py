"""Selection, search, and collapse state over a mind map graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from mindmap_builder.graph import MindMapGraph


@dataclass
class ViewState:
    """Transient view state keyed by node id.

    Collapse lives on the node itself; selection and search hits are id
    sets held here. Every operation ignores ids that are not in the graph.
    """

    graph: MindMapGraph
    selected_ids: set[str] = field(default_factory=set)
    search_hit_ids: set[str] = field(default_factory=set)

    @property
    def collapsed_ids(self) -> set[str]:
        return {node.node_id for node in self.graph if node.collapsed}

    def toggle_collapse(self, node_id: str) -> None:
        node = self.graph.get(node_id)
        if node is None:
            return
        node.collapsed = not node.collapsed

    def select(self, node_id: str, multi_select: bool = False) -> None:
        if node_id not in self.graph:
            return
        if not multi_select:
            self.selected_ids = {node_id}
        elif node_id in self.selected_ids:
            self.selected_ids.discard(node_id)
        else:
            self.selected_ids.add(node_id)

    def clear_selection(self) -> None:
        self.selected_ids = set()

    def search(self, query: str) -> set[str]:
        if not query.strip():
            self.search_hit_ids = set()
            return set()

        needle = query.lower()
        self.search_hit_ids = {
            node.node_id
            for node in self.graph
            if needle in node.label.lower() or needle in node.content.lower()
        }
        return set(self.search_hit_ids)

    def clear_search(self) -> None:
        self.search_hit_ids = set()

    def visible_node_ids(self) -> list[str]:
        """Ids in pre-order, skipping descendants of collapsed nodes."""
        visible: list[str] = []
        stack = [self.graph.root_id]
        while stack:
            node = self.graph.get(stack.pop())
            visible.append(node.node_id)
            if not node.collapsed:
                stack.extend(reversed(node.children))
        return visible
