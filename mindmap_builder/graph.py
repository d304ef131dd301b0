"""Mind map node graph and its construction from parsed sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Iterator, Optional

from mindmap_builder.ids import IdGenerator
from mindmap_builder.labels import format_label
from mindmap_builder.parser import ParsedContent, Section


LOGGER = logging.getLogger(__name__)

ROOT_KIND = "root"

LEVEL_COLORS = (
    "#4F46E5",
    "#059669",
    "#DC2626",
    "#D97706",
    "#7C3AED",
    "#DB2777",
    "#0891B2",
    "#65A30D",
)
LEVEL_SIZES = (16, 14, 12, 10, 10, 10)
DEFAULT_SIZE = 10


def color_for_level(level: int) -> str:
    return LEVEL_COLORS[level % len(LEVEL_COLORS)]


def size_for_level(level: int) -> int:
    if 0 <= level < len(LEVEL_SIZES):
        return LEVEL_SIZES[level]
    return DEFAULT_SIZE


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MindMapNode:
    node_id: str
    label: str
    level: int
    parent_id: Optional[str] = None
    children: list[str] = field(default_factory=list)
    position: Optional[tuple[float, float]] = None
    collapsed: bool = False
    color: str = LEVEL_COLORS[0]
    size: int = LEVEL_SIZES[0]
    kind: str = ROOT_KIND
    content: str = ""

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0


class MindMapGraph:
    """Arena of nodes keyed by id, with parent/children stored as ids.

    Links are only created through :meth:`add_node`, which keeps
    ``parent_id`` and the parent's ``children`` list in agreement.
    """

    def __init__(
        self,
        root: MindMapNode,
        title: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        if root.parent_id is not None or root.children:
            raise ValueError("Root node must have no parent and no children when the graph is created.")
        root.level = 0
        self._nodes: dict[str, MindMapNode] = {root.node_id: root}
        self.root_id = root.node_id
        self.title = title if title is not None else root.label
        self.created_at = created_at or _utc_now()
        self.updated_at = updated_at or self.created_at

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[MindMapNode]:
        return iter(self._nodes.values())

    @property
    def root(self) -> MindMapNode:
        return self._nodes[self.root_id]

    def get(self, node_id: str) -> MindMapNode | None:
        return self._nodes.get(node_id)

    def node_ids(self) -> list[str]:
        return list(self._nodes)

    def add_node(self, node: MindMapNode, parent_id: str) -> MindMapNode:
        parent = self._nodes.get(parent_id)
        if parent is None:
            raise KeyError(f"Unknown parent node: {parent_id}")
        if node.node_id in self._nodes:
            raise ValueError(f"Duplicate node id: {node.node_id}")
        node.parent_id = parent_id
        node.children = []
        self._nodes[node.node_id] = node
        parent.children.append(node.node_id)
        return node

    def children_of(self, node_id: str) -> list[MindMapNode]:
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [self._nodes[child_id] for child_id in node.children]

    def depth_first(self) -> list[MindMapNode]:
        """Return all nodes in pre-order, starting at the root."""
        ordered: list[MindMapNode] = []
        stack = [self.root_id]
        while stack:
            node = self._nodes[stack.pop()]
            ordered.append(node)
            stack.extend(reversed(node.children))
        return ordered

    def ancestors(self, node_id: str) -> list[MindMapNode]:
        chain: list[MindMapNode] = []
        node = self._nodes.get(node_id)
        while node is not None and node.parent_id is not None:
            node = self._nodes.get(node.parent_id)
            if node is not None:
                chain.append(node)
        return chain

    def touch(self) -> None:
        self.updated_at = _utc_now()


def validate_graph(graph: MindMapGraph) -> list[str]:
    """Report structural problems; an empty list means the graph is consistent."""
    problems: list[str] = []
    roots = [node for node in graph if node.parent_id is None]
    if len(roots) != 1 or roots[0].node_id != graph.root_id:
        problems.append(f"Expected exactly one root, found {len(roots)}")
    if graph.root.level != 0:
        problems.append(f"Root level is {graph.root.level}, expected 0")

    for node in graph:
        if node.parent_id is not None:
            parent = graph.get(node.parent_id)
            if parent is None:
                problems.append(f"Dangling parent reference: {node.node_id} -> {node.parent_id}")
            elif node.node_id not in parent.children:
                problems.append(f"Parent {parent.node_id} does not list child {node.node_id}")
            elif node.level != parent.level + 1:
                problems.append(f"Level mismatch: {node.node_id} L{node.level} under L{parent.level}")

        expected = [other.node_id for other in graph if other.parent_id == node.node_id]
        if sorted(expected) != sorted(node.children):
            problems.append(f"Children of {node.node_id} do not match parent references")

    reachable = {node.node_id for node in graph.depth_first()} if not problems else set()
    if not problems and len(reachable) != len(graph):
        problems.append("Graph contains nodes unreachable from the root")
    return problems


def _node_from_section(section: Section, level: int, ids: IdGenerator) -> MindMapNode:
    return MindMapNode(
        node_id=ids.next_id(),
        label=format_label(section.text),
        level=level,
        color=color_for_level(level),
        size=size_for_level(level),
        kind=section.kind,
        content=section.text,
    )


def build_mind_map(parsed: ParsedContent, ids: IdGenerator | None = None) -> MindMapGraph:
    """Build a node graph rooted at a synthetic title node."""
    generator = ids or IdGenerator("node")
    root = MindMapNode(
        node_id=generator.next_id(),
        label=format_label(parsed.title),
        level=0,
        color=color_for_level(0),
        size=size_for_level(0),
        kind=ROOT_KIND,
        content=parsed.title,
    )
    graph = MindMapGraph(root=root, title=parsed.title)

    stack: list[tuple[Section, str, int]] = [
        (section, root.node_id, 1) for section in reversed(parsed.sections)
    ]
    while stack:
        section, parent_id, level = stack.pop()
        node = graph.add_node(_node_from_section(section, level, generator), parent_id)
        stack.extend((child, node.node_id, level + 1) for child in reversed(section.children))

    LOGGER.debug("Built mind map with %d nodes (title=%r)", len(graph), graph.title)
    return graph
