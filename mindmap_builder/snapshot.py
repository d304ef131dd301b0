"""Graph snapshots: JSON interchange, plain outlines, and console rendering."""

from __future__ import annotations

from datetime import datetime
import json
import logging
from pathlib import Path
from typing import Any

from mindmap_builder.graph import MindMapGraph, MindMapNode, color_for_level, size_for_level


LOGGER = logging.getLogger(__name__)

SNAPSHOT_VERSION = "1"


class SnapshotError(ValueError):
    """Raised when a snapshot cannot be turned back into a graph."""


def _node_to_dict(node: MindMapNode) -> dict[str, Any]:
    return {
        "id": node.node_id,
        "label": node.label,
        "level": node.level,
        "parent_id": node.parent_id,
        "children": list(node.children),
        "position": list(node.position) if node.position is not None else None,
        "collapsed": node.collapsed,
        "color": node.color,
        "size": node.size,
        "kind": node.kind,
        "content": node.content,
    }


def graph_to_snapshot(graph: MindMapGraph) -> dict[str, Any]:
    """Serialize a graph into a JSON-compatible dictionary."""
    return {
        "version": SNAPSHOT_VERSION,
        "title": graph.title,
        "created_at": graph.created_at.isoformat(),
        "updated_at": graph.updated_at.isoformat(),
        "root_id": graph.root_id,
        "nodes": [_node_to_dict(node) for node in graph.depth_first()],
    }


def _parse_timestamp(raw: Any) -> datetime | None:
    if not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        LOGGER.debug("Ignoring unreadable snapshot timestamp %r", raw)
        return None


def _parse_position(raw: Any, node_id: str) -> tuple[float, float] | None:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise SnapshotError(f"Node {node_id} has an invalid position: {raw!r}")
    try:
        return (float(raw[0]), float(raw[1]))
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"Node {node_id} has an invalid position: {raw!r}") from exc


def _parse_size(raw: Any, node_id: str, level: int) -> int:
    if raw is None:
        return size_for_level(level)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise SnapshotError(f"Node {node_id} has an invalid size: {raw!r}")
    return int(raw)


def _child_ids(row: dict[str, Any], node_id: str) -> list[str]:
    raw = row.get("children", [])
    if not isinstance(raw, list):
        raise SnapshotError(f"Node {node_id} has a non-list 'children' value: {raw!r}")
    return [str(child_id) for child_id in raw]


def _node_from_dict(row: dict[str, Any], level: int) -> MindMapNode:
    node_id = str(row["id"])
    return MindMapNode(
        node_id=node_id,
        label=str(row.get("label", "")),
        level=level,
        position=_parse_position(row.get("position"), node_id),
        collapsed=bool(row.get("collapsed", False)),
        color=str(row.get("color") or color_for_level(level)),
        size=_parse_size(row.get("size"), node_id, level),
        kind=str(row.get("kind", "paragraph" if level else "root")),
        content=str(row.get("content", row.get("label", ""))),
    )


def snapshot_to_graph(data: dict[str, Any]) -> MindMapGraph:
    """Rebuild a graph from :func:`graph_to_snapshot` output."""
    rows = data.get("nodes") if isinstance(data, dict) else None
    if not isinstance(rows, list) or not rows:
        raise SnapshotError("Snapshot must contain a non-empty 'nodes' list.")

    by_id: dict[str, dict[str, Any]] = {}
    for row in rows:
        if not isinstance(row, dict) or "id" not in row:
            raise SnapshotError("Every snapshot node needs an 'id'.")
        node_id = str(row["id"])
        if node_id in by_id:
            raise SnapshotError(f"Duplicate node id in snapshot: {node_id}")
        by_id[node_id] = row

    roots = [node_id for node_id, row in by_id.items() if row.get("parent_id") is None]
    root_id = str(data.get("root_id") or (roots[0] if len(roots) == 1 else ""))
    if root_id not in by_id or roots != [root_id]:
        raise SnapshotError(f"Snapshot must have exactly one root node, found {len(roots)}.")

    root = _node_from_dict(by_id[root_id], level=0)
    graph = MindMapGraph(
        root=root,
        title=str(data.get("title", root.label)),
        created_at=_parse_timestamp(data.get("created_at")),
        updated_at=_parse_timestamp(data.get("updated_at")),
    )

    stack = [(root_id, 0)]
    while stack:
        parent_id, depth = stack.pop()
        child_ids = _child_ids(by_id[parent_id], parent_id)
        for child_id in child_ids:
            row = by_id.get(child_id)
            if row is None:
                raise SnapshotError(f"Node {parent_id} lists unknown child {child_id}.")
            if str(row.get("parent_id")) != parent_id:
                raise SnapshotError(f"Node {child_id} does not point back to parent {parent_id}.")
            if child_id in graph:
                raise SnapshotError(f"Node {child_id} appears under more than one parent.")
            graph.add_node(_node_from_dict(row, level=depth + 1), parent_id)
        stack.extend((child_id, depth + 1) for child_id in reversed(child_ids))

    if len(graph) != len(by_id):
        missing = sorted(set(by_id) - set(graph.node_ids()))
        raise SnapshotError(f"Snapshot nodes are not reachable from the root: {', '.join(missing)}")
    return graph


def export_snapshot_json(graph: MindMapGraph, output_path: Path) -> None:
    """Write the graph snapshot to a JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(graph_to_snapshot(graph), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    LOGGER.info("Snapshot written: %s (%d nodes)", output_path, len(graph))


def load_snapshot_json(input_path: Path) -> MindMapGraph:
    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
    return snapshot_to_graph(data)


def graph_to_outline(graph: MindMapGraph) -> str:
    """Render the graph as an indented plain-text outline."""
    lines: list[str] = []
    stack = [(graph.root_id, 0)]
    while stack:
        node_id, depth = stack.pop()
        node = graph.get(node_id)
        if depth == 0:
            lines.append(node.label)
        else:
            lines.append(f"{'  ' * (depth - 1)}- {node.label}")
        stack.extend((child_id, depth + 1) for child_id in reversed(node.children))
    return "\n".join(lines)


def _format_position(node: MindMapNode) -> str:
    if node.position is None:
        return "unplaced"
    return f"({node.position[0]:.1f}, {node.position[1]:.1f})"


def print_mind_map(graph: MindMapGraph) -> None:
    """Print a readable ASCII tree with positions."""
    print(f"Mind Map: {graph.title} ({len(graph)} nodes)")
    print("=" * 60)
    root = graph.root
    print(f"[L0] {root.label} {_format_position(root)}")

    children = graph.children_of(root.node_id)
    stack = [
        (child, "", index == len(children) - 1)
        for index, child in reversed(list(enumerate(children)))
    ]
    while stack:
        node, prefix, is_last = stack.pop()
        connector = "`-- " if is_last else "|-- "
        collapsed_mark = " [collapsed]" if node.collapsed else ""
        print(f"{prefix}{connector}[L{node.level}] {node.label} {_format_position(node)}{collapsed_mark}")

        child_prefix = prefix + ("    " if is_last else "|   ")
        children = graph.children_of(node.node_id)
        stack.extend(
            (child, child_prefix, index == len(children) - 1)
            for index, child in reversed(list(enumerate(children)))
        )
