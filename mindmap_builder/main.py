"""CLI entrypoint for building and laying out mind maps."""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import os
from pathlib import Path
import sys

from mindmap_builder.analysis import extract_keywords
from mindmap_builder.config import load_layout_config
from mindmap_builder.graph import MindMapGraph
from mindmap_builder.layout import LAYOUT_TYPES, ORIENTATIONS, LayoutConfig
from mindmap_builder.session import MindMapSession
from mindmap_builder.snapshot import (
    SnapshotError,
    export_snapshot_json,
    graph_to_outline,
    load_snapshot_json,
    print_mind_map,
)


LOGGER = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".mindmap.json"


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a positioned mind map from text or Markdown.")
    parser.add_argument(
        "input",
        help=f"Text/Markdown file, a *{SNAPSHOT_SUFFIX} snapshot, or '-' for stdin.",
    )
    parser.add_argument("--layout", choices=LAYOUT_TYPES, default=None, help="Layout strategy.")
    parser.add_argument("--orientation", choices=ORIENTATIONS, default=None, help="Tree layout orientation.")
    parser.add_argument("--node-spacing", type=float, default=None, help="Sibling spacing.")
    parser.add_argument("--level-spacing", type=float, default=None, help="Spacing between depth levels.")
    parser.add_argument("--iterations", type=int, default=None, help="Network layout iteration count.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Snapshot JSON path. Defaults to <input_stem>{SNAPSHOT_SUFFIX}.",
    )
    parser.add_argument("--outline", type=Path, default=None, help="Also write a plain-text outline here.")
    parser.add_argument("--search", default=None, help="Report nodes whose label contains this text.")
    parser.add_argument("--keywords", action="store_true", help="Print the most frequent keywords.")
    parser.add_argument(
        "--log-level",
        default=os.getenv("MINDMAP_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity for progress output.",
    )
    return parser


def _configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="[%(levelname)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )


def _resolve_config(args: argparse.Namespace) -> LayoutConfig:
    config = load_layout_config(load_dotenv=True)
    overrides = {
        "layout_type": args.layout,
        "orientation": args.orientation,
        "node_spacing": args.node_spacing,
        "level_spacing": args.level_spacing,
        "iterations": args.iterations,
    }
    return replace(config, **{key: value for key, value in overrides.items() if value is not None})


def _default_output_path(input_arg: str) -> Path:
    if input_arg == "-":
        return Path("stdin" + SNAPSHOT_SUFFIX)
    path = Path(input_arg)
    if path.name.endswith(SNAPSHOT_SUFFIX):
        stem = path.name[: -len(SNAPSHOT_SUFFIX)]
        return path.with_name(f"{stem}.relayout{SNAPSHOT_SUFFIX}")
    return path.with_suffix(SNAPSHOT_SUFFIX)


def _print_summary(graph: MindMapGraph, config: LayoutConfig) -> None:
    leaves = sum(1 for node in graph if node.is_leaf and node.level > 0)
    depth = max(node.level for node in graph)
    print(
        "Build report: "
        f"nodes={len(graph)}, "
        f"leaves={leaves}, "
        f"depth={depth}, "
        f"layout={config.layout_type}"
    )


def run_cli(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    config = _resolve_config(args)
    session = MindMapSession(config=config)
    text = ""

    try:
        if args.input == "-":
            text = sys.stdin.read()
            session.generate_from_text(text)
        elif args.input.endswith(SNAPSHOT_SUFFIX):
            LOGGER.info("Loading snapshot: %s", args.input)
            graph = load_snapshot_json(Path(args.input))
            session.load_graph(graph)
            session.update_layout()
        else:
            LOGGER.info("Reading text source: %s", args.input)
            text = Path(args.input).read_text(encoding="utf-8")
            session.generate_from_text(text)
    except OSError as exc:
        print(f"Failed to read input: {exc}", file=sys.stderr)
        return 1
    except (SnapshotError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    graph = session.graph
    _print_summary(graph, config)
    print_mind_map(graph)

    if args.search is not None:
        hits = session.search(args.search)
        labels = [node.label for node in graph.depth_first() if node.node_id in hits]
        print(f"Search '{args.search}': {len(labels)} hit(s)")
        for label in labels:
            print(f"  - {label}")

    if args.keywords:
        source = text or "\n".join(node.content for node in graph)
        print(f"Keywords: {', '.join(extract_keywords(source))}")

    output_path = args.output or _default_output_path(args.input)
    try:
        export_snapshot_json(graph, output_path)
        if args.outline is not None:
            args.outline.parent.mkdir(parents=True, exist_ok=True)
            args.outline.write_text(graph_to_outline(graph) + "\n", encoding="utf-8")
    except OSError as exc:
        print(f"Failed to write output: {exc}", file=sys.stderr)
        return 1

    print(f"Snapshot exported to: {output_path}")
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
