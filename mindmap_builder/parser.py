"""Structural parsing of free text into a section tree."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from mindmap_builder.classifier import HEADING, classify_line, is_list_line
from mindmap_builder.ids import IdGenerator


LOGGER = logging.getLogger(__name__)

UNTITLED = "Untitled"


@dataclass(frozen=True, slots=True)
class Section:
    section_id: str
    kind: str
    level: int
    text: str
    raw_line: str
    children: list["Section"] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ParseMetadata:
    total_sections: int
    max_depth: int
    has_code: bool
    has_list: bool


@dataclass(frozen=True, slots=True)
class ParsedContent:
    title: str
    sections: list[Section]
    metadata: ParseMetadata


def iter_sections(sections: list[Section]) -> list[Section]:
    """Return all sections in document pre-order."""
    ordered: list[Section] = []
    stack = list(reversed(sections))
    while stack:
        section = stack.pop()
        ordered.append(section)
        stack.extend(reversed(section.children))
    return ordered


def _max_depth(sections: list[Section]) -> int:
    deepest = 0
    stack = [(section, 0) for section in sections]
    while stack:
        section, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in section.children)
    return deepest


def _extract_title(lines: list[str], sections: list[Section]) -> str:
    for section in iter_sections(sections):
        if section.kind == HEADING and section.text:
            return section.text
    if lines:
        return lines[0].strip()
    return UNTITLED


def _build_sections(lines: list[str], ids: IdGenerator) -> list[Section]:
    roots: list[Section] = []
    stack: list[Section] = []

    for line in lines:
        classified = classify_line(line)
        section = Section(
            section_id=ids.next_id(),
            kind=classified.kind,
            level=classified.level,
            text=classified.text,
            raw_line=line.strip(),
        )

        while stack and stack[-1].level >= section.level:
            stack.pop()

        if stack:
            stack[-1].children.append(section)
        else:
            roots.append(section)

        # Only headings open a nesting scope; list items keep their
        # indentation level but never accept children.
        if section.kind == HEADING:
            stack.append(section)

    return roots


def parse_text(text: str, ids: IdGenerator | None = None) -> ParsedContent:
    """Parse text into a section tree with title and metadata."""
    generator = ids or IdGenerator("section")
    lines = [line.rstrip() for line in text.splitlines() if line.strip()]
    sections = _build_sections(lines, generator)

    metadata = ParseMetadata(
        total_sections=len(iter_sections(sections)),
        max_depth=_max_depth(sections),
        has_code="`" in text,
        has_list=any(is_list_line(line) for line in lines),
    )
    title = _extract_title(lines, sections)
    LOGGER.debug(
        "Parsed %d lines into %d sections (max_depth=%d, title=%r)",
        len(lines),
        metadata.total_sections,
        metadata.max_depth,
        title,
    )
    return ParsedContent(title=title, sections=sections, metadata=metadata)


def parse_file(path: Path) -> ParsedContent:
    """Load a UTF-8 text file and parse it."""
    return parse_text(path.read_text(encoding="utf-8"))
