"""Single-line classification for structural parsing."""

from __future__ import annotations

from dataclasses import dataclass
import re


HEADING = "heading"
LIST = "list"
CODE = "code"
QUOTE = "quote"
PARAGRAPH = "paragraph"

SECTION_KINDS = (HEADING, LIST, CODE, QUOTE, PARAGRAPH)

MAX_HEADING_LEVEL = 6
CHINESE_NUMERALS = "一二三四五六"

ATX_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
CHINESE_HEADING_RE = re.compile(rf"^([{CHINESE_NUMERALS}])[、.．:：,，]\s*(.*)$")
DECIMAL_HEADING_RE = re.compile(r"^((?:\d+\.)+\d*)\s+(.+)$")
BULLET_RE = re.compile(r"^([-*+•·])\s+(.*)$")
ORDERED_ITEM_RE = re.compile(r"^(\d+)[.)]\s+(.*)$")
QUOTE_RE = re.compile(r"^>\s*")
NUMERIC_GROUP_RE = re.compile(r"\d+")


@dataclass(frozen=True, slots=True)
class LineClass:
    kind: str
    level: int
    text: str


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _decimal_depth(numbering: str) -> int:
    return min(len(NUMERIC_GROUP_RE.findall(numbering)), MAX_HEADING_LEVEL)


def classify_line(line: str) -> LineClass:
    """Classify one non-blank line into a section kind and nesting level.

    Patterns overlap (``1. Intro`` is both a decimal heading and an ordered
    list item), so the checks run in a fixed order and the first match
    wins. Leading indentation is only significant for list items; an
    indented single-group ``N.`` line is treated as a list item, while
    dotted numbering such as ``1.2`` is a heading at any indentation.
    """
    normalized = line.lstrip("\ufeff")
    stripped = normalized.strip()
    indent = _indent_width(normalized)

    heading_match = ATX_HEADING_RE.match(stripped)
    if heading_match is not None:
        return LineClass(HEADING, len(heading_match.group(1)), heading_match.group(2).strip())

    chinese_match = CHINESE_HEADING_RE.match(stripped)
    if chinese_match is not None:
        level = CHINESE_NUMERALS.index(chinese_match.group(1)) + 1
        return LineClass(HEADING, level, chinese_match.group(2).strip())

    decimal_match = DECIMAL_HEADING_RE.match(stripped)
    if decimal_match is not None:
        depth = _decimal_depth(decimal_match.group(1))
        # An indented single "N." is an ordered list item.
        if indent == 0 or depth > 1:
            return LineClass(HEADING, depth, decimal_match.group(2).strip())

    list_match = BULLET_RE.match(stripped) or ORDERED_ITEM_RE.match(stripped)
    if list_match is not None:
        return LineClass(LIST, 1 + indent // 2, list_match.group(2).strip())

    if stripped.startswith("`"):
        return LineClass(CODE, 1, stripped.replace("`", "").strip())

    if stripped.startswith(">"):
        return LineClass(QUOTE, 1, QUOTE_RE.sub("", stripped, count=1).strip())

    return LineClass(PARAGRAPH, 1, stripped)


def is_list_line(line: str) -> bool:
    stripped = line.strip()
    return BULLET_RE.match(stripped) is not None or ORDERED_ITEM_RE.match(stripped) is not None
