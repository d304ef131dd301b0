"""Node label formatting."""

from __future__ import annotations

import re


MAX_LABEL_CHARS = 50
ELLIPSIS = "..."
UNTITLED_LABEL = "Untitled"

LEADING_MARKER_RE = re.compile(
    r"^(?:#{1,6}\s+|[-*+•·]\s+|\d+(?:\.\d+)*[.)]\s+|\d+(?:\.\d+)+\s+|[一二三四五六七八九十]+[、.．]\s*|>\s*)"
)
BOLD_ITALIC_RE = re.compile(r"(\*\*|(?<!\w)__|\*|(?<!\w)_)(.+?)\1")
INLINE_CODE_RE = re.compile(r"`+([^`]*)`+")
MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\([^\)]+\)")
MULTI_SPACE_RE = re.compile(r"\s+")


def strip_markdown(text: str) -> str:
    cleaned = text.strip()
    for _ in range(3):
        updated = LEADING_MARKER_RE.sub("", cleaned, count=1)
        if updated == cleaned:
            break
        cleaned = updated
    cleaned = MARKDOWN_LINK_RE.sub(r"\1", cleaned)
    cleaned = INLINE_CODE_RE.sub(r"\1", cleaned)
    # Nested emphasis (***x***, **_x_**) needs more than one pass.
    for _ in range(3):
        updated = BOLD_ITALIC_RE.sub(r"\2", cleaned)
        if updated == cleaned:
            break
        cleaned = updated
    cleaned = cleaned.replace("`", "")
    return MULTI_SPACE_RE.sub(" ", cleaned).strip()


def truncate_label(text: str, max_chars: int = MAX_LABEL_CHARS) -> str:
    if len(text) <= max_chars:
        return text
    return text[: max(max_chars - len(ELLIPSIS), 1)].rstrip() + ELLIPSIS


def format_label(text: str, max_chars: int = MAX_LABEL_CHARS) -> str:
    """Turn section text into a short display label."""
    cleaned = strip_markdown(text)
    if not cleaned:
        return UNTITLED_LABEL
    return truncate_label(cleaned, max_chars=max_chars)
