"""Keyword and relationship extraction over parsed content."""

from __future__ import annotations

from collections import Counter
from typing import Any

from mindmap_builder.parser import ParsedContent, Section, iter_sections
from mindmap_builder.utils.tokenizer import tokenize


DEFAULT_KEYWORD_LIMIT = 10
MIN_KEYWORD_CHARS = 2


def _is_keyword(token: str) -> bool:
    return len(token) >= MIN_KEYWORD_CHARS and not token.isdigit()


def extract_keywords(text: str, limit: int = DEFAULT_KEYWORD_LIMIT) -> list[str]:
    """Return the most frequent tokens, first-seen order breaking ties."""
    counts = Counter(token for token in tokenize(text) if _is_keyword(token))
    return [token for token, _ in counts.most_common(max(limit, 0))]


def _section_text(section: Section) -> str:
    return " ".join(item.text for item in iter_sections([section]))


def extract_structure(parsed: ParsedContent, keyword_limit: int = DEFAULT_KEYWORD_LIMIT) -> dict[str, Any]:
    headings: list[str] = []
    hierarchy: dict[str, list[str]] = {}

    stack = [(section, None) for section in reversed(parsed.sections)]
    while stack:
        section, parent_text = stack.pop()
        headings.append(section.text)
        if parent_text is not None:
            hierarchy.setdefault(parent_text, []).append(section.text)
        stack.extend((child, section.text) for child in reversed(section.children))

    all_text = " ".join(_section_text(section) for section in parsed.sections)
    return {
        "headings": headings,
        "hierarchy": hierarchy,
        "keywords": extract_keywords(all_text, limit=keyword_limit),
    }


def identify_relationships(parsed: ParsedContent, min_shared_tokens: int = 3) -> dict[str, Any]:
    """Link sections whose text (including descendants) shares enough tokens.

    Returns ``{"related": {text: [other texts]}, "concepts": [texts]}`` where
    ``concepts`` lists every section text in pre-order.
    """
    sections = iter_sections(parsed.sections)
    token_sets = [
        {token for token in tokenize(_section_text(section)) if _is_keyword(token)}
        for section in sections
    ]

    related: dict[str, list[str]] = {}
    for index, section in enumerate(sections):
        for other_index, other in enumerate(sections):
            if index == other_index or section.text == other.text:
                continue
            if len(token_sets[index] & token_sets[other_index]) >= min_shared_tokens:
                related.setdefault(section.text, []).append(other.text)
    return {"related": related, "concepts": [section.text for section in sections]}
