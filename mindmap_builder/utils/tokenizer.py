"""Tokenization helpers for mixed Chinese and Latin text."""

from __future__ import annotations

import re

import jieba


EN_TOKEN_RE = re.compile(r"[A-Za-z0-9_]+")
CJK_CHAR_RE = re.compile(r"[\u4e00-\u9fff]")
WORD_CHAR_RE = re.compile(r"[\w\u4e00-\u9fff]", re.UNICODE)
STOPWORDS = {
    "the",
    "a",
    "an",
    "and",
    "or",
    "is",
    "are",
    "to",
    "of",
    "in",
    "on",
    "for",
    "with",
    "的",
    "了",
    "和",
    "是",
    "在",
}


def _contains_cjk(text: str) -> bool:
    return bool(CJK_CHAR_RE.search(text))


def tokenize(text: str) -> list[str]:
    normalized = text.strip().lower()
    if not normalized:
        return []

    if _contains_cjk(normalized):
        tokens = [
            item.strip()
            for item in jieba.cut(normalized)
            if item.strip() and WORD_CHAR_RE.search(item)
        ]
    else:
        tokens = EN_TOKEN_RE.findall(normalized)

    return [token for token in tokens if token not in STOPWORDS]
