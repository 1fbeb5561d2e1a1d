"""
Snippet Generation for Search Results

Picks the sentence of a document that mentions the most query terms.
"""

import re
from typing import Sequence

SNIPPET_LENGTH = 200
ELLIPSIS = "..."

_SENTENCE_END = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Split on runs of '.', '!' and '?', dropping blank fragments."""
    if not text:
        return []
    return [s for s in _SENTENCE_END.split(text) if s.strip()]


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def generate_snippet(
    text: str,
    terms: Sequence[str],
    max_length: int = SNIPPET_LENGTH,
) -> str:
    """
    Generate a snippet from the best matching sentence.

    Each sentence scores one point per query term it contains
    (case-insensitive substring match, so "fund" also counts inside
    "funding"). Among equally scored sentences the first one wins.

    Args:
        text: The document text.
        terms: Lower-cased query terms.
        max_length: Maximum snippet length, ellipsis included.

    Returns:
        The best sentence, trimmed and truncated to max_length. When no
        sentence matches, the first max_length characters of the text
        followed by an ellipsis if the text is longer.
    """
    if not text:
        return ""

    best_sentence = ""
    best_score = 0
    for sentence in split_sentences(text):
        lower = sentence.lower()
        score = sum(1 for term in terms if term.lower() in lower)
        if score > best_score:
            best_sentence, best_score = sentence, score

    if best_score > 0:
        return _truncate(best_sentence.strip(), max_length)

    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text
