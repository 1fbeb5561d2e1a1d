"""
Text Analyzer (Shared Kernel)

Splits text into searchable terms. Used identically for documents and
queries so that scoring compares terms from the same vocabulary.
"""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


class TextAnalyzer:
    def __init__(self, min_length: int = 3):
        # Terms shorter than min_length are dropped ("a", "to", "of" ...)
        self.min_length = min_length

    def tokenize(self, text: str) -> list[str]:
        """
        Lower-case text and split it on runs of non-alphanumeric characters.

        Only ASCII letters and digits count as term characters; anything else
        (punctuation, whitespace, accented letters) separates terms.
        """
        if not text:
            return []
        return [t for t in _NON_ALNUM.split(text.lower()) if len(t) >= self.min_length]

    def split_terms(self, text: str) -> list[str]:
        """Split raw query text on whitespace, keeping case and punctuation."""
        if not text:
            return []
        return [t for t in _WHITESPACE.split(text) if len(t) >= self.min_length]


# Global instance
analyzer = TextAnalyzer()


def tokenize(text: str) -> list[str]:
    return analyzer.tokenize(text)
