"""Word-level matching primitives for the fuzzy locator tier.

Pure text operations with zero domain dependencies.
"""
from __future__ import annotations

import math


def qualifying_words(text: str, min_length: int = 3) -> list[str]:
    """Split *text* on whitespace and keep words of at least *min_length* chars.

    Short words ("a", "of", "to") occur everywhere and make poor anchors.

    Args:
        text: Sanitized text to tokenize.
        min_length: Shortest word kept.

    Returns:
        Words in their original order and casing. Duplicates are kept.
    """
    return [word for word in text.split() if len(word) >= min_length]


def required_hits(total: int, ratio: float) -> int:
    """Minimum number of found words for *total* words at overlap *ratio*."""
    return math.ceil(total * ratio)


def word_overlap(text_lower: str, words: list[str]) -> list[str]:
    """Return the words that occur anywhere in text.

    Matching is case-insensitive and not limited to word boundaries.
    Repeated words in *words* are checked (and returned) separately.

    Args:
        text_lower: Pre-lowercased text to search.
        words: Words to look for.

    Returns:
        Found words, in the order of *words*.
    """
    return [word for word in words if word.lower() in text_lower]
