"""Relocate a text fragment inside a sanitized document.

Offsets carried by upstream annotations are computed against text that may
still hold HTML or differ in whitespace, so they are not trusted. Instead the
fragment is found again by content, trying progressively looser tiers:

1. exact substring (leftmost, case-sensitive)
2. case-insensitive substring, reported with the document's own casing
3. fuzzy word-overlap window seeded by the first long word of the fragment
4. fallback prefix span ``[0, min(len(fragment), len(document)))``

The first tier that yields a span wins. ``locate`` is total: every input
produces an in-bounds ``MatchResult`` whose ``matched_text`` equals the
sanitized document sliced at its offsets.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from reanchor.sanitizer import sanitize
from reanchor.textmatch import qualifying_words, required_hits, word_overlap

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_CONTEXT_WINDOW = 50
"""Characters of slack on each side of the anchor word for the fuzzy tier."""

DEFAULT_OVERLAP_RATIO = 0.6
"""Fraction of the fragment's qualifying words the fuzzy window must contain."""

DEFAULT_MIN_WORD_LENGTH = 3
"""Shortest word usable as a fuzzy anchor or overlap word."""


@dataclass(frozen=True, slots=True)
class LocatorConfig:
    """Tunables for the fuzzy tier. Raising recall lowers precision."""

    context_window: int = DEFAULT_CONTEXT_WINDOW
    overlap_ratio: float = DEFAULT_OVERLAP_RATIO
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH

    def __post_init__(self) -> None:
        if self.context_window < 0:
            raise ValueError(
                f"context_window must be non-negative, got {self.context_window}"
            )
        if not 0.0 < self.overlap_ratio <= 1.0:
            raise ValueError(
                f"overlap_ratio must be in (0, 1], got {self.overlap_ratio}"
            )
        if self.min_word_length < 1:
            raise ValueError(
                f"min_word_length must be at least 1, got {self.min_word_length}"
            )


DEFAULT_CONFIG = LocatorConfig()


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


class MatchQuality(StrEnum):
    """Which tier of the cascade produced a span."""

    EMPTY = "empty"
    EXACT = "exact"
    CASE_INSENSITIVE = "case-insensitive"
    FUZZY = "fuzzy"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Half-open span ``[start_index, end_index)`` into a sanitized document."""

    start_index: int
    end_index: int
    matched_text: str
    quality: MatchQuality

    def __post_init__(self) -> None:
        if not 0 <= self.start_index <= self.end_index:
            raise ValueError(
                f"invalid span [{self.start_index}, {self.end_index})"
            )
        if len(self.matched_text) != self.end_index - self.start_index:
            raise ValueError(
                f"matched_text length {len(self.matched_text)} does not match "
                f"span [{self.start_index}, {self.end_index})"
            )

    @property
    def is_literal(self) -> bool:
        """True when matched_text equals the fragment up to letter casing."""
        return self.quality in (MatchQuality.EXACT, MatchQuality.CASE_INSENSITIVE)

    def as_dict(self) -> dict[str, object]:
        return {
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "matchedText": self.matched_text,
            "matchQuality": str(self.quality),
        }


def _span(doc: str, start: int, end: int, quality: MatchQuality) -> MatchResult:
    return MatchResult(start, end, doc[start:end], quality)


# ---------------------------------------------------------------------------
# Strategies: (sanitized_doc, sanitized_fragment, config) -> MatchResult | None
# ---------------------------------------------------------------------------

Strategy = Callable[[str, str, LocatorConfig], "MatchResult | None"]


def _search_ignore_case(doc: str, needle: str) -> re.Match[str] | None:
    # Matching the original-cased text keeps offsets valid when lower-casing
    # would change length ("İ".lower() is two code points).
    return re.search(re.escape(needle), doc, re.IGNORECASE)


def exact_match(doc: str, fragment: str, config: LocatorConfig) -> MatchResult | None:
    """Leftmost case-sensitive occurrence."""
    pos = doc.find(fragment)
    if pos < 0:
        return None
    return _span(doc, pos, pos + len(fragment), MatchQuality.EXACT)


def case_insensitive_match(
    doc: str, fragment: str, config: LocatorConfig,
) -> MatchResult | None:
    """Leftmost occurrence ignoring case, sliced from the original-cased doc."""
    m = _search_ignore_case(doc, fragment)
    if m is None:
        return None
    return _span(doc, m.start(), m.end(), MatchQuality.CASE_INSENSITIVE)


def fuzzy_match(doc: str, fragment: str, config: LocatorConfig) -> MatchResult | None:
    """Word-overlap window around the fragment's first qualifying word.

    The window spans ``context_window`` characters either side of the anchor
    (plus the fragment length) and is accepted when it contains at least
    ``ceil(overlap_ratio * n)`` of the fragment's ``n`` qualifying words.
    The reported span starts at the window start and is truncated to the
    fragment length, so ``matched_text`` is positional and need not equal
    the fragment wording.
    """
    words = qualifying_words(fragment, config.min_word_length)
    if not words:
        return None

    m = _search_ignore_case(doc, words[0])
    if m is None:
        return None
    anchor = m.start()

    window_start = max(0, anchor - config.context_window)
    window_end = min(len(doc), anchor + len(fragment) + config.context_window)
    found = word_overlap(doc[window_start:window_end].lower(), words)
    needed = required_hits(len(words), config.overlap_ratio)
    if len(found) < needed:
        log.debug(
            "fuzzy window [%d, %d) rejected: %d/%d words, need %d",
            window_start, window_end, len(found), len(words), needed,
        )
        return None

    end = min(window_end, window_start + len(fragment))
    return _span(doc, window_start, end, MatchQuality.FUZZY)


def fallback_match(doc: str, fragment: str, config: LocatorConfig) -> MatchResult:
    """Bounded prefix span. Never fails."""
    return _span(doc, 0, min(len(fragment), len(doc)), MatchQuality.FALLBACK)


STRATEGIES: tuple[Strategy, ...] = (
    exact_match,
    case_insensitive_match,
    fuzzy_match,
    fallback_match,
)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def locate_sanitized(
    doc: str,
    fragment: str,
    config: LocatorConfig = DEFAULT_CONFIG,
) -> MatchResult:
    """Run the cascade over text that has already been sanitized."""
    if not fragment:
        return MatchResult(0, 0, "", MatchQuality.EMPTY)
    for strategy in STRATEGIES:
        result = strategy(doc, fragment, config)
        if result is not None:
            log.debug(
                "%s match at [%d, %d) for fragment of length %d",
                result.quality, result.start_index, result.end_index, len(fragment),
            )
            return result
    # fallback_match always returns a result
    raise AssertionError("strategy cascade exhausted")


def resolve_config(
    context_window: int | None = None,
    config: LocatorConfig | None = None,
) -> LocatorConfig:
    """Apply a ``context_window`` override (clamped to 0) on top of *config*."""
    cfg = config or DEFAULT_CONFIG
    if context_window is None:
        return cfg
    return LocatorConfig(
        context_window=max(0, int(context_window)),
        overlap_ratio=cfg.overlap_ratio,
        min_word_length=cfg.min_word_length,
    )


def locate(
    document: object,
    fragment: object,
    context_window: int | None = None,
    *,
    config: LocatorConfig | None = None,
) -> MatchResult:
    """Find *fragment* in *document* and return its span in the sanitized text.

    Args:
        document: Raw document text. Non-strings are treated as empty.
        fragment: Raw excerpt previously taken from the document.
        context_window: Fuzzy-tier slack in characters; overrides
            ``config.context_window`` when given. Negative values clamp to 0.
        config: Fuzzy-tier tunables. Defaults to ``DEFAULT_CONFIG``.

    Returns:
        MatchResult with ``0 <= start_index <= end_index <= len(sanitize(document))``
        and ``matched_text == sanitize(document)[start_index:end_index]``.
        Never raises.
    """
    cfg = resolve_config(context_window, config)
    return locate_sanitized(sanitize(document), sanitize(fragment), cfg)


def span_is_consistent(doc: str, result: MatchResult) -> bool:
    """Check a result against the sanitized document it was computed on."""
    return (
        0 <= result.start_index <= result.end_index <= len(doc)
        and doc[result.start_index:result.end_index] == result.matched_text
    )
