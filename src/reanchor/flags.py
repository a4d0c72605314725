"""Re-anchor analysis flags against the document they annotate.

An analysis response pairs the analysed document (``originalText``) with a
list of flags, each quoting an excerpt (``text``) and claiming offsets
(``startIndex`` / ``endIndex``). Those offsets were produced against text the
analyser saw, not the sanitized document, so every flag is relocated by its
quoted text and the stale offsets are kept only for comparison.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from reanchor.locator import (
    LocatorConfig,
    MatchQuality,
    MatchResult,
    locate_sanitized,
    resolve_config,
)
from reanchor.sanitizer import sanitize

log = logging.getLogger(__name__)


class AnalysisPayloadError(ValueError):
    """Raised when an analysis response has no document text to anchor against."""


@dataclass(frozen=True, slots=True)
class RelocatedFlag:
    """A flag paired with its recomputed span."""

    flag: Mapping[str, Any]
    original_start: int | None
    original_end: int | None
    match: MatchResult
    stale_offsets_valid: bool

    @property
    def moved(self) -> bool:
        return (self.original_start, self.original_end) != (
            self.match.start_index,
            self.match.end_index,
        )

    def as_dict(self) -> dict[str, Any]:
        """Flag payload with corrected offsets and match provenance."""
        out = dict(self.flag)
        out["startIndex"] = self.match.start_index
        out["endIndex"] = self.match.end_index
        if self.match.is_literal:
            out["text"] = self.match.matched_text
        out["matchQuality"] = str(self.match.quality)
        out["originalStartIndex"] = self.original_start
        out["originalEndIndex"] = self.original_end
        return out


def _as_offset(value: Any) -> int | None:
    # bool is an int subclass; a True/False offset is never meaningful
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _stale_offsets_valid(
    doc: str, fragment: str, start: int | None, end: int | None,
) -> bool:
    if start is None or end is None or not fragment:
        return False
    if not 0 <= start <= end <= len(doc):
        return False
    return doc[start:end] == fragment


def _relocate_sanitized(
    doc: str, flag: Mapping[str, Any], config: LocatorConfig,
) -> RelocatedFlag:
    fragment = sanitize(flag.get("text"))
    start = _as_offset(flag.get("startIndex"))
    end = _as_offset(flag.get("endIndex"))
    return RelocatedFlag(
        flag=flag,
        original_start=start,
        original_end=end,
        match=locate_sanitized(doc, fragment, config),
        stale_offsets_valid=_stale_offsets_valid(doc, fragment, start, end),
    )


def relocate_flag(
    document: str,
    flag: Mapping[str, Any],
    context_window: int | None = None,
    *,
    config: LocatorConfig | None = None,
) -> RelocatedFlag:
    """Recompute one flag's span from its quoted ``text``.

    A missing or non-string ``text`` is treated as an empty fragment and
    yields the degenerate ``[0, 0)`` span.
    """
    return _relocate_sanitized(
        sanitize(document), flag, resolve_config(context_window, config),
    )


def relocate_flags(
    document: str,
    flags: Iterable[Any],
    context_window: int | None = None,
    *,
    config: LocatorConfig | None = None,
) -> list[RelocatedFlag]:
    """Relocate a batch of flags, preserving input order.

    The document is sanitized once for the whole batch. Entries that are
    not mappings are skipped with a warning.
    """
    doc = sanitize(document)
    cfg = resolve_config(context_window, config)
    relocated: list[RelocatedFlag] = []
    for idx, flag in enumerate(flags):
        if not isinstance(flag, Mapping):
            log.warning("Skipping flag %d: expected an object, got %s", idx, type(flag).__name__)
            continue
        relocated.append(_relocate_sanitized(doc, flag, cfg))
    return relocated


def summarize(relocated: Iterable[RelocatedFlag]) -> dict[str, int]:
    """Count relocated flags per match quality (every quality is present)."""
    counts = Counter(r.match.quality for r in relocated)
    return {str(q): counts.get(q, 0) for q in MatchQuality}


def extract_analysis(payload: Any) -> tuple[str, list[Any]]:
    """Pull ``(document, flags)`` out of a saved analysis response.

    Accepts either the full response (``{"originalText", "analysis": {...}}``)
    or a bare analysis object that carries ``originalText`` itself.

    Raises:
        AnalysisPayloadError: If the payload is not an object or carries no
            ``originalText`` string.
    """
    if not isinstance(payload, Mapping):
        raise AnalysisPayloadError(
            f"analysis payload must be an object, got {type(payload).__name__}"
        )
    document = payload.get("originalText")
    if not isinstance(document, str):
        raise AnalysisPayloadError("analysis payload has no 'originalText' string")

    analysis = payload.get("analysis")
    source = analysis if isinstance(analysis, Mapping) else payload
    flags = source.get("flags")
    if not isinstance(flags, list):
        return document, []
    return document, flags
