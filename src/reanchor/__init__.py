"""Relocate annotated text fragments inside sanitized documents."""

from reanchor.flags import (
    AnalysisPayloadError,
    RelocatedFlag,
    extract_analysis,
    relocate_flag,
    relocate_flags,
    summarize,
)
from reanchor.locator import (
    DEFAULT_CONFIG,
    DEFAULT_CONTEXT_WINDOW,
    DEFAULT_MIN_WORD_LENGTH,
    DEFAULT_OVERLAP_RATIO,
    LocatorConfig,
    MatchQuality,
    MatchResult,
    locate,
    locate_sanitized,
)
from reanchor.sanitizer import sanitize

__all__ = [
    "AnalysisPayloadError",
    "DEFAULT_CONFIG",
    "DEFAULT_CONTEXT_WINDOW",
    "DEFAULT_MIN_WORD_LENGTH",
    "DEFAULT_OVERLAP_RATIO",
    "LocatorConfig",
    "MatchQuality",
    "MatchResult",
    "RelocatedFlag",
    "extract_analysis",
    "locate",
    "locate_sanitized",
    "relocate_flag",
    "relocate_flags",
    "sanitize",
    "summarize",
]
