"""Canonical plain-text normalization for documents and fragments.

Both sides of a span lookup go through ``sanitize`` before any matching, so
offsets are always expressed against the same canonical text:

- ``<...>`` tag constructs are dropped.
- A fixed set of named entities is decoded (once; ``&amp;lt;`` -> ``&lt;``).
- ``data-*="..."`` / ``class="..."`` residue from broken tags is stripped.
- Whitespace runs collapse to a single space and the ends are trimmed.
"""
from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_TAG_RE = re.compile(r"<[^>]*>")

# Order matters: ``&amp;`` is decoded last so it cannot seed a second decode.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)

_ATTRIBUTE_RESIDUE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r'\s*data-[^=]*="[^"]*"'),
    re.compile(r'\s*class="[^"]*"'),
)

_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def strip_tags(text: str) -> str:
    """Remove every ``<...>`` construct, attributes and self-closing tags included."""
    return _TAG_RE.sub("", text)


def decode_entities(text: str) -> str:
    """Decode ``&quot; &apos; &lt; &gt; &amp;`` in a single pass each."""
    for entity, literal in _ENTITIES:
        text = text.replace(entity, literal)
    return text


def strip_attribute_residue(text: str) -> str:
    """Drop ``data-*="..."`` and ``class="..."`` left over from malformed tags."""
    for pattern in _ATTRIBUTE_RESIDUE_PATTERNS:
        text = pattern.sub("", text)
    return text


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (newlines and tabs too) to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def sanitize(text: object) -> str:
    """Normalize raw text into its canonical plain-text form.

    Args:
        text: Raw text, possibly carrying HTML tags, entities and irregular
            whitespace. Anything that is not a ``str`` is treated as empty.

    Returns:
        The sanitized string. Empty string for empty or non-string input.
        Never raises.
    """
    if not text or not isinstance(text, str):
        return ""

    text = strip_tags(text)
    text = decode_entities(text)
    text = strip_attribute_residue(text)
    return collapse_whitespace(text)
