#!/usr/bin/env python3
"""Recompute flag offsets of a saved analysis response.

The analyser reports ``startIndex`` / ``endIndex`` for every flag, but those
offsets drift once the document is sanitized. This script relocates each
flag by its quoted text and prints the corrected flags plus a per-tier
summary (exact / case-insensitive / fuzzy / fallback).

Usage::

    # Re-anchor every flag against the response's own originalText
    python3 scripts/reanchor_flags.py --analysis response.json

    # Anchor against a different copy of the document
    python3 scripts/reanchor_flags.py --analysis response.json --document memo.txt

    # Locate a single fragment
    python3 scripts/reanchor_flags.py --document memo.txt --fragment "real-time ideation"
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from reanchor.flags import (
    AnalysisPayloadError,
    extract_analysis,
    relocate_flags,
    summarize,
)
from reanchor.io_utils import dump_json_bytes, load_json, read_text, save_json
from reanchor.locator import (
    DEFAULT_CONTEXT_WINDOW,
    DEFAULT_OVERLAP_RATIO,
    LocatorConfig,
    locate,
)

log = logging.getLogger("reanchor_flags")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recompute flag offsets against the sanitized document."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--analysis", type=Path, default=None,
        help="Saved analysis response JSON (originalText + analysis.flags).",
    )
    source.add_argument(
        "--fragment", default=None,
        help="Locate a single fragment instead of a response's flags.",
    )
    parser.add_argument(
        "--document", type=Path, default=None,
        help="Document text file. Overrides the response's originalText.",
    )
    parser.add_argument(
        "--context-window", type=int, default=DEFAULT_CONTEXT_WINDOW,
        help=f"Fuzzy-tier slack in characters (default: {DEFAULT_CONTEXT_WINDOW})",
    )
    parser.add_argument(
        "--overlap-ratio", type=float, default=DEFAULT_OVERLAP_RATIO,
        help=f"Fuzzy-tier word overlap required (default: {DEFAULT_OVERLAP_RATIO})",
    )
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Write JSON here instead of stdout.",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _emit(obj: Any, output: Path | None) -> None:
    if output is not None:
        save_json(obj, output)
        log.info("Wrote %s", output)
    else:
        sys.stdout.buffer.write(dump_json_bytes(obj))
        sys.stdout.buffer.flush()


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Build the output payload for parsed *args*.

    Raises:
        OSError: Unreadable input file.
        orjson.JSONDecodeError: Malformed analysis JSON.
        AnalysisPayloadError: Analysis JSON without document text.
    """
    config = LocatorConfig(
        context_window=max(0, args.context_window),
        overlap_ratio=args.overlap_ratio,
    )
    document = read_text(args.document) if args.document is not None else None

    if args.fragment is not None:
        match = locate(document, args.fragment, config=config)
        return {"fragment": args.fragment, "match": match.as_dict()}

    payload = load_json(args.analysis)
    original_text, flags = extract_analysis(payload)
    if document is None:
        document = original_text
    log.info("Re-anchoring %d flags against %d chars", len(flags), len(document))

    relocated = relocate_flags(document, flags, config=config)
    for r in relocated:
        if not r.stale_offsets_valid:
            log.debug(
                "flag %r moved from %s-%s to %d-%d (%s)",
                r.flag.get("type"), r.original_start, r.original_end,
                r.match.start_index, r.match.end_index, r.match.quality,
            )
    summary = summarize(relocated)
    summary["staleOffsetsValid"] = sum(1 for r in relocated if r.stale_offsets_valid)
    return {
        "flags": [r.as_dict() for r in relocated],
        "summary": summary,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.fragment is not None and args.document is None:
        parser.error("--fragment requires --document")
    if not 0.0 < args.overlap_ratio <= 1.0:
        parser.error("--overlap-ratio must be in (0, 1]")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        result = run(args)
    except (OSError, orjson.JSONDecodeError, AnalysisPayloadError) as exc:
        log.error("%s", exc)
        return 1

    _emit(result, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
