"""Shared fixtures for reanchor tests."""
from __future__ import annotations

import pytest

MEMO = """Dear Valued Team,

In today's dynamic and ever-evolving professional landscape, our collective journey has been nothing short of extraordinary. Together, we have navigated unprecedented challenges, demonstrated unparalleled resilience, and showcased an unwavering commitment to excellence while working remotely.

Now, after thoughtful deliberation and strategic evaluation, it is my great pleasure to announce that the time has come for us to reimagine our collaboration in the physical office space once again. Beginning Monday, October 14, 2025, all staff members will be expected to return to our headquarters to embark on this exciting new chapter of synergy and innovation.

By coming together under one roof, we will unlock game-changing opportunities for real-time ideation, empower deeper human connection, and strengthen the cultural fabric that defines our organization. This transition will serve as a catalyst for enhanced productivity, unmatched creativity, and renewed momentum toward our bold vision of the future.

I deeply appreciate the incredible contributions you have made throughout this remote period. With renewed energy and shared purpose, I am confident that our return to the office will elevate our performance to unprecedented heights.

Let us embrace this milestone with optimism, passion, and unity. The future is bright, and together, there are no limits to what we can achieve.

With gratitude and excitement,
Jonathan Maxwell
Chief Executive Officer
FuturePath Global Solutions"""

# Flags as reported by the analyser, with offsets that no longer line up.
MEMO_FLAGS = [
    {
        "type": "buzzword_heavy",
        "severity": "medium",
        "text": "dynamic and ever-evolving professional landscape",
        "startIndex": 11,
        "endIndex": 58,
        "confidence": 85,
    },
    {
        "type": "formal_rigidity",
        "severity": "low",
        "text": "it is my great pleasure to announce that the time has come",
        "startIndex": 258,
        "endIndex": 315,
        "confidence": 70,
    },
    {
        "type": "generic_phrasing",
        "severity": "high",
        "text": "unlock game-changing opportunities for real-time ideation",
        "startIndex": 524,
        "endIndex": 578,
        "confidence": 90,
    },
]


@pytest.fixture()
def memo() -> str:
    return MEMO


@pytest.fixture()
def memo_flags() -> list[dict[str, object]]:
    return [dict(f) for f in MEMO_FLAGS]
