from __future__ import annotations

import re
from typing import List, Tuple

from ..models import Highlight, ScorerResult

BASE_SCORE = 100
PATTERN_PENALTY = 15
LISTICLE_PENALTY = 10

# Each pattern costs PATTERN_PENALTY once, however often it matches.
CLICKBAIT_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"you won'?t believe", re.IGNORECASE),
    re.compile(r"shocking", re.IGNORECASE),
    re.compile(r"unbelievable", re.IGNORECASE),
    re.compile(r"must see", re.IGNORECASE),
    re.compile(r"this is why", re.IGNORECASE),
    re.compile(r"the reason why", re.IGNORECASE),
    re.compile(r"what happened next", re.IGNORECASE),
    re.compile(r"will shock you", re.IGNORECASE),
    re.compile(r"doctors hate", re.IGNORECASE),
    re.compile(r"one weird trick", re.IGNORECASE),
    re.compile(r"\d+ (?:things|ways|reasons|facts)", re.IGNORECASE),
    re.compile(r"!!+"),
    re.compile(r"\?!+"),
)

# Listicle headlines ("7 reasons ...") cost LISTICLE_PENALTY per occurrence.
LISTICLE_PATTERN = re.compile(r"\b\d+\s+(?:things|ways|reasons|facts|tips)\b", re.IGNORECASE)


def score_clickbait(text: str) -> ScorerResult:
    """Score sensational headline language; 100 means no clickbait found."""
    deductions = 0
    highlights: List[Highlight] = []

    for pattern in CLICKBAIT_PATTERNS:
        match = pattern.search(text)
        if match:
            deductions += PATTERN_PENALTY
            highlights.append(Highlight(match.group(0), "Clickbait pattern detected", "clickbait"))

    listicles = [m.group(0) for m in LISTICLE_PATTERN.finditer(text)]
    deductions += LISTICLE_PENALTY * len(listicles)
    highlights.extend(Highlight(m, "Listicle-style clickbait", "clickbait") for m in listicles)

    return ScorerResult(score=max(0, BASE_SCORE - deductions), highlights=tuple(highlights))
