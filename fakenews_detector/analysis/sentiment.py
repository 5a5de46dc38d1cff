from __future__ import annotations

import re
from typing import List, Tuple

from ..models import Highlight, ScorerResult

BASE_SCORE = 100

EMOTIONAL_KEYWORDS: Tuple[str, ...] = (
    "outrage",
    "scandal",
    "explosive",
    "bombshell",
    "devastating",
    "terrifying",
    "horrifying",
    "shocking",
    "unbelievable",
    "incredible",
    "amazing",
    "stunning",
    "mind-blowing",
)

# (density threshold in percent of words, penalty); first exceeded tier wins
DENSITY_TIERS: Tuple[Tuple[float, int], ...] = (
    (5.0, 40),
    (3.0, 25),
    (1.0, 10),
)

_KEYWORD_RES = tuple(
    (kw, re.compile(rf"\b{re.escape(kw)}\b", re.IGNORECASE)) for kw in EMOTIONAL_KEYWORDS
)


def emotional_density(occurrences: int, word_count: int) -> float:
    return (occurrences / word_count) * 100 if word_count else 0.0


def score_sentiment(text: str) -> ScorerResult:
    """Penalize a high density of emotionally loaded words."""
    occurrences = 0
    highlights: List[Highlight] = []

    for _, regex in _KEYWORD_RES:
        matches = regex.findall(text)
        if matches:
            occurrences += len(matches)
            highlights.append(Highlight(matches[0], "Emotionally charged language", "sentiment"))

    density = emotional_density(occurrences, len(text.split()))
    penalty = next((p for threshold, p in DENSITY_TIERS if density > threshold), 0)
    return ScorerResult(score=max(0, BASE_SCORE - penalty), highlights=tuple(highlights))
