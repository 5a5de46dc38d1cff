from __future__ import annotations

import re
from typing import Dict, List, Tuple

from ..models import Highlight, ScorerResult

BASE_SCORE = 100
MAX_ANALYSIS_HIGHLIGHTS = 20

BIAS_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "left": ("liberal", "progressive", "socialist", "leftist", "woke"),
    "right": ("conservative", "patriot", "freedom", "traditional", "maga"),
    "extreme": ("destroy", "attack", "war on", "threat to", "enemy", "traitor", "corrupt", "evil"),
}

# (keyword count threshold, penalty); first exceeded tier wins
COUNT_TIERS: Tuple[Tuple[int, int], ...] = (
    (5, 40),
    (3, 25),
    (1, 15),
)

_BUCKET_RES = tuple(
    (bucket, re.compile(rf"\b{re.escape(kw)}\b", re.IGNORECASE))
    for bucket, keywords in BIAS_KEYWORDS.items()
    for kw in keywords
)


def score_bias(text: str, *, existing_highlights: int = 0) -> ScorerResult:
    """Penalize politically charged or inflammatory vocabulary.

    ``existing_highlights`` is the number of highlights other scorers already
    produced for this text; bias highlights stop once the analysis as a whole
    reaches MAX_ANALYSIS_HIGHLIGHTS.
    """
    count = 0
    highlights: List[Highlight] = []

    for bucket, regex in _BUCKET_RES:
        matches = regex.findall(text)
        if not matches:
            continue
        count += len(matches)
        if existing_highlights + len(highlights) < MAX_ANALYSIS_HIGHLIGHTS:
            highlights.append(Highlight(matches[0], f"Politically charged term ({bucket})", "bias"))

    penalty = next((p for threshold, p in COUNT_TIERS if count > threshold), 0)
    return ScorerResult(score=max(0, BASE_SCORE - penalty), highlights=tuple(highlights))
