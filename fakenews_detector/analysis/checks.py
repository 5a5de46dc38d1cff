"""Boolean red-flag checks.

These do not produce a sub-score; each contributes at most one flag (and the
ALL-CAPS check one highlight) to the final result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from ..models import AnalysisSignals, Highlight

# ALL-CAPS words
CAPS_MIN_WORD_CHARS = 4
CAPS_MIN_WORDS = 6

# runs of two or more ! / ?
PUNCTUATION_RUN = re.compile(r"[!?]{2,}")
PUNCTUATION_MIN_RUNS = 3

UNVERIFIED_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"according to sources", re.IGNORECASE),
    re.compile(r"sources say", re.IGNORECASE),
    re.compile(r"reportedly", re.IGNORECASE),
    re.compile(r"allegedly", re.IGNORECASE),
    re.compile(r"rumou?rs suggest", re.IGNORECASE),
    re.compile(r"it is believed", re.IGNORECASE),
)
UNVERIFIED_MIN_MATCHES = 3

# Signal thresholds below which a rule flag is raised
CLICKBAIT_FLAG_BELOW = 40
SENTIMENT_FLAG_BELOW = 30
BIAS_FLAG_BELOW = 35
SOURCE_FLAG_BELOW = 30
CAPITAL_LETTER_RATIO = 0.25

SENSATIONAL_PUNCTUATION = re.compile(r"[!?]{3,}")
CONSPIRACY_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"they don'?t want you to know", re.IGNORECASE),
    re.compile(r"wake up", re.IGNORECASE),
    re.compile(r"cover-?up", re.IGNORECASE),
    re.compile(r"mainstream media (?:is )?(?:lying|hiding)", re.IGNORECASE),
    re.compile(r"the truth about", re.IGNORECASE),
)
URGENCY_PATTERN = re.compile(r"\b(?:share|act|sign) (?:now|immediately|before|urgent)", re.IGNORECASE)

FLAG_ALL_CAPS = "Excessive use of ALL CAPS"
FLAG_PUNCTUATION = "Excessive punctuation usage"
FLAG_UNVERIFIED = "Multiple unverified claims"


@dataclass(slots=True)
class CheckResult:
    flags: List[str] = field(default_factory=list)
    highlights: List[Highlight] = field(default_factory=list)


def all_caps_words(text: str) -> List[str]:
    return [w for w in text.split() if len(w) >= CAPS_MIN_WORD_CHARS and w.isupper()]


def run_checks(text: str) -> CheckResult:
    """Run the ALL-CAPS, punctuation and unverified-attribution checks."""
    result = CheckResult()

    caps = all_caps_words(text)
    if len(caps) >= CAPS_MIN_WORDS:
        result.flags.append(FLAG_ALL_CAPS)
        result.highlights.append(Highlight(caps[0], "Excessive capitalization", "clickbait"))

    if len(PUNCTUATION_RUN.findall(text)) >= PUNCTUATION_MIN_RUNS:
        result.flags.append(FLAG_PUNCTUATION)

    unverified = sum(len(p.findall(text)) for p in UNVERIFIED_PATTERNS)
    if unverified >= UNVERIFIED_MIN_MATCHES:
        result.flags.append(FLAG_UNVERIFIED)

    return result


def rule_flags(text: str, signals: AnalysisSignals) -> List[str]:
    """Flags derived from low sub-scores and stylistic red flags."""
    flags: List[str] = []

    if signals.clickbait_score < CLICKBAIT_FLAG_BELOW:
        flags.append("Contains clickbait patterns")
    if signals.sentiment_score < SENTIMENT_FLAG_BELOW:
        flags.append("Extreme emotional language detected")
    if signals.bias_score < BIAS_FLAG_BELOW:
        flags.append("Strong ideological bias present")
    if signals.source_score < SOURCE_FLAG_BELOW:
        flags.append("Source has questionable credibility")

    if text:
        capitals = sum(1 for ch in text if "A" <= ch <= "Z")
        if capitals / len(text) > CAPITAL_LETTER_RATIO:
            flags.append("Excessive use of capital letters")

    if SENSATIONAL_PUNCTUATION.search(text):
        flags.append("Sensationalist punctuation (!!!)")
    if any(p.search(text) for p in CONSPIRACY_PATTERNS):
        flags.append("Conspiracy theory language")
    if URGENCY_PATTERN.search(text):
        flags.append("Urgency manipulation tactics")

    return flags
