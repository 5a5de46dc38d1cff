"""Rule-based signal scorers and red-flag checks."""

from .clickbait import score_clickbait
from .sentiment import score_sentiment
from .bias import score_bias
from .source import DEFAULT_SOURCE_LISTS, SourceCredibilityChecker, score_for
from .checks import CheckResult, run_checks, rule_flags
from .highlights import MAX_HIGHLIGHTS, finalize_highlights

__all__ = [
    "score_clickbait",
    "score_sentiment",
    "score_bias",
    "DEFAULT_SOURCE_LISTS",
    "SourceCredibilityChecker",
    "score_for",
    "CheckResult",
    "run_checks",
    "rule_flags",
    "MAX_HIGHLIGHTS",
    "finalize_highlights",
]
