"""Typed models used across the application."""

from .source import Credibility, SourceInfo, SourceLists
from .analysis import (
    PREDICTIONS,
    NEUTRAL_SCORE,
    AIJudgment,
    AnalysisOutcome,
    AnalysisResult,
    AnalysisSignals,
    Highlight,
    HighlightType,
    Prediction,
    Provider,
    ScorerResult,
)
from .stats import AnalysisStats, ApiStats

__all__ = [
    "Credibility",
    "SourceInfo",
    "SourceLists",
    "PREDICTIONS",
    "NEUTRAL_SCORE",
    "AIJudgment",
    "AnalysisOutcome",
    "AnalysisResult",
    "AnalysisSignals",
    "Highlight",
    "HighlightType",
    "Prediction",
    "Provider",
    "ScorerResult",
    "AnalysisStats",
    "ApiStats",
]
