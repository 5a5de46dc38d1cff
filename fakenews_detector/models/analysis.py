from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional, Tuple

from .source import SourceInfo

Prediction = Literal["FAKE", "REAL", "UNCERTAIN"]
HighlightType = Literal["fake", "bias", "clickbait", "sentiment"]
Provider = Literal["ai", "rule-based"]

PREDICTIONS = ("FAKE", "REAL", "UNCERTAIN")
NEUTRAL_SCORE = 50


@dataclass(frozen=True, slots=True)
class Highlight:
    """A span of the analyzed text that a scorer considers evidence."""

    text: str
    reason: str
    type: HighlightType

    def to_dict(self) -> dict:
        return {"text": self.text, "reason": self.reason, "type": self.type}


@dataclass(frozen=True, slots=True)
class AnalysisSignals:
    """The five 0-100 sub-scores. A missing AI signal is reported as 50."""

    ml_score: int
    sentiment_score: int
    clickbait_score: int
    source_score: int
    bias_score: int

    @classmethod
    def neutral(cls) -> "AnalysisSignals":
        return cls(NEUTRAL_SCORE, NEUTRAL_SCORE, NEUTRAL_SCORE, NEUTRAL_SCORE, NEUTRAL_SCORE)

    def to_dict(self) -> dict:
        return {
            "mlScore": self.ml_score,
            "sentimentScore": self.sentiment_score,
            "clickbaitScore": self.clickbait_score,
            "sourceScore": self.source_score,
            "biasScore": self.bias_score,
        }


@dataclass(frozen=True, slots=True)
class AIJudgment:
    """Validated analysis object returned by the external model."""

    prediction: Prediction
    confidence: int
    reasoning: str
    flags: Tuple[str, ...] = ()
    factual_concerns: Tuple[str, ...] = ()
    credibility_score: int = NEUTRAL_SCORE


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Verdict for one piece of text. Created once, cached, never mutated."""

    id: str
    prediction: Prediction
    confidence: int
    overall_score: int
    signals: AnalysisSignals
    flags: Tuple[str, ...]
    highlights: Tuple[Highlight, ...]
    explanation: str
    original_text: str
    timestamp: datetime
    source: Optional[SourceInfo] = None
    url: Optional[str] = None
    provider: Provider = "rule-based"
    factual_concerns: Tuple[str, ...] = ()
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Render the camelCase JSON shape the web UI consumes."""
        payload = {
            "id": self.id,
            "prediction": self.prediction,
            "confidence": self.confidence,
            "overallScore": self.overall_score,
            "signals": self.signals.to_dict(),
            "flags": list(self.flags),
            "highlights": [h.to_dict() for h in self.highlights],
            "explanation": self.explanation,
            "originalText": self.original_text,
            "timestamp": int(self.timestamp.timestamp() * 1000),
            "apiProvider": self.provider,
            "mlUsed": self.provider == "ai",
            "factualConcerns": list(self.factual_concerns),
        }
        if self.source is not None:
            payload["source"] = {"domain": self.source.domain, "credibility": self.source.credibility}
        if self.url is not None:
            payload["url"] = self.url
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(slots=True)
class AnalysisOutcome:
    """One orchestrator run: the result plus request-level metadata."""

    result: AnalysisResult
    cached: bool
    fallback: bool = False
    processing_ms: float = 0.0

    def meta(self) -> dict:
        return {
            "cached": self.cached,
            "fallback": self.fallback,
            "processingTime": f"{self.processing_ms:.0f}ms",
        }


@dataclass(frozen=True, slots=True)
class ScorerResult:
    score: int
    highlights: Tuple[Highlight, ...] = field(default_factory=tuple)
