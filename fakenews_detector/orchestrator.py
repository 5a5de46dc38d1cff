from __future__ import annotations

import math
import time
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from .analysis import (
    SourceCredibilityChecker,
    finalize_highlights,
    rule_flags,
    run_checks,
    score_bias,
    score_clickbait,
    score_for,
    score_sentiment,
)
from .models import (
    NEUTRAL_SCORE,
    AIJudgment,
    AnalysisOutcome,
    AnalysisResult,
    AnalysisSignals,
    AnalysisStats,
    ApiStats,
    Highlight,
    Prediction,
    SourceInfo,
)
from .processors.judge import AIJudge
from .store import ResultCache
from .utils.logging import get_logger

logger = get_logger("fnd.orchestrator")

# Blend with a usable AI judgment: 70% AI, 30% rules
AI_BLEND_WEIGHTS = {"ml": 0.70, "clickbait": 0.10, "sentiment": 0.10, "bias": 0.05, "source": 0.05}
# Degraded mode: rules only, the neutral AI score is left out
RULE_BLEND_WEIGHTS = {"clickbait": 0.35, "sentiment": 0.35, "bias": 0.20, "source": 0.10}

AI_TRUST_CONFIDENCE = 80
FAKE_BELOW = 35
REAL_ABOVE = 75

MAX_FLAGS = 8
FALLBACK_FLAG = "Analysis failed - using fallback. Please try again."
FALLBACK_EXPLANATION = (
    "Unable to complete full analysis due to technical issues. Please try again or contact support."
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def blend(signals: AnalysisSignals, *, ai_available: bool) -> int:
    """Weighted combination of the sub-scores into the overall 0-100 score."""
    values = {
        "ml": signals.ml_score,
        "clickbait": signals.clickbait_score,
        "sentiment": signals.sentiment_score,
        "bias": signals.bias_score,
        "source": signals.source_score,
    }
    weights = AI_BLEND_WEIGHTS if ai_available else RULE_BLEND_WEIGHTS
    return clamp_score(sum(values[name] * w for name, w in weights.items()))


def derive_verdict(overall_score: int, judgment: Optional[AIJudgment] = None) -> Tuple[Prediction, int]:
    """Prediction and confidence for a blended score.

    A confident AI judgment (> AI_TRUST_CONFIDENCE) is taken as-is.
    """
    if judgment is not None and judgment.confidence > AI_TRUST_CONFIDENCE:
        return judgment.prediction, clamp_score(judgment.confidence)

    if overall_score < FAKE_BELOW:
        return "FAKE", clamp_score(min(100, (50 - overall_score) * 2))
    if overall_score > REAL_ABOVE:
        return "REAL", clamp_score(min(100, (overall_score - 50) * 2))
    return "UNCERTAIN", clamp_score(50 + abs(overall_score - 50) / 2)


def merge_flags(*groups: Iterable[str], limit: int = MAX_FLAGS) -> Tuple[str, ...]:
    """Concatenate flag groups, dropping repeats while keeping first-seen order."""
    merged: List[str] = []
    for group in groups:
        for flag in group:
            if flag and flag not in merged:
                merged.append(flag)
    return tuple(merged[:limit])


def fallback_explanation(prediction: Prediction, flags: Tuple[str, ...]) -> str:
    if prediction == "FAKE":
        top_flags = " and ".join(flags[:2]) or "multiple red flags"
        return (
            f"This content shows signs of misinformation including {top_flags}. "
            "The analysis suggests treating this with skepticism and verifying claims through trusted sources."
        )
    if prediction == "REAL":
        return (
            "This content appears to follow standard journalistic practices with minimal red flags. "
            "It shows balanced language and credible presentation, though independent verification "
            "is always recommended."
        )
    main_concern = flags[0] if flags else "mixed signals"
    return (
        f"This content has mixed indicators. While some concerns were detected ({main_concern}), "
        "more context would be needed for a definitive assessment. Consider checking multiple sources."
    )


def fallback_result(text: str, url: Optional[str], error: str) -> AnalysisResult:
    """Neutral UNCERTAIN result returned when the pipeline itself breaks."""
    return AnalysisResult(
        id=uuid.uuid4().hex,
        prediction="UNCERTAIN",
        confidence=NEUTRAL_SCORE,
        overall_score=NEUTRAL_SCORE,
        signals=AnalysisSignals.neutral(),
        flags=(FALLBACK_FLAG,),
        highlights=(),
        explanation=FALLBACK_EXPLANATION,
        original_text=text,
        timestamp=datetime.now(timezone.utc),
        url=url,
        error=error or "Internal error",
    )


class AnalysisOrchestrator:
    """Run one request through cache, AI judgment, rule scoring and blending.

    ``run`` always returns an outcome: AI and scorer failures degrade to
    neutral contributions, and anything unexpected becomes the fallback
    result (which is not cached).
    """

    def __init__(
        self,
        *,
        cache: ResultCache,
        judge: AIJudge,
        source_checker: Optional[SourceCredibilityChecker] = None,
        api_stats: Optional[ApiStats] = None,
        analysis_stats: Optional[AnalysisStats] = None,
    ) -> None:
        self.cache = cache
        self.judge = judge
        self.source_checker = source_checker or SourceCredibilityChecker()
        self.api_stats = api_stats if api_stats is not None else ApiStats()
        self.analysis_stats = analysis_stats if analysis_stats is not None else AnalysisStats()

    async def run(self, text: str, url: Optional[str] = None) -> AnalysisOutcome:
        started = time.perf_counter()
        try:
            cached = self.cache.get(text)
            self.analysis_stats.total += 1
            self.api_stats.record_request(cached=cached is not None)
            if cached is not None:
                self.analysis_stats.cache_hits += 1
                logger.info("Cache hit (cache rate %s)", self.analysis_stats.cache_rate)
                return AnalysisOutcome(result=cached, cached=True, processing_ms=_elapsed_ms(started))

            logger.info("Cache miss; running full analysis")
            result = await self._analyze(text, url)
            self.cache.put(text, result)
            logger.info(
                "Analysis complete: prediction=%s confidence=%s score=%s provider=%s",
                result.prediction,
                result.confidence,
                result.overall_score,
                result.provider,
            )
            return AnalysisOutcome(result=result, cached=False, processing_ms=_elapsed_ms(started))
        except Exception as exc:  # noqa: BLE001 - callers always receive a well-formed result
            logger.exception("Analysis pipeline failed; returning fallback: %s", exc)
            return AnalysisOutcome(
                result=fallback_result(text, url, str(exc)),
                cached=False,
                fallback=True,
                processing_ms=_elapsed_ms(started),
            )

    async def _analyze(self, text: str, url: Optional[str]) -> AnalysisResult:
        judgment = await self.judge.judge(text)
        if judgment is not None:
            self.analysis_stats.ai_success += 1
        else:
            if self.judge.configured:
                self.analysis_stats.ai_failed += 1
            self.analysis_stats.rule_based_only += 1

        # Rule signals always run so every sub-score is populated
        highlights: List[Highlight] = []
        clickbait = score_clickbait(text)
        highlights.extend(clickbait.highlights)
        sentiment = score_sentiment(text)
        highlights.extend(sentiment.highlights)
        bias = score_bias(text, existing_highlights=len(highlights))
        highlights.extend(bias.highlights)

        source_info: Optional[SourceInfo] = self.source_checker.check_url(url) if url else None
        source_score = score_for(source_info.credibility) if source_info else NEUTRAL_SCORE

        checks = run_checks(text)
        highlights.extend(checks.highlights)

        signals = AnalysisSignals(
            ml_score=judgment.credibility_score if judgment else NEUTRAL_SCORE,
            sentiment_score=sentiment.score,
            clickbait_score=clickbait.score,
            source_score=source_score,
            bias_score=bias.score,
        )
        overall = blend(signals, ai_available=judgment is not None)

        flags = merge_flags(
            judgment.flags if judgment else (),
            rule_flags(text, signals),
            checks.flags,
        )
        prediction, confidence = derive_verdict(overall, judgment)
        explanation = (judgment.reasoning if judgment else "") or fallback_explanation(prediction, flags)

        return AnalysisResult(
            id=uuid.uuid4().hex,
            prediction=prediction,
            confidence=confidence,
            overall_score=overall,
            signals=signals,
            flags=flags,
            highlights=finalize_highlights(text, highlights),
            explanation=explanation,
            original_text=text,
            timestamp=datetime.now(timezone.utc),
            source=source_info,
            url=url,
            provider="ai" if judgment else "rule-based",
            factual_concerns=judgment.factual_concerns if judgment else (),
        )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
