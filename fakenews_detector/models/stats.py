from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def _percent(part: int, whole: int, *, empty: str) -> str:
    return f"{(part / whole) * 100:.1f}%" if whole > 0 else empty


@dataclass(slots=True)
class ApiStats:
    """Request-level counters for the analysis endpoint and AI provider."""

    total_calls: int = 0
    cache_hits: int = 0
    api_calls: int = 0
    failures: int = 0
    last_error: Optional[str] = None
    last_error_time: Optional[datetime] = None

    def record_request(self, *, cached: bool) -> None:
        self.total_calls += 1
        if cached:
            self.cache_hits += 1

    def record_api_call(self) -> None:
        self.api_calls += 1

    def record_failure(self, error: str) -> None:
        self.failures += 1
        self.last_error = error
        self.last_error_time = datetime.now(timezone.utc)

    @property
    def cache_hit_rate(self) -> str:
        return _percent(self.cache_hits, self.total_calls, empty="0%")

    @property
    def failure_rate(self) -> str:
        return _percent(self.failures, self.api_calls, empty="0%")

    def to_dict(self) -> dict:
        return {
            "totalCalls": self.total_calls,
            "cacheHits": self.cache_hits,
            "apiCalls": self.api_calls,
            "failures": self.failures,
            "cacheHitRate": self.cache_hit_rate,
            "failureRate": self.failure_rate,
            "lastError": self.last_error,
            "lastErrorTime": self.last_error_time.isoformat() if self.last_error_time else None,
        }


@dataclass(slots=True)
class AnalysisStats:
    """Outcome counters: how often the AI was used versus rules alone."""

    total: int = 0
    ai_success: int = 0
    ai_failed: int = 0
    cache_hits: int = 0
    rule_based_only: int = 0

    @property
    def success_rate(self) -> str:
        return _percent(self.ai_success, self.ai_success + self.ai_failed, empty="N/A")

    @property
    def cache_rate(self) -> str:
        return _percent(self.cache_hits, self.total, empty="N/A")

    @property
    def ai_usage_rate(self) -> str:
        return _percent(self.ai_success, self.total, empty="N/A")

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "aiSuccess": self.ai_success,
            "aiFailed": self.ai_failed,
            "cacheHits": self.cache_hits,
            "ruleBasedOnly": self.rule_based_only,
            "successRate": self.success_rate,
            "cacheRate": self.cache_rate,
            "aiUsageRate": self.ai_usage_rate,
        }
