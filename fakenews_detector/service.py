"""Process-level analysis service.

One ``AnalysisService`` is built at startup and handed to every request
handler. It owns the shared cache, rate limiter, AI judge and counters, so
tests can create isolated instances instead of sharing module globals.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from .analysis import DEFAULT_SOURCE_LISTS, SourceCredibilityChecker
from .errors import InputValidationError
from .models import AnalysisOutcome, AnalysisResult, AnalysisStats, ApiStats, SourceInfo
from .orchestrator import AnalysisOrchestrator
from .processors.ai import AIClient, create_ai_client
from .processors.judge import AIJudge
from .processors.normalize import clamp_text
from .store import RateLimiter, RateLimitResult, ResultCache
from .utils.config_loader import load_source_lists
from .utils.logging import get_logger
from .utils.settings import AnalysisConfig

logger = get_logger("fnd.service")

_UNSET = object()


class AnalysisService:
    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        *,
        ai_client: Optional[AIClient] | object = _UNSET,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or AnalysisConfig()
        cfg = self.config

        if ai_client is _UNSET:
            ai_client = create_ai_client(backend=cfg.ai_backend, timeout=cfg.ai_timeout_seconds)

        lists = load_source_lists(cfg.sources_config) if cfg.sources_config else DEFAULT_SOURCE_LISTS

        self.api_stats = ApiStats()
        self.analysis_stats = AnalysisStats()
        self.cache = ResultCache(max_size=cfg.cache_max_size, ttl_seconds=cfg.cache_ttl_seconds, clock=clock)
        self.rate_limiter = RateLimiter(clock=clock)
        self.source_checker = SourceCredibilityChecker(lists)
        self.judge = AIJudge(ai_client, config=cfg, stats=self.api_stats)  # type: ignore[arg-type]
        self.orchestrator = AnalysisOrchestrator(
            cache=self.cache,
            judge=self.judge,
            source_checker=self.source_checker,
            api_stats=self.api_stats,
            analysis_stats=self.analysis_stats,
        )

        status = self.judge.status()
        if status["configured"]:
            logger.info("AI backend %s configured (key %s)", status["backend"], status["keyPreview"])
        else:
            logger.warning("No AI backend configured; analysis will use rule-based signals only")

    # ---------------- Lifecycle -----------------
    def start(self) -> None:
        """Start periodic rate-limit and cache sweeping. Requires a running event loop."""
        self.rate_limiter.start_sweeper(self.config.sweep_interval_seconds, on_sweep=self.cache.cleanup_expired)

    async def stop(self) -> None:
        await self.rate_limiter.stop_sweeper()

    # ---------------- Request boundary -----------------
    def prepare_text(self, text: Optional[str]) -> str:
        """Validate and clamp submitted text before it enters the pipeline."""
        content = (text or "").strip()
        if len(content) < self.config.min_text_chars:
            raise InputValidationError(
                f"Text is too short for analysis (minimum {self.config.min_text_chars} characters)"
            )
        return clamp_text(content, self.config.max_text_chars)

    def check_rate_limit(self, client_id: str) -> RateLimitResult:
        return self.rate_limiter.check(
            client_id,
            limit=self.config.rate_limit_requests,
            window_seconds=self.config.rate_limit_window_seconds,
        )

    async def analyze_with_meta(self, text: str, url: Optional[str] = None) -> AnalysisOutcome:
        # Oversized input is clamped here too so the cache key matches prepare_text
        return await self.orchestrator.run(clamp_text(text, self.config.max_text_chars), url)

    async def analyze(self, text: str, url: Optional[str] = None) -> AnalysisResult:
        outcome = await self.analyze_with_meta(text, url)
        return outcome.result

    def check_source(self, url: str) -> Optional[SourceInfo]:
        return self.source_checker.check_url(url)

    # ---------------- Introspection -----------------
    def get_cache_stats(self) -> dict:
        return self.cache.stats()

    def get_api_stats(self) -> dict:
        api = self.api_stats
        healthy = api.failures == 0 or (api.failures / max(api.api_calls, 1)) < 0.5
        return {
            "api": api.to_dict(),
            "analysis": self.analysis_stats.to_dict(),
            "ai": self.judge.status(),
            "health": {
                "status": "healthy" if healthy else "degraded",
                "message": "All systems operational"
                if api.failures == 0
                else f"{api.failures} API failures detected",
            },
        }

    def get_rate_limit_stats(self) -> dict:
        return self.rate_limiter.stats()
