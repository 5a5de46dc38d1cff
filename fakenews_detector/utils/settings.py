from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


@dataclass(slots=True)
class AnalysisConfig:
    """Tunables for one analysis service instance.

    Defaults are read from the environment when the instance is created, so a
    ``.env`` file loaded before construction takes effect. Tests build the
    dataclass directly with explicit values.
    """

    # Rate limiting: fixed window per client identifier
    rate_limit_requests: int = field(default_factory=lambda: _env_int("RATE_LIMIT_REQUESTS", 10))
    rate_limit_window_seconds: float = field(default_factory=lambda: _env_float("RATE_LIMIT_WINDOW_SECONDS", 60.0))
    sweep_interval_seconds: float = field(default_factory=lambda: _env_float("RATE_LIMIT_SWEEP_SECONDS", 300.0))

    # Result cache
    cache_max_size: int = field(default_factory=lambda: _env_int("CACHE_MAX_SIZE", 100))
    cache_ttl_seconds: float = field(default_factory=lambda: _env_float("CACHE_TTL_SECONDS", 3600.0))

    # Input boundary
    min_text_chars: int = field(default_factory=lambda: _env_int("MIN_TEXT_CHARS", 50))
    max_text_chars: int = field(default_factory=lambda: _env_int("MAX_TEXT_CHARS", 5000))

    # AI judgment
    ai_backend: str = field(default_factory=lambda: os.getenv("AI_BACKEND", "gemini").lower())
    ai_input_max_chars: int = field(default_factory=lambda: _env_int("AI_INPUT_MAX_CHARS", 2000))
    ai_timeout_seconds: float = field(default_factory=lambda: _env_float("AI_TIMEOUT_SECONDS", 30.0))
    ai_attempts: int = field(default_factory=lambda: _env_int("AI_RETRIES", 2))
    ai_backoff_seconds: float = field(default_factory=lambda: _env_float("AI_BACKOFF", 1.0))
    ai_temperature: float = field(default_factory=lambda: _env_float("AI_TEMPERATURE", 0.4))
    ai_max_output_tokens: int = field(default_factory=lambda: _env_int("AI_MAX_OUTPUT_TOKENS", 1024))

    # Optional YAML with credible/unreliable domain lists
    sources_config: Optional[str] = field(default_factory=lambda: os.getenv("SOURCES_CONFIG") or None)
