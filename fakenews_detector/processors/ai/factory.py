from __future__ import annotations

import os
from typing import Optional

from ...errors import ConfigError
from ...utils.logging import get_logger
from .base import AIClient

logger = get_logger("fnd.ai.factory")


def create_ai_client(*, backend: Optional[str] = None, timeout: float = 30.0) -> Optional[AIClient]:
    """Create an AI client based on AI_BACKEND env or explicit value.

    Supported values: "gemini" (default), "ollama" or "none". Returns None
    when the selected backend has no credentials, in which case analysis
    runs on rule-based signals only.
    """
    selected = (backend or os.environ.get("AI_BACKEND", "gemini")).lower()

    if selected == "none":
        return None
    if selected == "gemini":
        if not os.environ.get("GEMINI_API_KEY"):
            logger.warning("GEMINI_API_KEY not set; using rule-based analysis only")
            return None
        from .gemini import GeminiClient  # lazy import

        return GeminiClient(timeout=timeout)
    if selected == "ollama":
        from .ollama import OllamaClient  # lazy import

        return OllamaClient(timeout=timeout)

    raise ConfigError(f"Unsupported AI_BACKEND '{selected}'. Use 'gemini', 'ollama' or 'none'.")
