from __future__ import annotations

import os
from typing import Optional

import requests

from ...errors import AIUnavailableError, ConfigError
from ...utils.logging import get_logger
from .base import AIClient

logger = get_logger("fnd.ai.gemini")

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiClient(AIClient):
    """HTTP client for Gemini via Google AI Studio API.

    Environment:
      - GEMINI_API_KEY (required)
      - GEMINI_MODEL (default: gemini-2.0-flash)
    """

    name = "gemini"

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ConfigError("GEMINI_API_KEY is required for the Gemini backend")
        self.model = model or os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
        self.timeout = timeout

    @property
    def key_preview(self) -> str:
        return self.api_key[:6] + "..."

    def generate(self, prompt: str, *, temperature: float = 0.4, max_output_tokens: int = 1024) -> str:
        url = f"{API_BASE}/{self.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        try:
            resp = requests.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise AIUnavailableError(f"Gemini request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise AIUnavailableError(f"Gemini returned HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise AIUnavailableError("Gemini returned a non-JSON body") from exc

        # Extract text from the first candidate
        candidates = data.get("candidates") or []
        if not candidates:
            raise AIUnavailableError("No candidates in Gemini response")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts).strip()
        if not text:
            raise AIUnavailableError("No text in Gemini response")
        logger.debug("Gemini raw response: %s", text[:300])
        return text
