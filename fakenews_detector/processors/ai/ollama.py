from __future__ import annotations

import os
from typing import Optional

import requests

from ...errors import AIUnavailableError
from .base import AIClient


class OllamaClient(AIClient):
    """HTTP client for a local Ollama server's generate API.

    Environment:
      - OLLAMA_HOST (default: http://localhost:11434)
      - OLLAMA_MODEL (default: llama3.1:8b-instruct)
    """

    name = "ollama"

    def __init__(self, *, host: Optional[str] = None, model: Optional[str] = None, timeout: float = 60.0) -> None:
        self.host = (host or os.environ.get("OLLAMA_HOST", "http://localhost:11434")).rstrip("/")
        self.model = model or os.environ.get("OLLAMA_MODEL", "llama3.1:8b-instruct")
        self.timeout = timeout

    def generate(self, prompt: str, *, temperature: float = 0.4, max_output_tokens: int = 1024) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
            "options": {"temperature": temperature, "num_predict": max_output_tokens},
        }
        try:
            resp = requests.post(f"{self.host}/api/generate", json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise AIUnavailableError(f"Ollama request failed: {exc}") from exc

        # Ollama returns {'response': '...'}
        text = (data.get("response") or "").strip()
        if not text:
            raise AIUnavailableError("Empty response from Ollama")
        return text
