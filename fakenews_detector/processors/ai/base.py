from __future__ import annotations

from abc import ABC, abstractmethod


class AIClient(ABC):
    """Abstract text-generation client used for credibility judgments."""

    name: str = "ai"

    @abstractmethod
    def generate(self, prompt: str, *, temperature: float = 0.4, max_output_tokens: int = 1024) -> str:
        """Return the model's generated text for ``prompt``.

        Blocking call. Raises ``AIUnavailableError`` when the provider cannot
        be reached, answers with a non-2xx status, or returns no text.
        """
