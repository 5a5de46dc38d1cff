from __future__ import annotations

import json
from typing import List, Optional

import pytest

from fakenews_detector.errors import AIUnavailableError
from fakenews_detector.processors.ai import AIClient
from fakenews_detector.service import AnalysisService
from fakenews_detector.utils.settings import AnalysisConfig


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedAIClient(AIClient):
    """Replays a list of responses; an exception instance is raised instead."""

    name = "scripted"

    def __init__(self, responses: List[object]) -> None:
        self.responses = list(responses)
        self.prompts: List[str] = []

    def generate(self, prompt: str, *, temperature: float = 0.4, max_output_tokens: int = 1024) -> str:
        self.prompts.append(prompt)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, BaseException):
            raise item
        return str(item)


def judgment_json(
    prediction: str = "FAKE",
    confidence: float = 90,
    credibility: float = 20,
    flags: Optional[List[str]] = None,
    reasoning: str = "The article relies on anonymous claims.",
) -> str:
    return json.dumps(
        {
            "prediction": prediction,
            "confidence": confidence,
            "reasoning": reasoning,
            "flags": flags if flags is not None else ["Unsourced claims"],
            "factualConcerns": ["No named sources"],
            "credibilityScore": credibility,
        }
    )


def make_config(**overrides) -> AnalysisConfig:
    values = dict(
        rate_limit_requests=10,
        rate_limit_window_seconds=60.0,
        sweep_interval_seconds=300.0,
        cache_max_size=100,
        cache_ttl_seconds=3600.0,
        min_text_chars=50,
        max_text_chars=5000,
        ai_backend="none",
        ai_input_max_chars=2000,
        ai_timeout_seconds=5.0,
        ai_attempts=2,
        ai_backoff_seconds=0.0,
        ai_temperature=0.4,
        ai_max_output_tokens=1024,
        sources_config=None,
    )
    values.update(overrides)
    return AnalysisConfig(**values)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rules_only_service(clock: FakeClock) -> AnalysisService:
    return AnalysisService(make_config(), ai_client=None, clock=clock)


@pytest.fixture
def unavailable_client() -> ScriptedAIClient:
    return ScriptedAIClient([AIUnavailableError("HTTP 503")])


NEUTRAL_TEXT = (
    "The city council approved the annual budget on Tuesday after a short debate. "
    "Officials said the plan funds road repairs and two new libraries."
)

SENSATIONAL_TEXT = (
    "SHOCKING!! You won't believe what happened next. This is why the outrage and scandal will shock you: "
    "a bombshell that will DESTROY the corrupt elite. Unbelievable?! Sources say the evil traitor is an "
    "enemy of freedom. Allegedly it was a cover-up. Reportedly nobody noticed!! Share now!!"
)

UNRELIABLE_URL = "https://www.infowars.com/story"
