from __future__ import annotations

from typing import Optional

from ..errors import AIResponseError, AIUnavailableError
from ..models import AIJudgment, ApiStats
from ..utils.logging import get_logger
from ..utils.settings import AnalysisConfig
from .ai import AIClient
from .ai.parsing import parse_judgment_response
from .ai.retry import with_retries
from .normalize import clamp_text

logger = get_logger("fnd.processors.judge")

PROMPT_TEMPLATE = """You are an expert fact-checker and fake news detection system. Analyze the following text comprehensively.

TEXT TO ANALYZE:
"{text}"

Perform a thorough analysis considering:

1. FACTUAL ACCURACY
   - Are claims verifiable?
   - Are sources cited?
   - Does it reference real studies/statistics?
   - Are there logical inconsistencies?

2. EMOTIONAL MANIPULATION
   - Excessive fear-mongering or outrage?
   - Clickbait language?
   - Appeals to emotion over facts?

3. SOURCE CREDIBILITY INDICATORS
   - Professional writing quality?
   - Grammar and spelling?
   - Balanced perspective or extreme bias?

4. MISINFORMATION RED FLAGS
   - Conspiracy theory language?
   - "They don't want you to know" patterns?
   - Unverifiable claims presented as facts?
   - Requests to share urgently?

5. WRITING STYLE
   - Sensationalist vs. factual tone?
   - ALL CAPS or excessive punctuation?
   - Legitimate journalism vs. propaganda?

Respond with ONLY valid JSON in this EXACT format (no markdown, no extra text):
{{
  "prediction": "FAKE" or "REAL" or "UNCERTAIN",
  "confidence": <number 0-100>,
  "reasoning": "<2-3 sentence explanation of your verdict>",
  "flags": ["<specific concern 1>", "<specific concern 2>", "..."],
  "factualConcerns": ["<factual issue 1>", "<factual issue 2>", "..."],
  "credibilityScore": <number 0-100, where 100 is most credible>
}}

Be thorough but concise. Focus on specific, actionable concerns."""


def build_prompt(text: str, *, max_chars: int) -> str:
    return PROMPT_TEMPLATE.format(text=clamp_text(text, max_chars))


class AIJudge:
    """Ask the external model for a credibility verdict.

    ``judge`` never raises: a missing client, exhausted retries and malformed
    output all resolve to None, meaning "use rule-based signals only".
    """

    def __init__(
        self,
        client: Optional[AIClient],
        *,
        config: Optional[AnalysisConfig] = None,
        stats: Optional[ApiStats] = None,
    ) -> None:
        self.client = client
        self.config = config or AnalysisConfig()
        self.stats = stats if stats is not None else ApiStats()

    @property
    def configured(self) -> bool:
        return self.client is not None

    def status(self) -> dict:
        return {
            "configured": self.configured,
            "backend": self.client.name if self.client else None,
            "keyPreview": getattr(self.client, "key_preview", None) or "NOT SET",
        }

    async def judge(self, text: str) -> Optional[AIJudgment]:
        if self.client is None:
            return None

        client = self.client
        cfg = self.config
        prompt = build_prompt(text, max_chars=cfg.ai_input_max_chars)
        self.stats.record_api_call()

        try:
            raw = await with_retries(
                lambda: client.generate(
                    prompt,
                    temperature=cfg.ai_temperature,
                    max_output_tokens=cfg.ai_max_output_tokens,
                ),
                attempts=cfg.ai_attempts,
                base_delay=cfg.ai_backoff_seconds,
            )
        except AIUnavailableError as exc:
            logger.warning("AI provider unavailable after %s attempt(s): %s", cfg.ai_attempts, exc)
            self.stats.record_failure(str(exc))
            return None
        except Exception as exc:  # noqa: BLE001 - provider bugs must not break analysis
            logger.exception("Unexpected AI client error: %s", exc)
            self.stats.record_failure(str(exc))
            return None

        try:
            judgment = parse_judgment_response(raw)
        except AIResponseError as exc:
            logger.warning("Invalid AI response: %s", exc)
            self.stats.record_failure(str(exc))
            return None

        logger.info(
            "AI judgment: prediction=%s confidence=%s credibility=%s flags=%d",
            judgment.prediction,
            judgment.confidence,
            judgment.credibility_score,
            len(judgment.flags),
        )
        return judgment
