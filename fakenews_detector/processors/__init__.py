"""Text normalization and the AI judgment step."""

from .normalize import clamp_text, extract_domain, normalize_for_key, normalize_plain_text
from .judge import AIJudge, build_prompt

__all__ = [
    "clamp_text",
    "extract_domain",
    "normalize_for_key",
    "normalize_plain_text",
    "AIJudge",
    "build_prompt",
]
