from __future__ import annotations

import json
import math
import re
from typing import Any, Optional, Tuple

from ...errors import AIResponseError
from ...models import NEUTRAL_SCORE, PREDICTIONS, AIJudgment

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


def strip_code_fences(raw: str) -> str:
    return _CODE_FENCE_RE.sub("", raw).strip()


def extract_json_object(raw: str) -> Optional[str]:
    """Return the first balanced ``{...}`` region of ``raw``, or None.

    Braces inside JSON string literals are ignored.
    """
    start = raw.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for idx in range(start, len(raw)):
            ch = raw[idx]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return raw[start : idx + 1]
        # unbalanced from this brace; try the next one
        start = raw.find("{", start + 1)
    return None


def _is_number(value: Any) -> bool:
    # json.loads accepts NaN, Infinity and overflowing literals such as 1e400
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _clamp_score(value: float) -> int:
    return max(0, min(100, int(round(value))))


def _string_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v).strip() for v in value if v is not None and str(v).strip())


def parse_judgment_response(raw: str) -> AIJudgment:
    """Parse and validate the model's credibility JSON.

    Expected object with keys:
      - prediction: one of FAKE / REAL / UNCERTAIN
      - confidence: number 0-100
      - reasoning: short text
      - flags, factualConcerns: lists of strings (optional)
      - credibilityScore: number 0-100 (optional, neutral when absent)
    """
    if not raw or not raw.strip():
        raise AIResponseError("Empty AI response")

    cleaned = strip_code_fences(raw)
    candidate = extract_json_object(cleaned)
    if candidate is None:
        raise AIResponseError("No JSON object found in AI response")

    try:
        obj = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise AIResponseError(f"Invalid JSON in AI response: {exc}") from exc

    prediction_val = obj.get("prediction")
    if not isinstance(prediction_val, str) or prediction_val.strip().upper() not in PREDICTIONS:
        raise AIResponseError(f"Invalid prediction '{prediction_val}'")
    prediction = prediction_val.strip().upper()

    confidence_val = obj.get("confidence")
    if not _is_number(confidence_val):
        raise AIResponseError(f"Non-numeric confidence '{confidence_val}'")

    credibility_val = obj.get("credibilityScore")
    credibility = _clamp_score(credibility_val) if _is_number(credibility_val) else NEUTRAL_SCORE

    reasoning = obj.get("reasoning")
    return AIJudgment(
        prediction=prediction,  # type: ignore[arg-type]
        confidence=_clamp_score(confidence_val),
        reasoning=reasoning.strip() if isinstance(reasoning, str) else "",
        flags=_string_list(obj.get("flags")),
        factual_concerns=_string_list(obj.get("factualConcerns")),
        credibility_score=credibility,
    )
