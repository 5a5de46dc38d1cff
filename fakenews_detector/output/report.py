from __future__ import annotations

import json
from typing import List, Optional

from ..models import AnalysisOutcome, AnalysisResult, SourceInfo

_PREDICTION_LABEL = {
    "FAKE": "Likely fake",
    "REAL": "Likely real",
    "UNCERTAIN": "Uncertain",
}


def risk_label(score: int) -> str:
    if score < 40:
        return "High Risk"
    if score < 70:
        return "Medium Risk"
    return "Low Risk"


def format_result_text(result: AnalysisResult, *, cached: bool = False) -> str:
    s = result.signals
    lines: List[str] = [
        f"### {_PREDICTION_LABEL[result.prediction]} ({result.confidence}% confidence)",
        "",
        f"- Overall score: {result.overall_score}/100 ({risk_label(result.overall_score)})",
        f"- Provider: {result.provider}{' (cached)' if cached else ''}",
    ]
    if result.source is not None:
        lines.append(f"- Source: {result.source.domain} ({result.source.credibility} credibility)")
    lines += [
        "",
        "### Signals",
        "",
        f"- AI credibility: {s.ml_score}",
        f"- Sentiment: {s.sentiment_score}",
        f"- Clickbait: {s.clickbait_score}",
        f"- Bias: {s.bias_score}",
        f"- Source: {s.source_score}",
        "",
        "### Flags",
        "",
    ]
    lines += [f"- {f}" for f in result.flags] or ["- None"]
    if result.highlights:
        lines += ["", "### Highlights", ""]
        lines += [f'- "{h.text}" [{h.type}]: {h.reason}' for h in result.highlights]
    lines += ["", "### Explanation", "", result.explanation]
    return "\n".join(lines) + "\n"


def format_outcome_json(outcome: AnalysisOutcome) -> str:
    payload = outcome.result.to_dict()
    payload["meta"] = outcome.meta()
    return json.dumps(payload, ensure_ascii=False, indent=2)


def format_source_text(info: Optional[SourceInfo]) -> str:
    if info is None:
        return "Not an absolute http(s) URL; no domain to check.\n"
    return f"{info.domain}: {info.credibility} credibility. {info.description}\n"
