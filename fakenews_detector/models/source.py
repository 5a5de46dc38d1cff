from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Literal

Credibility = Literal["high", "medium", "low"]


@dataclass(frozen=True, slots=True)
class SourceInfo:
    """Credibility assessment of the domain an article came from."""

    domain: str
    credibility: Credibility
    description: str = ""

    def to_dict(self) -> dict:
        return {"domain": self.domain, "credibility": self.credibility, "description": self.description}


@dataclass(frozen=True, slots=True)
class SourceLists:
    """Static allow/deny lists of news domains (lower-case, no ``www.``)."""

    credible: FrozenSet[str] = field(default_factory=frozenset)
    unreliable: FrozenSet[str] = field(default_factory=frozenset)
