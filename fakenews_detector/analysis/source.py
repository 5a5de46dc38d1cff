from __future__ import annotations

from typing import Dict, Optional

from ..models import Credibility, SourceInfo, SourceLists
from ..processors.normalize import extract_domain

CREDIBLE_SOURCES = frozenset(
    {
        "reuters.com",
        "apnews.com",
        "bbc.com",
        "bbc.co.uk",
        "npr.org",
        "pbs.org",
        "theguardian.com",
        "nytimes.com",
        "washingtonpost.com",
        "wsj.com",
        "economist.com",
        "ft.com",
        "bloomberg.com",
        "axios.com",
        "propublica.org",
    }
)

UNRELIABLE_SOURCES = frozenset(
    {
        "infowars.com",
        "naturalnews.com",
        "beforeitsnews.com",
        "worldnewsdailyreport.com",
        "nationalreport.net",
        "empirenews.net",
        "huzlers.com",
        "thedailymash.co.uk",
        "theonion.com",
        "clickhole.com",
    }
)

DEFAULT_SOURCE_LISTS = SourceLists(credible=CREDIBLE_SOURCES, unreliable=UNRELIABLE_SOURCES)

CREDIBILITY_SCORES: Dict[str, int] = {"high": 90, "medium": 50, "low": 10}

_DESCRIPTIONS: Dict[str, str] = {
    "high": "This is a well-known credible news organization.",
    "medium": "This source has not been verified for credibility.",
    "low": "This source has a history of publishing unreliable content.",
}


def score_for(credibility: str) -> int:
    return CREDIBILITY_SCORES.get(credibility, CREDIBILITY_SCORES["medium"])


class SourceCredibilityChecker:
    """Rate a news domain against curated allow/deny lists.

    Unlisted domains are ``medium``.
    """

    def __init__(self, lists: Optional[SourceLists] = None) -> None:
        self.lists = lists or DEFAULT_SOURCE_LISTS

    def check(self, domain: str) -> SourceInfo:
        normalized = domain.strip().lower()
        if normalized.startswith("www."):
            normalized = normalized[4:]

        credibility: Credibility = "medium"
        if normalized in self.lists.credible:
            credibility = "high"
        elif normalized in self.lists.unreliable:
            credibility = "low"
        return SourceInfo(domain=domain, credibility=credibility, description=_DESCRIPTIONS[credibility])

    def check_url(self, url: str) -> Optional[SourceInfo]:
        domain = extract_domain(url)
        return self.check(domain) if domain else None
