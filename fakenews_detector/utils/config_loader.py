from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from ..errors import ConfigError
from ..models import SourceLists

LIST_KEYS = ("credible", "unreliable")


def _normalize_domain(value: str) -> str:
    domain = str(value).strip().lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def _validate_domain_list(key: str, entries: object) -> List[str]:
    """Validate one domain list from YAML.

    Each entry must be a bare host name such as ``reuters.com``; schemes and
    paths are rejected so that typos surface at load time instead of silently
    never matching.
    """
    if entries is None:
        return []
    if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
        raise ConfigError(f"'{key}' must be a list of domain strings")
    domains: List[str] = []
    for raw in entries:
        domain = _normalize_domain(raw)
        if not domain or "/" in domain or ":" in domain or " " in domain:
            raise ConfigError(f"Invalid domain '{raw}' in '{key}'. Use a bare host like 'example.com'.")
        domains.append(domain)
    return domains


def load_source_lists(path: Path | str) -> SourceLists:
    """Load credible/unreliable news domains from a YAML file.

    YAML structure:
      - Top-level mapping
      - Key ``credible``: list of domains rated high credibility
      - Key ``unreliable``: list of domains rated low credibility

    Unknown top-level keys are ignored for forward compatibility. A domain
    present in both lists is a configuration error.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Source configuration must be a mapping at the top level")

    credible, unreliable = (_validate_domain_list(key, data.get(key)) for key in LIST_KEYS)
    overlap = set(credible) & set(unreliable)
    if overlap:
        raise ConfigError(f"Domains listed as both credible and unreliable: {sorted(overlap)}")

    return SourceLists(credible=frozenset(credible), unreliable=frozenset(unreliable))
