from __future__ import annotations

import re
import unicodedata
from urllib.parse import urlparse

_WHITESPACE = re.compile(r"\s+")
# C0 controls except tab/newline/CR, plus DEL
_CONTROL_CHARS = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F]")

# Typographic punctuation folded to ASCII; BOM and zero-width characters dropped
_ASCII_FOLD = str.maketrans(
    {
        "\u2018": "'",
        "\u2019": "'",
        "\u201C": '"',
        "\u201D": '"',
        "\u2013": "-",
        "\u2014": "-",
        "\u00A0": " ",
        "\uFEFF": None,
        "\u200B": None,
        "\u200D": None,
    }
)


def normalize_plain_text(text: str | None) -> str:
    """Fold typographic punctuation, apply NFKC and collapse whitespace.

    Control characters become spaces before the collapse, so "a\\x07b" reads
    as "a b".
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFKC", text.translate(_ASCII_FOLD))
    return _WHITESPACE.sub(" ", _CONTROL_CHARS.sub(" ", folded)).strip()


def normalize_for_key(text: str | None) -> str:
    """Canonical form used to derive cache keys.

    "Hello   World", "hello world" and "Hello World " all map to the same
    string.
    """
    return normalize_plain_text(text).lower()


def clamp_text(text: str, max_chars: int) -> str:
    """Truncate ``text`` to ``max_chars`` characters (no-op when shorter)."""
    if max_chars > 0 and len(text) > max_chars:
        return text[:max_chars]
    return text


def extract_domain(url: str | None) -> str:
    """Return the lower-case host of ``url`` without a leading ``www.``.

    Returns an empty string for anything that is not an absolute http(s) URL.
    """
    if not url:
        return ""
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return ""
    host = parsed.hostname.lower()
    return host[4:] if host.startswith("www.") else host
