from __future__ import annotations

from typing import Iterable, List, Tuple

from ..models import Highlight

MAX_HIGHLIGHTS = 10


def finalize_highlights(text: str, highlights: Iterable[Highlight], *, limit: int = MAX_HIGHLIGHTS) -> Tuple[Highlight, ...]:
    """Reduce scorer highlights to a non-overlapping, position-ordered list.

    Each highlight is located by its first case-insensitive occurrence in
    ``text``. Highlights whose text was already seen (ignoring case) or that
    cannot be found are dropped. A span starting before the end of the
    previously kept span is discarded. At most ``limit`` survive.
    """
    lowered = text.lower()
    seen: set[str] = set()
    positioned: List[Tuple[int, int, Highlight]] = []

    for h in highlights:
        needle = h.text.lower()
        if not needle or needle in seen:
            continue
        seen.add(needle)
        start = lowered.find(needle)
        if start == -1:
            continue
        positioned.append((start, start + len(needle), h))

    positioned.sort(key=lambda item: (item[0], -item[1]))

    kept: List[Highlight] = []
    last_end = 0
    for start, end, h in positioned:
        if kept and start < last_end:
            continue
        kept.append(h)
        last_end = end
        if len(kept) >= limit:
            break
    return tuple(kept)
