from __future__ import annotations

import hashlib
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..models import AnalysisResult
from ..processors.normalize import normalize_for_key
from ..utils.logging import get_logger

logger = get_logger("fnd.store.cache")

KEY_HEX_CHARS = 32
EVICTION_FRACTION = 0.2


@dataclass(frozen=True, slots=True)
class CacheEntry:
    result: AnalysisResult
    created_at: float
    expires_at: float


class ResultCache:
    """Content-addressed, TTL-bounded memo of analysis results.

    Keys are SHA-256 digests of the whole normalized text, so texts that only
    differ in case or whitespace share an entry while long texts sharing a
    prefix do not. Expired entries are dropped lazily on ``get`` and in bulk
    by ``cleanup_expired``. When full, the oldest fifth of the entries is
    evicted at once.
    """

    def __init__(
        self,
        *,
        max_size: int = 100,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def cache_key(text: str) -> str:
        normalized = normalize_for_key(text)
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:KEY_HEX_CHARS]

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, text: str) -> Optional[AnalysisResult]:
        key = self.cache_key(text)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now > entry.expires_at:
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return None
        logger.debug("Cache hit for %s (age %.0fs)", key, now - entry.created_at)
        return entry.result

    def put(self, text: str, result: AnalysisResult) -> None:
        key = self.cache_key(text)
        now = self._clock()
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                self._evict_oldest()
            self._entries[key] = CacheEntry(result=result, created_at=now, expires_at=now + self.ttl_seconds)
            size = len(self._entries)
        logger.debug("Cached result for %s (size %d/%d)", key, size, self.max_size)

    def _evict_oldest(self) -> int:
        # caller holds the lock
        to_remove = math.ceil(self.max_size * EVICTION_FRACTION)
        oldest = sorted(self._entries.items(), key=lambda kv: kv[1].created_at)[:to_remove]
        for key, _ in oldest:
            del self._entries[key]
        logger.info("Cache full; evicted %d oldest entries", len(oldest))
        return len(oldest)

    def cleanup_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("Removed %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info("Cache cleared: removed %d entries", removed)
        return removed

    def stats(self) -> dict:
        now = self._clock()
        with self._lock:
            entries = list(self._entries.values())
        expired = sum(1 for e in entries if now > e.expires_at)
        return {
            "totalEntries": len(entries),
            "validEntries": len(entries) - expired,
            "expiredEntries": expired,
            "maxSize": self.max_size,
            "utilizationPercent": round(len(entries) / self.max_size * 100),
            "ttlMinutes": self.ttl_seconds / 60,
        }
