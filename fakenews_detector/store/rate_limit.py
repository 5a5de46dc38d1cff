from __future__ import annotations

import asyncio
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from ..utils.logging import get_logger

logger = get_logger("fnd.store.rate_limit")

UNKNOWN_CLIENT = "unknown"


@dataclass(slots=True)
class RateLimitEntry:
    count: int
    window_reset_at: float


@dataclass(frozen=True, slots=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: float
    retry_after_seconds: Optional[int] = None

    def headers(self, limit: int) -> Dict[str, str]:
        """Standard rate-limit response headers for an HTTP layer."""
        out = {
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(math.ceil(self.reset_at)),
        }
        if self.retry_after_seconds is not None:
            out["Retry-After"] = str(self.retry_after_seconds)
        return out


def get_client_id(headers: Mapping[str, str]) -> str:
    """Derive a client identifier from proxy headers.

    Uses the first ``x-forwarded-for`` hop, then ``x-real-ip``, then a shared
    opaque default.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    forwarded = lowered.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = (lowered.get("x-real-ip") or "").strip()
    return real_ip or UNKNOWN_CLIENT


class RateLimiter:
    """Fixed-window request throttle keyed by client identifier."""

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._entries)

    def check(self, client_id: str, limit: int = 10, window_seconds: float = 60.0) -> RateLimitResult:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(client_id)
            if entry is None or now > entry.window_reset_at:
                entry = RateLimitEntry(count=1, window_reset_at=now + window_seconds)
                self._entries[client_id] = entry
            else:
                entry.count += 1
            count, reset_at = entry.count, entry.window_reset_at

        if count <= limit:
            return RateLimitResult(allowed=True, remaining=max(0, limit - count), reset_at=reset_at)

        retry_after = max(1, math.ceil(reset_at - now))
        logger.info("Rate limit exceeded for %s; retry after %ss", client_id, retry_after)
        return RateLimitResult(allowed=False, remaining=0, reset_at=reset_at, retry_after_seconds=retry_after)

    def sweep(self) -> int:
        """Drop clients whose window has already ended."""
        now = self._clock()
        with self._lock:
            expired = [cid for cid, e in self._entries.items() if now > e.window_reset_at]
            for cid in expired:
                del self._entries[cid]
        if expired:
            logger.debug("Rate limiter sweep removed %d clients", len(expired))
        return len(expired)

    def stats(self) -> dict:
        now = self._clock()
        with self._lock:
            rows = [(cid, e.count, e.window_reset_at) for cid, e in self._entries.items()]
        active = [
            {"client": cid[:10] + "...", "count": count, "resetIn": math.ceil(reset_at - now)}
            for cid, count, reset_at in rows
            if now <= reset_at
        ]
        return {"totalTracked": len(rows), "activeClients": len(active), "clients": active[:10]}

    # ---------------- Background sweep -----------------
    def start_sweeper(
        self,
        interval_seconds: float = 300.0,
        *,
        on_sweep: Optional[Callable[[], object]] = None,
    ) -> asyncio.Task:
        """Run ``sweep`` every ``interval_seconds`` on the running event loop.

        ``on_sweep`` runs after each pass; the service uses it to purge
        expired cache entries on the same schedule.
        """
        if self._sweeper is not None and not self._sweeper.done():
            return self._sweeper

        async def _loop() -> None:
            while True:
                await asyncio.sleep(interval_seconds)
                try:
                    self.sweep()
                    if on_sweep is not None:
                        on_sweep()
                except Exception as exc:  # noqa: BLE001 - one failed pass must not stop the sweeper
                    logger.exception("Periodic sweep failed: %s", exc)

        self._sweeper = asyncio.get_running_loop().create_task(_loop())
        return self._sweeper

    async def stop_sweeper(self) -> None:
        task, self._sweeper = self._sweeper, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
