from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from ...errors import AIUnavailableError
from ...utils.logging import get_logger

T = TypeVar("T")
logger = get_logger("fnd.ai.retry")


async def with_retries(
    fn: Callable[[], T],
    *,
    attempts: int = 2,
    base_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run blocking ``fn`` on a worker thread, retrying availability errors.

    Waits ``base_delay * 2**n`` seconds after the n-th failed attempt
    (1s, 2s, ... by default) without blocking the event loop. Only
    ``AIUnavailableError`` is retried; anything else propagates at once.
    """
    attempts = max(1, attempts)
    last_exc: BaseException | None = None
    for attempt in range(attempts):
        try:
            return await asyncio.to_thread(fn)
        except AIUnavailableError as exc:
            last_exc = exc
            if attempt >= attempts - 1:
                break
            delay = base_delay * (2 ** attempt)
            logger.warning("AI call failed (attempt %s/%s): %s; retrying in %.1fs", attempt + 1, attempts, exc, delay)
            await sleep(delay)
    assert last_exc is not None
    raise last_exc
