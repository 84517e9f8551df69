"""
Request pacing for outbound geocoding calls.

Mapbox enforces per-token rate limits and the pipeline geocodes candidates
back to back, so every geocoding call goes through one shared limiter that
keeps a minimum spacing between consecutive calls. The first call is never
delayed.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional


class RateLimiter:
    """
    Minimum-interval limiter (a token bucket of capacity one).

    ``acquire()`` returns immediately for the first caller, and afterwards
    only once ``min_interval_ms`` has passed since the previous acquisition.
    Concurrent callers are serialized in arrival order.
    """

    def __init__(
        self,
        min_interval_ms: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be >= 0")
        self.min_interval = min_interval_ms / 1000
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """
        Wait for the next free slot.

        Returns:
            Seconds spent waiting (0.0 when no wait was needed).
        """
        async with self._lock:
            now = self._clock()
            waited = 0.0

            if self._last is not None:
                ready_at = self._last + self.min_interval
                if now < ready_at:
                    waited = ready_at - now
                    await self._sleep(waited)
                    now = ready_at

            self._last = now
            return waited

    def reset(self) -> None:
        """Forget the previous acquisition (next call passes immediately)."""
        self._last = None
