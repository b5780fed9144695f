"""Minimum-spacing rate limiter for outgoing API requests."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from loguru import logger


class RateLimiter:
    """Serializes request issue times so no two are closer than ``min_interval``.

    Only the waiting coroutine is suspended; other tasks keep running. Callers
    that overlap observe spaced-out request starts, while their responses may
    still complete in any order.
    """

    def __init__(
        self,
        min_interval: float = 0.1,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleeper = sleeper
        self._lock = asyncio.Lock()
        self._last_request_time: float | None = None

    async def wait(self) -> float:
        """Wait until the next request may be issued.

        Returns:
            Seconds spent waiting (0 if no wait was needed)
        """
        if self.min_interval <= 0:
            return 0.0

        async with self._lock:
            wait_time = 0.0
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < self.min_interval:
                    wait_time = self.min_interval - elapsed

            if wait_time > 0:
                logger.debug(f"Rate limiting: waiting {wait_time:.3f}s")
                await self._sleeper(wait_time)

            self._last_request_time = self._clock()
            return wait_time
