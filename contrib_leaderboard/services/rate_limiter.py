import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger()


class RollingWindowRateLimiter:
    """Admit at most ``max_requests`` initiations in any trailing ``period`` seconds.

    Excess callers are suspended, never rejected, and released in arrival
    order as older initiations age out of the window. One instance is shared
    by every fetch of a run.

    Windows are half-open: an initiation at ``t`` counts against
    ``[t, t + period)`` and frees its slot at exactly ``t + period``.
    """

    def __init__(
        self,
        max_requests: int = 60,
        period: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if period <= 0:
            raise ValueError("period must be positive")
        self.max_requests = max_requests
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._initiations: deque[float] = deque()
        self._lock = asyncio.Lock()

    def _evict(self, now: float) -> None:
        while self._initiations and now - self._initiations[0] >= self.period:
            self._initiations.popleft()

    @property
    def in_window(self) -> int:
        """Number of initiations still counted against the current window."""
        self._evict(self._clock())
        return len(self._initiations)

    async def acquire(self) -> None:
        # The lock is held while sleeping so waiters keep FIFO order.
        async with self._lock:
            while True:
                now = self._clock()
                self._evict(now)
                if len(self._initiations) < self.max_requests:
                    self._initiations.append(now)
                    return
                delay = self.period - (now - self._initiations[0])
                logger.info(
                    "Rate limit reached, delaying request",
                    delay_seconds=round(delay, 3),
                    max_requests=self.max_requests,
                )
                await self._sleep(delay)

    async def __aenter__(self) -> "RollingWindowRateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None
