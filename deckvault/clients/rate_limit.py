import asyncio
import time


class RateLimiter:
    """
    Spaces request start times at least ``min_interval`` seconds apart.

    Callers queue on a lock, so concurrent coroutines sharing one client
    still issue their requests one after another.
    """

    def __init__(self, min_interval: float) -> None:
        self._min_interval = min_interval
        self._lock = asyncio.Lock()
        self._last = 0.0

    async def wait(self) -> None:
        async with self._lock:
            elapsed = time.monotonic() - self._last
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last = time.monotonic()
