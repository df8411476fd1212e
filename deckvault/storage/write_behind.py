"""
Write-behind persistence.

Stores publish new state synchronously and hand the serialized value to a
``WriteBehind`` queue, which writes it through the persistence port as a
background task. Writes for one key are applied in the order they were
scheduled.

Each scheduled write returns a ``PendingWrite`` handle. Awaiting it waits
for durability and re-raises a write failure. Nothing awaits by default;
``flush()`` waits for writes still in flight and reports the failures that
no caller has awaited. A failure is delivered once: to whoever awaits its
handle, otherwise to the next ``flush()``.
"""

import asyncio
import logging
from collections.abc import Generator
from typing import Any

from deckvault.storage.port import PersistenceError, Storage

logger = logging.getLogger(__name__)


class PendingWrite:
    """Awaitable handle for one scheduled write."""

    def __init__(self, future: "asyncio.Future[None]") -> None:
        self._future = future
        self.observed = False

    def __await__(self) -> Generator[Any, None, None]:
        self.observed = True
        return self._future.__await__()

    def done(self) -> bool:
        return self._future.done()


class WriteBehind:
    """Serialized full-value writes of a single storage key."""

    def __init__(self, storage: Storage, key: str) -> None:
        self._storage = storage
        self._key = key
        self._lock = asyncio.Lock()
        self._in_flight: dict["asyncio.Task[None]", PendingWrite] = {}
        self._failed: list[PendingWrite] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def pending(self) -> int:
        """Number of writes not yet completed."""
        return len(self._in_flight)

    @property
    def unreported(self) -> int:
        """Failed writes whose handles nobody has awaited."""
        return sum(1 for write in self._failed if not write.observed)

    def schedule(self, value: Any) -> PendingWrite:
        """
        Queue a write of ``value`` and return its handle.

        Must be called from a running event loop.
        """
        task = asyncio.get_running_loop().create_task(self._write(value))
        handle = PendingWrite(task)
        self._in_flight[task] = handle
        task.add_done_callback(self._settle)
        return handle

    def completed(self) -> PendingWrite:
        """Handle for a mutation that needed no write."""
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        future.set_result(None)
        return PendingWrite(future)

    async def flush(self) -> None:
        """
        Wait for writes in flight and report unawaited failures.

        Raises:
            PersistenceError: If a write failed and its handle was never
                awaited. In-memory state is unaffected.
        """
        in_flight = list(self._in_flight)
        if in_flight:
            await asyncio.gather(*in_flight, return_exceptions=True)

        failures, self._failed = [w for w in self._failed if not w.observed], []
        if failures:
            raise PersistenceError(
                f"{len(failures)} writes to '{self._key}' failed",
                self._key,
            ) from failures[0]._future.exception()

    async def _write(self, value: Any) -> None:
        async with self._lock:
            await self._storage.set(self._key, value)

    def _settle(self, task: "asyncio.Task[None]") -> None:
        handle = self._in_flight.pop(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        logger.error("Write-behind to '%s' failed: %s", self._key, error)
        # Drop failures already delivered to an awaiting caller
        self._failed = [w for w in self._failed if not w.observed]
        if not handle.observed:
            self._failed.append(handle)
