"""
Key-value persistence port.

The stores persist through ``Storage``, a thin async get/set/delete/clear
facade over a pluggable backend. When no backend is configured the port
degrades to a no-op: reads return the caller's default and writes are
dropped, so the application runs entirely in memory.

Values must be JSON-compatible. Backends store a serialized copy, so
mutating a value after ``set`` never changes what was persisted.
"""

import json
import logging
from typing import Any, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceError(Exception):
    """Raised when a backend cannot read or write its transport."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)


class KeyValueBackend(Protocol):
    """Transport that physically stores values."""

    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""
        ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def clear(self) -> None: ...


class Storage:
    """
    Persistence port used by the stores.

    Usage:
        storage = Storage(SqlBackend(async_session_factory))
        decks = await storage.get("decks", [])
        await storage.set("decks", decks)
    """

    def __init__(self, backend: KeyValueBackend | None = None) -> None:
        self._backend = backend
        if backend is None:
            logger.warning("No persistence backend configured; data will not survive restarts")

    @property
    def available(self) -> bool:
        """True if a backend is attached."""
        return self._backend is not None

    async def get(self, key: str, default: T) -> T:
        if self._backend is None:
            return default
        value = await self._backend.get(key)
        if value is None:
            return default
        return value  # type: ignore[no-any-return]

    async def set(self, key: str, value: Any) -> None:
        if self._backend is None:
            return
        await self._backend.set(key, value)

    async def delete(self, key: str) -> None:
        if self._backend is None:
            return
        await self._backend.delete(key)

    async def clear(self) -> None:
        if self._backend is None:
            return
        await self._backend.clear()

    async def ping(self) -> bool:
        """
        Check that the backend is reachable.

        False when no backend is attached. Backends without a ping method
        are assumed reachable.
        """
        if self._backend is None:
            return False
        ping = getattr(self._backend, "ping", None)
        if ping is None:
            return True
        return bool(await ping())


class MemoryBackend:
    """
    Process-local backend.

    Round-trips every value through JSON on write, which catches
    non-serializable values the same way a real transport would.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Value for '{key}' is not JSON-serializable: {e}", key) from e

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def clear(self) -> None:
        self._data.clear()

    def snapshot(self) -> dict[str, Any]:
        """Decoded copy of everything stored (for inspection in tests and tooling)."""
        return {key: json.loads(raw) for key, raw in self._data.items()}
