"""
Observable in-memory state with write-behind persistence.

A store holds an immutable tuple of records. Mutators compute the next
tuple with a pure transition, publish it to subscribers synchronously and
then schedule a full rewrite of the store's storage key. Reads always
come from memory.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from deckvault.storage.port import Storage
from deckvault.storage.write_behind import PendingWrite, WriteBehind

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

Listener = Callable[[tuple[Any, ...]], None]
Clock = Callable[[], str]


def utc_now_iso() -> str:
    """Current UTC time as an ISO string with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StateStore(Generic[M]):
    """Base class for the collection and deck stores."""

    def __init__(
        self,
        storage: Storage,
        key: str,
        model: type[M],
        clock: Clock = utc_now_iso,
    ) -> None:
        self._storage = storage
        self._model = model
        self._clock = clock
        self._writer = WriteBehind(storage, key)
        self._state: tuple[M, ...] = ()
        self._listeners: list[Listener] = []
        self._last_write: PendingWrite | None = None

    @property
    def state(self) -> tuple[M, ...]:
        """Current published state."""
        return self._state

    @property
    def key(self) -> str:
        return self._writer.key

    @property
    def last_write(self) -> PendingWrite:
        """Handle of the most recent mutation's write."""
        if self._last_write is None:
            return self._writer.completed()
        return self._last_write

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked with the new state after every change.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load(self) -> None:
        """
        Replace in-memory state with what the storage port holds.

        Items that fail validation are logged and skipped.
        """
        raw = await self._storage.get(self.key, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring stored '%s': expected a list, got %s", self.key, type(raw).__name__)
            raw = []

        items: list[M] = []
        for index, item in enumerate(raw):
            try:
                items.append(self._model.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping invalid '%s' item %d: %s", self.key, index, e)

        self._state = tuple(items)
        logger.info("Loaded %d '%s' records", len(items), self.key)
        self._publish()

    def serialize(self) -> list[dict[str, Any]]:
        """Current state in its persisted JSON shape."""
        return [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in self._state]

    async def flush(self) -> None:
        """Wait for pending writes; raises PersistenceError for failures nobody awaited."""
        await self._writer.flush()

    def _commit(self, new_state: tuple[M, ...]) -> PendingWrite:
        if new_state is self._state:
            return self._writer.completed()

        self._state = new_state
        self._publish()
        self._last_write = self._writer.schedule(self.serialize())
        return self._last_write

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)
