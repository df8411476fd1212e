from deckvault.storage.port import KeyValueBackend, MemoryBackend, PersistenceError, Storage
from deckvault.storage.sql import SqlBackend
from deckvault.storage.write_behind import PendingWrite, WriteBehind

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "PendingWrite",
    "PersistenceError",
    "SqlBackend",
    "Storage",
    "WriteBehind",
]
