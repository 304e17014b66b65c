"""Record persistence: the uniqueness-constrained store and its backends."""

from cadastro.store.records import RecordStore
from cadastro.store.storage import InMemoryStorage, JsonFileStorage, PostgresStorage, StoragePort

__all__ = ["InMemoryStorage", "JsonFileStorage", "PostgresStorage", "RecordStore", "StoragePort"]
