"""Async façade consumed by user interfaces.

Raw input is validated against the record schema before any store call,
so a ``ValidationError`` never touches storage.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping

from cadastro.config import CadastroConfig
from cadastro.exceptions import ConfigurationError
from cadastro.models import Record, RecordFilter, RecordStats, StatusFilter
from cadastro.sample_data import sample_records
from cadastro.store.records import RecordStore
from cadastro.store.storage import InMemoryStorage, JsonFileStorage, PostgresStorage, StoragePort
from cadastro.validation.schema import parse_record

logger = logging.getLogger(__name__)


def build_storage(config: CadastroConfig) -> StoragePort:
    """Instantiate the storage backend named by configuration."""
    backend = config.storage.backend
    if backend == "memory":
        return InMemoryStorage()
    if backend == "json":
        return JsonFileStorage(config.storage.data_dir)
    if backend == "postgres":
        return PostgresStorage(config.postgres.connection_string)
    raise ConfigurationError(f"Unknown storage backend {backend!r}")


class CadastroService:
    """Validated CRUD, search and statistics over a ``RecordStore``."""

    def __init__(self, store: RecordStore, today: date | None = None) -> None:
        self.store = store
        self._today = today

    @classmethod
    def from_config(cls, config: CadastroConfig) -> "CadastroService":
        storage = build_storage(config)
        logger.debug("Using %s storage", config.storage.backend)
        return cls(RecordStore(storage, key=config.storage.blob_key))

    async def list(
        self,
        search: str | None = None,
        status: StatusFilter | str | None = None,
    ) -> list[Record]:
        status_filter = StatusFilter(status) if status is not None else None
        return await self.store.list(RecordFilter(search=search, status=status_filter))

    async def get(self, record_id: str) -> Record:
        return await self.store.get(record_id)

    async def create(self, data: Mapping[str, Any]) -> Record:
        """Validate raw input and create a record from it."""
        return await self.store.create(parse_record(data, today=self._today))

    async def update(self, record_id: str, data: Mapping[str, Any]) -> Record:
        """Validate raw input and replace the record's mutable fields."""
        return await self.store.update(record_id, parse_record(data, today=self._today))

    async def delete(self, record_id: str) -> None:
        await self.store.delete(record_id)

    async def stats(self) -> RecordStats:
        return await self.store.stats()

    async def initialize_sample_data(self) -> bool:
        """Seed the example records if the store holds no data yet."""
        return await self.store.seed(sample_records())
