"""Uniqueness-constrained record store over a blob storage backend."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

from cadastro.config import DEFAULT_BLOB_KEY
from cadastro.exceptions import ConflictError, NotFoundError, PersistenceError
from cadastro.models import Record, RecordFilter, RecordInput, RecordStats
from cadastro.query import compute_stats, filter_records
from cadastro.store.serialization import dumps_records, loads_records
from cadastro.store.storage import StoragePort
from cadastro.validation.identifiers import only_digits

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class RecordStore:
    """Keyed collection of records persisted as a single blob.

    Every mutation reads the whole collection, applies the change and
    writes the whole collection back.  Mutations on one store are
    serialized by a lock so their read-modify-write sequences never
    interleave.  The store checks uniqueness and existence only; field
    shapes are validated before data reaches it.

    Parameters
    ----------
    storage : StoragePort
        Backend holding the serialized collection.
    key : str
        Name of the blob holding the collection.
    clock : Callable[[], datetime] | None
        Source of timezone-aware "now" (default: UTC wall clock).
    id_factory : Callable[[], str] | None
        Generator of new record ids (default: random UUID hex).
    """

    def __init__(
        self,
        storage: StoragePort,
        key: str = DEFAULT_BLOB_KEY,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self._clock = clock or _utcnow
        self._new_id = id_factory or _new_id
        self._lock = asyncio.Lock()

    # --- Persistence ---

    async def _load(self) -> list[Record]:
        """Read the collection; unreadable or corrupt blobs count as empty."""
        try:
            payload = await self.storage.read_blob(self.key)
        except Exception:
            logger.warning("Could not read '%s', treating collection as empty", self.key, exc_info=True)
            return []
        if payload is None:
            return []
        try:
            return loads_records(payload)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("Corrupt data in '%s' (%s), treating collection as empty", self.key, e)
            return []

    async def _save(self, records: list[Record]) -> None:
        payload = dumps_records(records)
        try:
            await self.storage.write_blob(self.key, payload)
        except Exception as e:
            logger.error("Failed to write '%s': %s", self.key, e)
            raise PersistenceError(f"Could not save records: {e}") from e

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    @staticmethod
    def _check_unique(records: list[Record], data: RecordInput, exclude_id: str | None = None) -> None:
        for other in records:
            if other.id == exclude_id:
                continue
            if other.email == data.email:
                raise ConflictError("email", data.email)
        tax_digits = only_digits(data.tax_id)
        for other in records:
            if other.id == exclude_id:
                continue
            if only_digits(other.tax_id) == tax_digits:
                raise ConflictError("tax_id", data.tax_id)

    @staticmethod
    def _index_of(records: list[Record], record_id: str) -> int:
        for i, record in enumerate(records):
            if record.id == record_id:
                return i
        raise NotFoundError(record_id)

    # --- Queries ---

    async def list(self, record_filter: RecordFilter | None = None) -> list[Record]:
        """Return matching records, most recently created first."""
        return filter_records(await self._load(), record_filter)

    async def get(self, record_id: str) -> Record:
        """Return the record with ``record_id``.

        Raises
        ------
        NotFoundError
            If no record has that id.
        """
        records = await self._load()
        return records[self._index_of(records, record_id)]

    async def count(self) -> int:
        return len(await self._load())

    async def stats(self, now: datetime | None = None) -> RecordStats:
        """Summary counts over the current collection."""
        return compute_stats(await self._load(), now=now or self._now())

    # --- Mutations ---

    async def create(self, data: RecordInput) -> Record:
        """Add a record built from validated input.

        Raises
        ------
        ConflictError
            If the email or tax ID is already registered.
        PersistenceError
            If the collection cannot be written.
        """
        async with self._lock:
            records = await self._load()
            self._check_unique(records, data)

            existing_ids = {r.id for r in records}
            record_id = self._new_id()
            while record_id in existing_ids:
                record_id = self._new_id()

            now = self._now()
            record = Record.from_input(record_id, data, created_at=now, updated_at=now)
            records.append(record)
            await self._save(records)

        logger.info("Created record %s", record.id, extra={"record_id": record.id})
        return record

    async def update(self, record_id: str, data: RecordInput) -> Record:
        """Replace every mutable field of an existing record.

        ``id`` and ``created_at`` are preserved; ``updated_at`` always
        moves forward, even when the clock has not advanced.

        Raises
        ------
        NotFoundError
            If no record has ``record_id``.
        ConflictError
            If the email or tax ID belongs to a different record.
        PersistenceError
            If the collection cannot be written.
        """
        async with self._lock:
            records = await self._load()
            index = self._index_of(records, record_id)
            self._check_unique(records, data, exclude_id=record_id)

            current = records[index]
            updated_at = max(self._now(), current.updated_at + _TICK, current.created_at)
            record = Record.from_input(
                current.id,
                data,
                created_at=current.created_at,
                updated_at=updated_at,
            )
            records[index] = record
            await self._save(records)

        logger.info("Updated record %s", record_id, extra={"record_id": record_id})
        return record

    async def delete(self, record_id: str) -> None:
        """Remove a record.

        Raises
        ------
        NotFoundError
            If no record has ``record_id``.
        PersistenceError
            If the collection cannot be written.
        """
        async with self._lock:
            records = await self._load()
            index = self._index_of(records, record_id)
            del records[index]
            await self._save(records)

        logger.info("Deleted record %s", record_id, extra={"record_id": record_id})

    async def seed(self, records: Iterable[Record]) -> bool:
        """Write ``records`` only if the collection is empty.

        Returns
        -------
        bool
            True if the records were written, False if data already existed.
        """
        async with self._lock:
            if await self._load():
                return False
            seeded = list(records)
            await self._save(seeded)

        logger.info("Seeded %d records into '%s'", len(seeded), self.key)
        return True
