"""cadastro - validated, uniqueness-constrained registration records."""

from cadastro.exceptions import (
    CadastroError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    RecordDecodeError,
    ValidationError,
)
from cadastro.models import Address, Record, RecordFilter, RecordInput, RecordStats, RecordStatus, StatusFilter
from cadastro.service import CadastroService
from cadastro.store import InMemoryStorage, JsonFileStorage, PostgresStorage, RecordStore

__version__ = "0.1.0"

__all__ = [
    "Address",
    "CadastroError",
    "CadastroService",
    "ConfigurationError",
    "ConflictError",
    "InMemoryStorage",
    "JsonFileStorage",
    "NotFoundError",
    "PersistenceError",
    "PostgresStorage",
    "Record",
    "RecordDecodeError",
    "RecordFilter",
    "RecordInput",
    "RecordStats",
    "RecordStatus",
    "RecordStore",
    "StatusFilter",
    "ValidationError",
]
