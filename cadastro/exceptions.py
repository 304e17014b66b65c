"""Custom exception hierarchy for cadastro."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cadastro.validation.schema import FieldError


class CadastroError(Exception):
    """Base exception for all cadastro errors."""


class ValidationError(CadastroError):
    """Raised when record input fails schema validation.

    Carries one ``FieldError`` per failing field.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        details = "; ".join(f"{e.path}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid record data ({details})" if details else "Invalid record data")


class ConflictError(CadastroError):
    """Raised when a unique field collides with another record."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} already registered: {value}")


class NotFoundError(CadastroError):
    """Raised when a referenced record does not exist."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record {record_id} not found")


class PersistenceError(CadastroError):
    """Raised when durable storage cannot be written."""


class RecordDecodeError(PersistenceError):
    """Raised when a persisted record is missing fields or malformed."""


class ConfigurationError(CadastroError):
    """Raised when configuration is invalid or missing."""
