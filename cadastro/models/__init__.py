"""Domain models for registration records."""

from cadastro.models.base import Address
from cadastro.models.enums import RecordStatus, StatusFilter
from cadastro.models.record import Record, RecordFilter, RecordInput, RecordStats

__all__ = [
    "Address",
    "Record",
    "RecordFilter",
    "RecordInput",
    "RecordStats",
    "RecordStatus",
    "StatusFilter",
]
