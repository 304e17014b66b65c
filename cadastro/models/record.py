"""Registration record entity and query value types."""

from dataclasses import dataclass, fields
from datetime import date, datetime

from cadastro.models.base import Address
from cadastro.models.enums import RecordStatus, StatusFilter


@dataclass
class RecordInput:
    """Validated, normalized mutable fields of a record."""

    name: str
    email: str
    phone: str
    tax_id: str  # CPF, kept as typed ("123.456.789-09" or "12345678909")
    address: Address
    birth_date: date
    status: RecordStatus
    notes: str | None = None


@dataclass
class Record:
    """Registration entity (person + address)."""

    id: str
    name: str
    email: str
    phone: str
    tax_id: str
    address: Address
    birth_date: date
    status: RecordStatus
    created_at: datetime
    updated_at: datetime
    notes: str | None = None

    @classmethod
    def from_input(
        cls,
        record_id: str,
        data: RecordInput,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Record":
        """Build a record from validated input plus generated fields."""
        values = {f.name: getattr(data, f.name) for f in fields(RecordInput)}
        return cls(id=record_id, created_at=created_at, updated_at=updated_at, **values)

    def to_input(self) -> RecordInput:
        """Return the mutable part of this record."""
        return RecordInput(**{f.name: getattr(self, f.name) for f in fields(RecordInput)})


@dataclass
class RecordFilter:
    """Search criteria for listing records. Omitted fields match everything."""

    search: str | None = None
    status: StatusFilter | None = None


@dataclass
class RecordStats:
    """Summary counts over the collection."""

    total: int
    active_count: int
    inactive_count: int
    new_this_month: int
