"""Pytest configuration and fixtures."""

from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from cadastro.models import Address, RecordInput, RecordStatus
from cadastro.store import InMemoryStorage, RecordStore


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start or datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def today() -> date:
    """Fixed reference date for age validation."""
    return date(2025, 6, 10)


@pytest.fixture
def valid_data() -> dict[str, Any]:
    """Raw form input (camelCase) that passes every schema rule."""
    return {
        "name": "Maria Silva Santos",
        "email": "maria.silva@email.com",
        "phone": "(11) 99999-9999",
        "taxId": "123.456.789-09",
        "address": {
            "postalCode": "01310-100",
            "street": "Av. Paulista",
            "number": "1000",
            "complement": "Apto 101",
            "district": "Bela Vista",
            "city": "São Paulo",
            "region": "sp",
        },
        "birthDate": "1990-05-15",
        "status": "active",
        "notes": "Cliente preferencial",
    }


def _make_input(
    name: str = "Maria Silva Santos",
    email: str = "maria.silva@email.com",
    tax_id: str = "123.456.789-09",
    status: RecordStatus = RecordStatus.ACTIVE,
    **overrides: Any,
) -> RecordInput:
    """Build a validated record input with sensible defaults."""
    values: dict[str, Any] = {
        "name": name,
        "email": email,
        "phone": "(11) 99999-9999",
        "tax_id": tax_id,
        "address": Address(
            postal_code="01310-100",
            street="Av. Paulista",
            number="1000",
            district="Bela Vista",
            city="São Paulo",
            region="SP",
            complement="Apto 101",
        ),
        "birth_date": date(1990, 5, 15),
        "status": status,
        "notes": None,
    }
    values.update(overrides)
    return RecordInput(**values)


@pytest.fixture
def record_input() -> RecordInput:
    """Sample validated input."""
    return _make_input()


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock."""
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Fresh in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage, clock: FakeClock) -> RecordStore:
    """Record store over in-memory storage with a deterministic clock."""
    return RecordStore(storage, clock=clock)


@pytest.fixture
def make_input():
    """Factory for validated record inputs."""
    return _make_input
