"""Fixed example records used to seed an empty store for demos."""

from copy import deepcopy
from datetime import date, datetime, timezone

from cadastro.models import Address, Record, RecordStatus

SAMPLE_RECORDS: tuple[Record, ...] = (
    Record(
        id="1",
        name="Maria Silva Santos",
        email="maria.silva@email.com",
        phone="(11) 99999-9999",
        tax_id="123.456.789-09",
        address=Address(
            postal_code="01310-100",
            street="Av. Paulista",
            number="1000",
            complement="Apto 101",
            district="Bela Vista",
            city="São Paulo",
            region="SP",
        ),
        birth_date=date(1990, 5, 15),
        status=RecordStatus.ACTIVE,
        notes="Cliente preferencial",
        created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
    ),
    Record(
        id="2",
        name="João Carlos Oliveira",
        email="joao.carlos@email.com",
        phone="(11) 88888-8888",
        tax_id="987.654.321-00",
        address=Address(
            postal_code="04038-001",
            street="R. Vergueiro",
            number="2000",
            district="Vila Mariana",
            city="São Paulo",
            region="SP",
        ),
        birth_date=date(1985, 8, 22),
        status=RecordStatus.ACTIVE,
        created_at=datetime(2024, 2, 10, tzinfo=timezone.utc),
        updated_at=datetime(2024, 2, 10, tzinfo=timezone.utc),
    ),
    Record(
        id="3",
        name="Ana Paula Costa",
        email="ana.paula@email.com",
        phone="(11) 77777-7777",
        tax_id="456.789.123-64",
        address=Address(
            postal_code="05406-000",
            street="R. Harmonia",
            number="500",
            complement="Casa 2",
            district="Vila Madalena",
            city="São Paulo",
            region="SP",
        ),
        birth_date=date(1992, 12, 3),
        status=RecordStatus.INACTIVE,
        notes="Contato suspenso temporariamente",
        created_at=datetime(2024, 3, 5, tzinfo=timezone.utc),
        updated_at=datetime(2024, 3, 20, tzinfo=timezone.utc),
    ),
)


def sample_records() -> list[Record]:
    """Return fresh copies of the sample records."""
    return [deepcopy(r) for r in SAMPLE_RECORDS]
