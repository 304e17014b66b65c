"""Generators for valid registration input."""

from __future__ import annotations

import random
from typing import Iterator

from cadastro.generators.base import BaseGenerator
from cadastro.models import Address, RecordInput, RecordStatus
from cadastro.validation.identifiers import tax_id_check_digits
from cadastro.validation.schema import NAME_PATTERN

# Brazilian area codes (DDD) in use
AREA_CODES = (
    11, 12, 13, 14, 15, 16, 17, 18, 19, 21, 22, 24, 27, 28, 31, 32, 33, 34, 35, 37, 38,
    41, 42, 43, 44, 45, 46, 47, 48, 49, 51, 53, 54, 55, 61, 62, 63, 64, 65, 66, 67, 68,
    69, 71, 73, 74, 75, 77, 79, 81, 82, 83, 84, 85, 86, 87, 88, 89, 91, 92, 93, 94, 95,
    96, 97, 98, 99,
)


def generate_tax_id(formatted: bool = True, rng: random.Random | None = None) -> str:
    """Generate a checksum-valid CPF.

    Parameters
    ----------
    formatted : bool
        Return ``XXX.XXX.XXX-XX`` instead of 11 bare digits.
    rng : random.Random | None
        Source of randomness (default: module-level ``random``).
    """
    rng = rng or random
    while True:
        base = "".join(str(rng.randint(0, 9)) for _ in range(9))
        if len(set(base)) > 1:
            break
    raw = base + tax_id_check_digits(base)
    if not formatted:
        return raw
    return f"{raw[:3]}.{raw[3:6]}.{raw[6:9]}-{raw[9:]}"


class RecordInputGenerator(BaseGenerator):
    """Generate synthetic, schema-valid record input."""

    STATUSES = list(RecordStatus)
    STATUS_WEIGHTS = [0.8, 0.2]

    def generate(self) -> RecordInput:
        """Generate a single record input.

        Returns
        -------
        RecordInput
            Input that passes every schema rule.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[RecordInput]:
        """Generate multiple record inputs with distinct emails and tax IDs.

        Parameters
        ----------
        count : int
            Number of inputs to generate.

        Yields
        ------
        RecordInput
            Generated inputs.
        """
        emails: set[str] = set()
        tax_ids: set[str] = set()
        produced = 0
        while produced < count:
            data = self._generate_one()
            if data.email in emails or data.tax_id in tax_ids:
                continue
            emails.add(data.email)
            tax_ids.add(data.tax_id)
            produced += 1
            yield data

    def _generate_one(self) -> RecordInput:
        status = self.random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]
        return RecordInput(
            name=self._name(),
            email=self.fake.email(),
            phone=self._phone(),
            tax_id=generate_tax_id(formatted=True, rng=self.random),
            address=self._address(),
            birth_date=self.fake.date_of_birth(minimum_age=18, maximum_age=90),
            status=status,
            notes=self.fake.sentence() if self.random.random() < 0.3 else None,
        )

    def _name(self) -> str:
        # Faker names may carry prefixes like "Dr." that the schema rejects
        while True:
            name = f"{self.fake.first_name()} {self.fake.last_name()} {self.fake.last_name()}"
            if NAME_PATTERN.fullmatch(name) and len(name) <= 100:
                return name

    def _phone(self) -> str:
        area = self.random.choice(AREA_CODES)
        return f"({area}) 9{self.random.randint(0, 9999):04d}-{self.random.randint(0, 9999):04d}"

    def _address(self) -> Address:
        return Address(
            postal_code=self.fake.postcode(),
            street=self.fake.street_name()[:100],
            number=str(self.random.randint(1, 9999)),
            complement=f"Apto {self.random.randint(1, 300)}" if self.random.random() < 0.4 else None,
            district=self.fake.bairro()[:50],
            city=self.fake.city()[:50],
            region=self.fake.estado_sigla(),
        )
