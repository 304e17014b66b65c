"""Value types embedded in records."""

from dataclasses import dataclass


@dataclass
class Address:
    """Brazilian postal address.

    Fields:
    - postal_code: CEP, 8 digits, formatted or not (``"01310-100"``)
    - district: bairro
    - region: UF, two upper-case letters (``"SP"``)
    """

    postal_code: str
    street: str
    number: str
    district: str
    city: str
    region: str
    complement: str | None = None
