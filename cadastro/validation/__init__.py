"""Input validation: identifier checksums and record field constraints."""

from cadastro.validation.identifiers import (
    is_valid_postal_code,
    is_valid_tax_id,
    only_digits,
    tax_id_check_digits,
)
from cadastro.validation.schema import (
    AddressSchema,
    FieldError,
    RecordSchema,
    ValidationResult,
    parse_record,
    validate_record,
)

__all__ = [
    "AddressSchema",
    "FieldError",
    "RecordSchema",
    "ValidationResult",
    "is_valid_postal_code",
    "is_valid_tax_id",
    "only_digits",
    "parse_record",
    "tax_id_check_digits",
    "validate_record",
]
