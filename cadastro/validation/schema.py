"""Declarative field constraints for registration input.

Input mappings use the camelCase names of the persisted format
(``taxId``, ``birthDate``, ``address.postalCode``); snake_case names are
accepted as well.  Every field is checked, and failures come back as one
``FieldError`` per field rather than a single opaque message.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from cadastro.exceptions import ValidationError
from cadastro.models import Address, RecordInput, RecordStatus
from cadastro.validation.identifiers import is_valid_postal_code, is_valid_tax_id

NAME_PATTERN = re.compile(r"[a-zA-ZÀ-ÿ\s]+")
PHONE_PATTERN = re.compile(r"\([0-9]{2}\)\s[0-9]{4,5}-[0-9]{4}")
EMAIL_PATTERN = re.compile(
    r"(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+-]@(?:[A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}",
    re.IGNORECASE,
)
REGION_PATTERN = re.compile(r"[A-Za-z]{2}")
MAX_AGE_YEARS = 120


@dataclass(frozen=True)
class FieldError:
    """A validation failure for one field, addressed by dotted path."""

    path: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of validating one input mapping."""

    value: RecordInput | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.value is not None and not self.errors


class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AddressSchema(_InputModel):
    postal_code: str = Field(min_length=8)
    street: str = Field(min_length=2, max_length=100)
    number: str = Field(min_length=1, max_length=10)
    complement: str | None = None
    district: str = Field(min_length=2, max_length=50)
    city: str = Field(min_length=2, max_length=50)
    region: str = Field(min_length=2, max_length=2)

    @field_validator("postal_code")
    @classmethod
    def _check_postal_code(cls, value: str) -> str:
        if not is_valid_postal_code(value):
            raise ValueError("Postal code must have 8 digits")
        return value

    @field_validator("region")
    @classmethod
    def _normalize_region(cls, value: str) -> str:
        if not REGION_PATTERN.fullmatch(value):
            raise ValueError("Region must be a 2-letter state code")
        return value.upper()

    def to_address(self) -> Address:
        return Address(
            postal_code=self.postal_code,
            street=self.street,
            number=self.number,
            district=self.district,
            city=self.city,
            region=self.region,
            complement=self.complement,
        )


class RecordSchema(_InputModel):
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=100)
    phone: str = Field(min_length=10, max_length=15)
    tax_id: str
    address: AddressSchema
    birth_date: date
    status: RecordStatus
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not NAME_PATTERN.fullmatch(value):
            raise ValueError("Name must contain only letters and spaces")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("Invalid email address")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        if not PHONE_PATTERN.fullmatch(value):
            raise ValueError("Phone must match (NN) NNNN-NNNN or (NN) NNNNN-NNNN")
        return value

    @field_validator("tax_id")
    @classmethod
    def _check_tax_id(cls, value: str) -> str:
        if not is_valid_tax_id(value):
            raise ValueError("Invalid CPF")
        return value

    @field_validator("birth_date", mode="before")
    @classmethod
    def _require_date_string(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError("Birth date must be an ISO date string (YYYY-MM-DD)")
        return value

    @field_validator("birth_date")
    @classmethod
    def _check_age(cls, value: date, info: ValidationInfo) -> date:
        today = (info.context or {}).get("today") or date.today()
        age = today.year - value.year
        if not 0 <= age <= MAX_AGE_YEARS:
            raise ValueError(f"Birth date must imply an age between 0 and {MAX_AGE_YEARS} years")
        return value

    def to_input(self) -> RecordInput:
        return RecordInput(
            name=self.name,
            email=self.email,
            phone=self.phone,
            tax_id=self.tax_id,
            address=self.address.to_address(),
            birth_date=self.birth_date,
            status=self.status,
            notes=self.notes,
        )


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    seen: set[str] = set()
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or "record"
        if path in seen:
            continue
        seen.add(path)
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.append(FieldError(path=path, message=message))
    return errors


def validate_record(data: Mapping[str, Any], today: date | None = None) -> ValidationResult:
    """Validate raw input without raising.

    Parameters
    ----------
    data : Mapping[str, Any]
        Raw form input (camelCase or snake_case keys).
    today : date | None
        Reference date for the age rule (default: today).

    Returns
    -------
    ValidationResult
        The normalized ``RecordInput`` or the list of field errors.
    """
    try:
        model = RecordSchema.model_validate(data, context={"today": today})
    except PydanticValidationError as e:
        return ValidationResult(errors=_field_errors(e))
    return ValidationResult(value=model.to_input())


def parse_record(data: Mapping[str, Any], today: date | None = None) -> RecordInput:
    """Validate raw input, raising ``ValidationError`` with every field error."""
    result = validate_record(data, today=today)
    if not result.is_valid:
        raise ValidationError(result.errors)
    return result.value
