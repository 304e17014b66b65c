"""JSON representation of the persisted record collection."""

import json
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from cadastro.exceptions import RecordDecodeError
from cadastro.models import Address, Record, RecordStatus

_ADDRESS_FIELDS = {
    "postal_code": "postalCode",
    "street": "street",
    "number": "number",
    "complement": "complement",
    "district": "district",
    "city": "city",
    "region": "region",
}
_REQUIRED_ADDRESS_KEYS = ("postalCode", "street", "number", "district", "city", "region")
_REQUIRED_RECORD_KEYS = (
    "id",
    "name",
    "email",
    "phone",
    "taxId",
    "address",
    "birthDate",
    "status",
    "createdAt",
    "updatedAt",
)


def format_instant(value: datetime) -> str:
    """Render a timestamp as an ISO-8601 UTC instant (``...Z``)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_instant(raw: str) -> datetime:
    """Parse an ISO-8601 instant; naive values are taken as UTC."""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return format_instant(value)
    elif isinstance(value, date):
        return value.isoformat()
    return value


def address_to_dict(address: Address) -> dict[str, Any]:
    """Convert an address to its persisted form, omitting an unset complement."""
    result = {}
    for attr, key in _ADDRESS_FIELDS.items():
        value = getattr(address, attr)
        if value is not None:
            result[key] = value
    return result


def record_to_dict(record: Record) -> dict[str, Any]:
    """Convert a record to its persisted camelCase form."""
    result: dict[str, Any] = {
        "id": record.id,
        "name": record.name,
        "email": record.email,
        "phone": record.phone,
        "taxId": record.tax_id,
        "address": address_to_dict(record.address),
        "birthDate": serialize_value(record.birth_date),
        "status": serialize_value(record.status),
    }
    if record.notes is not None:
        result["notes"] = record.notes
    result["createdAt"] = serialize_value(record.created_at)
    result["updatedAt"] = serialize_value(record.updated_at)
    return result


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise RecordDecodeError(f"{where}: missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise RecordDecodeError(f"{where}: field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise RecordDecodeError(f"{where}: field '{key}' must be a string, got {type(value).__name__}")
    return value


def address_from_dict(data: Any, where: str) -> Address:
    """Decode a persisted address, rejecting missing or malformed fields."""
    if not isinstance(data, dict):
        raise RecordDecodeError(f"{where}: address must be an object")
    values = {key: _require_str(data, key, f"{where}.address") for key in _REQUIRED_ADDRESS_KEYS}
    return Address(
        postal_code=values["postalCode"],
        street=values["street"],
        number=values["number"],
        district=values["district"],
        city=values["city"],
        region=values["region"],
        complement=_optional_str(data, "complement", f"{where}.address"),
    )


def record_from_dict(data: Any, index: int = 0) -> Record:
    """Decode one persisted record.

    Raises
    ------
    RecordDecodeError
        If a required field is absent or a value cannot be parsed.
    """
    where = f"record[{index}]"
    if not isinstance(data, dict):
        raise RecordDecodeError(f"{where}: expected an object, got {type(data).__name__}")
    if isinstance(data.get("id"), str):
        where = f"record[{index}] ({data['id']})"

    values = {key: _require_str(data, key, where) for key in _REQUIRED_RECORD_KEYS if key != "address"}
    if "address" not in data:
        raise RecordDecodeError(f"{where}: missing required field 'address'")

    try:
        status = RecordStatus(values["status"])
    except ValueError as e:
        raise RecordDecodeError(f"{where}: unknown status {values['status']!r}") from e

    try:
        birth_date = date.fromisoformat(values["birthDate"])
        created_at = parse_instant(values["createdAt"])
        updated_at = parse_instant(values["updatedAt"])
    except ValueError as e:
        raise RecordDecodeError(f"{where}: {e}") from e

    return Record(
        id=values["id"],
        name=values["name"],
        email=values["email"],
        phone=values["phone"],
        tax_id=values["taxId"],
        address=address_from_dict(data["address"], where),
        birth_date=birth_date,
        status=status,
        notes=_optional_str(data, "notes", where),
        created_at=created_at,
        updated_at=updated_at,
    )


def dumps_records(records: list[Record]) -> str:
    """Serialize the full collection to the persisted JSON text."""
    return json.dumps([record_to_dict(r) for r in records], ensure_ascii=False)


def loads_records(payload: str) -> list[Record]:
    """Decode the persisted JSON text into records.

    Raises
    ------
    json.JSONDecodeError
        If the payload is not JSON.
    TypeError
        If the top-level value is not an array.
    RecordDecodeError
        If an element is not a complete record.
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise TypeError(f"Expected a JSON array of records, got {type(data).__name__}")
    return [record_from_dict(item, i) for i, item in enumerate(data)]
