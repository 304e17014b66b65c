"""Structural and checksum validators for Brazilian identifiers.

All functions are total: any input, including non-strings, yields a
result instead of an exception.
"""

import re

_NON_DIGITS = re.compile(r"[^0-9]")

TAX_ID_LENGTH = 11
POSTAL_CODE_LENGTH = 8


def only_digits(raw: str) -> str:
    """Strip every character that is not an ASCII digit."""
    if not isinstance(raw, str):
        return ""
    return _NON_DIGITS.sub("", raw)


def _check_digit(digits: list[int]) -> int:
    """Mod-11 check digit over ``digits`` with weights len+1 .. 2."""
    total = sum(d * w for d, w in zip(digits, range(len(digits) + 1, 1, -1)))
    remainder = 11 - (total % 11)
    return 0 if remainder >= 10 else remainder


def tax_id_check_digits(first_nine: str) -> str:
    """Compute the two CPF check digits for a 9-digit base.

    Parameters
    ----------
    first_nine : str
        Exactly nine ASCII digits.

    Returns
    -------
    str
        The two check digits, e.g. ``"09"`` for ``"123456789"``.
    """
    if len(first_nine) != 9 or not first_nine.isascii() or not first_nine.isdigit():
        raise ValueError(f"Expected 9 digits, got {first_nine!r}")
    digits = [int(c) for c in first_nine]
    d1 = _check_digit(digits)
    d2 = _check_digit(digits + [d1])
    return f"{d1}{d2}"


def is_valid_tax_id(raw: str) -> bool:
    """Validate a CPF: 11 digits, not all identical, both check digits match."""
    clean = only_digits(raw)
    if len(clean) != TAX_ID_LENGTH:
        return False
    if len(set(clean)) == 1:
        return False

    digits = [int(c) for c in clean]
    if _check_digit(digits[:9]) != digits[9]:
        return False
    return _check_digit(digits[:10]) == digits[10]


def is_valid_postal_code(raw: str) -> bool:
    """Validate a CEP structurally: exactly 8 digits once formatting is removed."""
    return len(only_digits(raw)) == POSTAL_CODE_LENGTH
