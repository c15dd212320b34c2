"""
Input Validator

Stateless checks applied to request payloads before they reach a store.
Every function either returns the parsed value or raises
:class:`~restaurant_api.core.exceptions.ValidationError` naming the
offending field.

Usage:
    from restaurant_api.services.validator import require_fields, parse_phone

    require_fields(payload, ["name", "tel"])
    phone = parse_phone(payload["tel"])
"""

import math
import re
from typing import Any, Iterable, Mapping

from restaurant_api.core.exceptions import ValidationError

PHONE_DIGITS = 8

# Leading zero excluded: phones are stored as integers and must keep 8 digits
_PHONE_PATTERN = re.compile(rf"[1-9][0-9]{{{PHONE_DIGITS - 1}}}")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def require_fields(payload: Mapping[str, Any], field_names: Iterable[str]) -> None:
    """
    Check that every named field is present and not blank.

    Args:
        payload: Parsed request body
        field_names: Fields to check, in order

    Raises:
        ValidationError: For the first field that is missing, None, or whose
            string form is empty or whitespace-only
    """
    for field in field_names:
        value = payload.get(field)
        if value is None or str(value).strip() == "":
            raise ValidationError(field, "is required")


def parse_positive_number(value: Any, field: str = "price") -> float:
    """
    Parse a strictly positive, finite number.

    Args:
        value: Raw value (number or numeric string)
        field: Field name reported on failure

    Returns:
        The parsed float

    Raises:
        ValidationError: If the value is not numeric or not > 0
    """
    if isinstance(value, bool):
        raise ValidationError(field, "must be a positive number")
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(field, "must be a positive number")
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(field, "must be a positive number")
    return number


def parse_phone(value: Any, field: str = "tel") -> int:
    """
    Parse an 8-digit phone number.

    Args:
        value: Raw value; its string form must be exactly 8 digits. An
            integral float (JSON ``24600900.0``) counts as its integer
        field: Field name reported on failure

    Returns:
        The phone number as an integer

    Raises:
        ValidationError: Unless the stringified value is exactly 8 digits
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(field, f"must contain exactly {PHONE_DIGITS} digits")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    if not _PHONE_PATTERN.fullmatch(text):
        raise ValidationError(field, f"must contain exactly {PHONE_DIGITS} digits")
    return int(text)


def parse_id(value: Any, field: str = "id") -> int:
    """Parse a positive integer identifier (body field or path segment)."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(field, "must be a positive integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    else:
        text = str(value).strip()
        if not _INTEGER_PATTERN.fullmatch(text):
            raise ValidationError(field, "must be a positive integer")
        try:
            number = int(text)
        except ValueError:
            # Beyond the interpreter's integer string conversion limit
            raise ValidationError(field, "must be a positive integer")
    if number <= 0:
        raise ValidationError(field, "must be a positive integer")
    return number
