from __future__ import annotations

from decimal import Decimal, InvalidOperation


def parse_decimal_field(value: str, field: str, errors: list[dict[str, str]]) -> Decimal:
    """
    Parse a decimal string, recording a field error instead of raising.

    Returns a zero placeholder on failure so the caller can keep collecting
    errors and raise them together.
    """
    try:
        parsed = Decimal(value)
    except (InvalidOperation, ValueError):
        parsed = None

    if parsed is None or not parsed.is_finite():
        errors.append(
            {
                "field": field,
                "message": f"Must be a valid decimal: {value}",
                "code": "INVALID_DECIMAL",
            }
        )
        return Decimal("0")
    return parsed


def parse_optional_decimal_field(value: str | None, field: str, errors: list[dict[str, str]]) -> Decimal | None:
    if value is None:
        return None
    return parse_decimal_field(value, field, errors)
