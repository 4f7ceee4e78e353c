from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation


def _parse_decimal(value: str, label: str) -> Decimal:
    try:
        d = Decimal(value.strip())
        if not d.is_finite():
            raise InvalidOperation
    except InvalidOperation:
        raise ValueError(f"{label}: invalid number '{value}'") from None
    return d


def validate_required(value: str, label: str) -> str:
    """Strip a free-text field and reject it when empty."""
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


def validate_amount(value: str, label: str = "Amount") -> str:
    """Validate and normalize a non-negative monetary value to 2 decimal places.

    An empty string means zero.
    """
    if not value.strip():
        return "0.00"
    d = _parse_decimal(value, label)
    if d < 0:
        raise ValueError(f"{label} must not be negative")
    return f"{d:.2f}"


def validate_quantity(value: str) -> str:
    """Validate a strictly positive quantity. Returned unrounded."""
    d = _parse_decimal(value, "Quantity")
    if d <= 0:
        raise ValueError("Quantity must be positive")
    return str(d)


def validate_percent(value: str, label: str = "Percent") -> str:
    """Validate and normalize a percentage value (0.00-100.00). Empty means zero."""
    if not value.strip():
        return "0.00"
    d = _parse_decimal(value, label)
    if d < 0 or d > 100:
        raise ValueError(f"{label} must be between 0.00 and 100.00")
    return f"{d:.2f}"


def validate_date(value: str) -> str:
    """Validate an ISO date string (YYYY-MM-DD). Returns it unchanged."""
    value = value.strip()
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date: '{value}'. Use YYYY-MM-DD.") from None
    if len(value) != 10:
        raise ValueError(f"Invalid date: '{value}'. Use YYYY-MM-DD.")
    return value


def validate_id(value: str, label: str = "ID") -> int:
    """Parse a positive integer identifier."""
    value = value.strip()
    if not (value.isascii() and value.isdigit()) or int(value) <= 0:
        raise ValueError(f"{label}: expected a positive whole number, got '{value}'")
    return int(value)
