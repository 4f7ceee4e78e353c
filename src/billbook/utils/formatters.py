from __future__ import annotations

from decimal import Decimal


def format_money(value: Decimal | str) -> str:
    """Format a monetary value with exactly two decimals (no currency symbol)."""
    d = Decimal(value)
    if d.is_zero():
        d = abs(d)
    return f"{d:.2f}"


def format_percent(value: Decimal | str) -> str:
    return format_money(value)


def format_quantity(value: Decimal | str) -> str:
    """Format a quantity without trailing zeros: 2.50 -> 2.5, 3.00 -> 3."""
    d = Decimal(value).normalize()
    return f"{d:f}"
