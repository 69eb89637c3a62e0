"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from forms, SQL or adapters.

    Returns:
        Decimal: Normalized numeric value. ``None``, empty strings and
        unparseable text become zero.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str) and not value.strip():
        return Decimal("0")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def non_negative(value) -> Decimal:
    """Coerce to Decimal and clamp negatives to zero."""
    result = coerce_decimal(value)
    return result if result > 0 else Decimal("0")


__all__ = ["coerce_decimal", "non_negative"]
