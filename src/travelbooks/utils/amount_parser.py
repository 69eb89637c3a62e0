"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional

from travelbooks.domain.entities import Currency

_SYMBOLS = {
    "$": Currency.USD,
    "€": Currency.EUR,
    "₪": Currency.ILS,
}
_CODE_PATTERN = re.compile(r"\b(JOD|USD|EUR|ILS|SAR)\b", re.IGNORECASE)


def parse_money(amount_str: str) -> tuple[Decimal, Optional[Currency]]:
    """Parse an amount string that may name its currency.

    Handles various formats:
    - "123.45"
    - "$123.45" / "€10" / "₪250"
    - "150 USD" / "JOD 12.500"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Tuple of the Decimal amount and the currency named in the string,
        or None when no currency is given

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()
    currency = None

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    match = _CODE_PATTERN.search(amount_str)
    if match:
        currency = Currency(match.group(1).upper())
        amount_str = _CODE_PATTERN.sub("", amount_str)

    for symbol, symbol_currency in _SYMBOLS.items():
        if symbol in amount_str:
            currency = currency or symbol_currency
            amount_str = amount_str.replace(symbol, "")

    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if is_negative:
        amount = -amount
    return amount, currency


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal, ignoring any currency marker.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    amount, _ = parse_money(amount_str)
    return amount
