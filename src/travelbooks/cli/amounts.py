"""CLI helpers for amount parsing."""

from decimal import Decimal

import click

from travelbooks.domain.entities import BASE_CURRENCY, Currency
from travelbooks.utils.amount_parser import parse_money


def parse_money_or_exit(
    ctx: click.Context,
    text: str,
    currency: str | None = None,
    default: Currency = BASE_CURRENCY,
) -> tuple[Decimal, Currency]:
    """Parse an amount such as "150", "150 USD" or "$150", or exit.

    An explicit ``currency`` option wins over a currency named in the text;
    with neither, the amount is in ``default``.
    """
    try:
        amount, named = parse_money(text)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    if currency:
        return amount, Currency(currency.upper())
    return amount, named or default
