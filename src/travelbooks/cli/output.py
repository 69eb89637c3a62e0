"""Text and CSV rendering for CLI output."""

import csv
from decimal import Decimal
from typing import TextIO

import click

from travelbooks.domain.currency import ExchangeRateTable, round_money
from travelbooks.domain.entities import Currency, Statement

STATEMENT_HEADERS = ("Date", "Reference", "Description", "Debit", "Credit", "Balance")
CURRENCY_CHOICE = click.Choice([c.value for c in Currency], case_sensitive=False)


def format_money(value: Decimal, currency: Currency | None = None) -> str:
    """Format an amount to the cent with thousands separators."""
    text = f"{round_money(value):,.2f}"
    return f"{text} {currency.value}" if currency is not None else text


def display_amount(rates: ExchangeRateTable, value: Decimal, currency: Currency) -> Decimal:
    """Convert a base-currency amount to the display currency."""
    return rates.from_base(value, currency)


def echo_statement(statement: Statement, rates: ExchangeRateTable, currency: Currency) -> None:
    """Print a statement as a fixed-width table."""
    party = statement.party
    click.echo(f"\nStatement of account: {party.name} ({party.kind.value}, ID: {party.id})")
    click.echo(f"Amounts in {currency.value}")
    click.echo("-" * 110)
    click.echo(
        f"{'Date':<12} {'Reference':<14} {'Description':<38} "
        f"{'Debit':>14} {'Credit':>14} {'Balance':>14}"
    )
    click.echo("-" * 110)
    for row in statement.rows:
        date_str = row.date.isoformat() if row.date else ""
        description = row.description
        if len(description) > 38:
            description = description[:35] + "..."
        debit = format_money(display_amount(rates, row.debit, currency)) if row.debit else "-"
        credit = format_money(display_amount(rates, row.credit, currency)) if row.credit else "-"
        balance = format_money(display_amount(rates, row.balance, currency))
        click.echo(
            f"{date_str:<12} {row.reference:<14} {description:<38} "
            f"{debit:>14} {credit:>14} {balance:>14}"
        )
    click.echo("-" * 110)
    total_debit = format_money(display_amount(rates, statement.total_debit, currency))
    total_credit = format_money(display_amount(rates, statement.total_credit, currency))
    closing = format_money(display_amount(rates, statement.closing_balance, currency))
    click.echo(f"{'TOTAL':<66} {total_debit:>14} {total_credit:>14} {closing:>14}")


def write_statement_csv(
    statement: Statement, rates: ExchangeRateTable, currency: Currency, stream: TextIO
) -> None:
    """Write a statement as CSV, amounts rounded to the cent."""
    writer = csv.writer(stream)
    writer.writerow(STATEMENT_HEADERS)
    for row in statement.rows:
        writer.writerow(
            [
                row.date.isoformat() if row.date else "",
                row.reference,
                row.description,
                f"{round_money(display_amount(rates, row.debit, currency)):.2f}",
                f"{round_money(display_amount(rates, row.credit, currency)):.2f}",
                f"{round_money(display_amount(rates, row.balance, currency)):.2f}",
            ]
        )


def resolve_display_currency(ctx: click.Context, currency: str | None) -> Currency:
    """Currency from a --currency option, else the configured display currency."""
    if currency:
        return Currency(currency.upper())
    return ctx.obj["settings"].display_currency
