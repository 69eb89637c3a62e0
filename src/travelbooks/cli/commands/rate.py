"""Exchange rate commands."""

import click

from travelbooks.cli.amounts import parse_money_or_exit
from travelbooks.cli.output import CURRENCY_CHOICE, format_money
from travelbooks.domain.entities import BASE_CURRENCY, Currency
from travelbooks.domain.rates import RateService


@click.group()
def rate_group():
    """View and update exchange rates.

    Rates are units of a currency per 1 unit of the base currency.
    """
    pass


@rate_group.command("list")
@click.pass_context
def list_rates(ctx):
    """Show the current exchange rates."""
    rates = ctx.obj["rates"]
    click.echo(f"\nExchange rates (per 1 {BASE_CURRENCY.value}):")
    click.echo("-" * 40)
    for currency, rate in rates.as_dict().items():
        click.echo(f"{currency.value:<6} {rate:>12}")


@rate_group.command("set")
@click.argument("currency", type=CURRENCY_CHOICE)
@click.argument("rate")
@click.pass_context
def set_rate(ctx, currency: str, rate: str):
    """Set the rate for a currency.

    Examples:
        travelbooks rate set USD 1.41
    """
    try:
        previous = RateService(ctx.obj["db"]).set_rate(ctx.obj["rates"], currency.upper(), rate)
        click.echo(f"{currency.upper()} rate changed from {previous} to {ctx.obj['rates'].get_rate(currency.upper())}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@rate_group.command("convert")
@click.argument("amount", metavar="AMOUNT")
@click.argument("from_currency", type=CURRENCY_CHOICE)
@click.argument("to_currency", type=CURRENCY_CHOICE)
@click.pass_context
def convert(ctx, amount: str, from_currency: str, to_currency: str):
    """Convert an amount between currencies at the current rates.

    Examples:
        travelbooks rate convert 100 USD JOD
    """
    value, _ = parse_money_or_exit(ctx, amount)
    source = Currency(from_currency.upper())
    target = Currency(to_currency.upper())
    converted = ctx.obj["rates"].convert(value, source, target)
    click.echo(f"{format_money(value, source)} = {format_money(converted, target)}")


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
