"""Treasury account commands."""

import click

from travelbooks.cli.amounts import parse_money_or_exit
from travelbooks.cli.output import CURRENCY_CHOICE, format_money
from travelbooks.domain.entities import BASE_CURRENCY, TreasuryType
from travelbooks.domain.treasury import TreasuryService


@click.group()
def treasury_group():
    """Manage cash, bank and checks accounts."""
    pass


@treasury_group.command("create")
@click.argument("name", metavar="TREASURY_NAME")
@click.option(
    "--type",
    "treasury_type",
    type=click.Choice([t.value for t in TreasuryType], case_sensitive=False),
    default=TreasuryType.CASH.value,
)
@click.option("--balance", default="0", help="Starting balance")
@click.option("--currency", type=CURRENCY_CHOICE, default=BASE_CURRENCY.value)
@click.option("--account-number", help="Bank account number")
@click.pass_context
def create_treasury(
    ctx, name: str, treasury_type: str, balance: str, currency: str, account_number: str | None
):
    """Create a treasury account.

    Examples:
        travelbooks treasury create "Main Cash"
        travelbooks treasury create "Arab Bank" --type bank --account-number 0123-456
    """
    amount, _ = parse_money_or_exit(ctx, balance)
    try:
        treasury_id = TreasuryService(ctx.obj["db"]).create_treasury(
            name=name,
            treasury_type=TreasuryType(treasury_type.lower()),
            balance=amount,
            currency=currency.upper(),
            account_number=account_number,
        )
        click.echo(f"Created treasury '{name.strip()}' (ID: {treasury_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@treasury_group.command("list")
@click.pass_context
def list_treasuries(ctx):
    """List treasury accounts with their balances."""
    treasuries = TreasuryService(ctx.obj["db"]).list_treasuries()
    if not treasuries:
        click.echo("No treasuries found.")
        return

    click.echo("\nTreasuries:")
    click.echo("-" * 80)
    for t in treasuries:
        click.echo(
            f"ID: {t.id:3d} | {t.name:24s} | {t.treasury_type.value:6s} | "
            f"Balance: {format_money(t.balance, t.currency):>18}"
        )


def register_commands(cli):
    """Register treasury commands with main CLI."""
    cli.add_command(treasury_group, name="treasury")
