"""Client management commands."""

import click

from travelbooks.cli import party_views
from travelbooks.cli.amounts import parse_money_or_exit
from travelbooks.cli.output import CURRENCY_CHOICE, format_money
from travelbooks.cli.resolution import resolve_party_or_exit, resolve_treasury_or_exit
from travelbooks.domain.entities import BASE_CURRENCY, PartyKind
from travelbooks.domain.party import PartyService
from travelbooks.domain.transaction import TransactionService
from travelbooks.domain.treasury import TreasuryService
from travelbooks.utils.date_parser import parse_optional_date


@click.group()
def client_group():
    """Manage clients and their accounts."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--opening-balance", default="0", help="Amount the client already owes (base currency)")
@click.option("--type", "party_type", type=click.Choice(["Individual", "Company"]), default="Individual")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--credit-limit", help="Credit limit (base currency)")
@click.option("--notes", help="Notes")
@click.pass_context
def create_client(
    ctx,
    name: str,
    opening_balance: str,
    party_type: str,
    phone: str | None,
    email: str | None,
    credit_limit: str | None,
    notes: str | None,
):
    """Create a new client.

    Examples:
        travelbooks client create "Ahmad Saleh"
        travelbooks client create "Blue Sky Co" --type Company --opening-balance 250
    """
    service = PartyService(ctx.obj["db"], rates=ctx.obj["rates"])
    balance, currency = parse_money_or_exit(ctx, opening_balance)
    limit = None
    if credit_limit is not None:
        limit, _ = parse_money_or_exit(ctx, credit_limit)

    try:
        client_id = service.create_client(
            name=name,
            opening_balance=ctx.obj["rates"].to_base(balance, currency),
            party_type=party_type,
            phone=phone,
            email=email,
            notes=notes,
            credit_limit=limit,
        )
        click.echo(f"Created client '{name.strip()}' (ID: {client_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@client_group.command("list")
@click.option("--currency", type=CURRENCY_CHOICE, help="Show balances in this currency")
@click.pass_context
def list_clients(ctx, currency: str | None):
    """List all clients with their balances."""
    party_views.list_parties(ctx, PartyKind.CLIENT, currency)


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show a client's details and balance breakdown.

    CLIENT can be a client name or ID.
    """
    party_views.show_party(ctx, PartyKind.CLIENT, client)


@client_group.command("balance")
@click.argument("client", metavar="CLIENT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Show the balance in this currency")
@click.pass_context
def client_balance(ctx, client: str, currency: str | None):
    """Show what a client owes.

    A positive balance means the client owes the agency.
    """
    party_views.show_balance(ctx, PartyKind.CLIENT, client, currency)


@client_group.command("statement")
@click.argument("client", metavar="CLIENT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Show amounts in this currency")
@click.option("--csv", "as_csv", is_flag=True, help="Print the statement as CSV")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the statement as CSV to a file")
@click.pass_context
def client_statement(ctx, client: str, currency: str | None, as_csv: bool, output: str | None):
    """Print a client's statement of account.

    Examples:
        travelbooks client statement "Ahmad Saleh"
        travelbooks client statement 3 --currency USD --csv
    """
    party_views.show_statement(ctx, PartyKind.CLIENT, client, currency, as_csv, output)


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client: str, yes: bool):
    """Delete a client with no linked bookings or transactions."""
    party_views.delete_party(ctx, PartyKind.CLIENT, client, yes)


@client_group.command("pay")
@click.argument("client", metavar="CLIENT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Currency of AMOUNT (default: base currency)")
@click.option("--treasury", help="Treasury name or ID receiving the money")
@click.option("--date", "date_str", help="Receipt date (default: today)")
@click.option("--reference", help="Receipt voucher number")
@click.pass_context
def client_pay(
    ctx,
    client: str,
    amount: str,
    currency: str | None,
    treasury: str | None,
    date_str: str | None,
    reference: str | None,
):
    """Record money received from a client.

    Examples:
        travelbooks client pay "Ahmad Saleh" 150 --treasury "Main Cash"
        travelbooks client pay 3 "200 USD" --reference R-1042
    """
    db = ctx.obj["db"]
    rates = ctx.obj["rates"]
    party_service = PartyService(db, rates=rates)
    client_id = resolve_party_or_exit(ctx, party_service, PartyKind.CLIENT, client)
    treasury_id = resolve_treasury_or_exit(ctx, TreasuryService(db), treasury)
    value, paid_in = parse_money_or_exit(ctx, amount, currency)

    try:
        receipt_date = parse_optional_date(date_str)
        base_amount = rates.to_base(value, paid_in)
        txn_id = TransactionService(db).record_client_receipt(
            client_id,
            base_amount,
            treasury_id=treasury_id,
            date=receipt_date,
            reference_no=reference,
        )
        click.echo(
            f"Recorded receipt {txn_id}: {format_money(base_amount, BASE_CURRENCY)} "
            f"from '{party_service.require_party(client_id).name}'"
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
