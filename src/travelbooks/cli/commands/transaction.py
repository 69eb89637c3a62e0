"""Transaction management commands."""

import click

from travelbooks.cli.amounts import parse_money_or_exit
from travelbooks.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from travelbooks.cli.output import CURRENCY_CHOICE, format_money
from travelbooks.cli.resolution import resolve_treasury_or_exit
from travelbooks.domain.entities import TransactionType
from travelbooks.domain.party import PartyService
from travelbooks.domain.transaction import TransactionService
from travelbooks.domain.treasury import TreasuryService
from travelbooks.utils.date_parser import parse_optional_date

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group()
def transaction_group():
    """Record and manage income and expenses."""
    pass


@transaction_group.command("add")
@click.argument("amount", metavar="AMOUNT")
@click.option("--type", "txn_type", type=TYPE_CHOICE, required=True, help="income or expense")
@click.option("--category", required=True, help="Category (e.g. 'General Expenses', 'Customer Receipts')")
@click.option("--currency", type=CURRENCY_CHOICE, help="Currency of AMOUNT (default: base currency)")
@click.option("--description", default="", help="Description")
@click.option("--date", "date_str", help="Transaction date (default: today)")
@click.option("--treasury", help="Treasury name or ID the money moves through")
@click.option("--party", "party_id", type=int, help="Client or agent ID the movement belongs to")
@click.option("--reference", help="Voucher or reference number")
@click.option(
    "--no-treasury-update",
    is_flag=True,
    help="Record against the treasury without changing its balance",
)
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    txn_type: str,
    category: str,
    currency: str | None,
    description: str,
    date_str: str | None,
    treasury: str | None,
    party_id: int | None,
    reference: str | None,
    no_treasury_update: bool,
):
    """Record an income or expense.

    Examples:
        travelbooks transaction add 35 --type expense --category "General Expenses" --description "Office tea"
        travelbooks transaction add 120 --type income --category "Customer Receipts" --party 3 --treasury "Main Cash"
    """
    db = ctx.obj["db"]
    rates = ctx.obj["rates"]
    treasury_id = resolve_treasury_or_exit(ctx, TreasuryService(db), treasury)
    value, entered_in = parse_money_or_exit(ctx, amount, currency)

    try:
        txn_id = TransactionService(db).add_transaction(
            type=TransactionType(txn_type.lower()),
            amount=rates.to_base(value, entered_in),
            category=category,
            description=description,
            date=parse_optional_date(date_str),
            treasury_id=treasury_id,
            party_id=party_id,
            reference_no=reference,
            update_treasury=not no_treasury_update,
        )
        click.echo(f"Created transaction {txn_id}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only income or only expenses")
@click.option("--category", help="Only this category")
@click.option("--treasury", help="Treasury name or ID")
@click.option("--party", "party_id", type=int, help="Client or agent ID")
@click.pass_context
def list_transactions(ctx, start_date, end_date, txn_type, category, treasury, party_id, **periods):
    """List transactions with optional filters."""
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )
    treasury_service = TreasuryService(db)
    treasury_id = resolve_treasury_or_exit(ctx, treasury_service, treasury)

    transactions = TransactionService(db).list_transactions(
        start_date=start,
        end_date=end,
        type=TransactionType(txn_type.lower()) if txn_type else None,
        category=category,
        treasury_id=treasury_id,
        party_id=party_id,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    treasuries = {t.id: t.name for t in treasury_service.list_treasuries()}
    party_service = PartyService(db, rates=ctx.obj["rates"])

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 120)
    click.echo(
        f"{'ID':>4} {'Date':<12} {'Type':<8} {'Category':<20} {'Amount':>12} "
        f"{'Treasury':<14} {'Party':<16} Description"
    )
    click.echo("-" * 120)
    for txn in transactions:
        party_name = ""
        if txn.party_id is not None:
            party = party_service.get_party(txn.party_id)
            party_name = party.name if party else str(txn.party_id)
        click.echo(
            f"{txn.id:>4} {txn.date.isoformat():<12} {txn.type.value:<8} {txn.category[:20]:<20} "
            f"{format_money(txn.amount):>12} {treasuries.get(txn.treasury_id, '')[:14]:<14} "
            f"{party_name[:16]:<16} {txn.description}"
        )


@transaction_group.command("reverse")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="Date of the reversing entry (default: today)")
@click.pass_context
def reverse_transaction(ctx, transaction_id: int, date_str: str | None):
    """Cancel a transaction with a reversing entry.

    The original entry is kept; a new entry with the negated amount undoes
    its effect on balances and on its treasury.
    """
    try:
        reversal_id = TransactionService(ctx.obj["db"]).reverse_transaction(
            transaction_id, date=parse_optional_date(date_str)
        )
        click.echo(f"Reversed transaction {transaction_id} (reversing entry {reversal_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@transaction_group.command("transfer")
@click.argument("transaction_id", type=int)
@click.argument("treasury", metavar="TREASURY")
@click.pass_context
def transfer_transaction(ctx, transaction_id: int, treasury: str):
    """Move a transaction to another treasury account.

    TREASURY can be a treasury name or ID.
    """
    db = ctx.obj["db"]
    treasury_id = resolve_treasury_or_exit(ctx, TreasuryService(db), treasury)
    try:
        TransactionService(db).transfer_transaction(transaction_id, treasury_id)
        click.echo(f"Moved transaction {transaction_id} to treasury {treasury_id}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
