"""Agent (supplier) management commands."""

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
def agent_group():
    """Manage agents (suppliers) and what is owed to them."""
    pass


@agent_group.command("create")
@click.argument("name", metavar="AGENT_NAME")
@click.option("--currency", type=CURRENCY_CHOICE, default=BASE_CURRENCY.value, help="Agent's currency")
@click.option("--opening-balance", default="0", help="Amount already owed to the agent, in its currency")
@click.option("--type", "party_type", default="General", help="Agent type (Airline, Hotel, Visa...)")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--notes", help="Notes")
@click.pass_context
def create_agent(
    ctx,
    name: str,
    currency: str,
    opening_balance: str,
    party_type: str,
    phone: str | None,
    email: str | None,
    notes: str | None,
):
    """Create a new agent.

    The opening balance is entered in the agent's currency and stored in
    the base currency at the current rate.

    Examples:
        travelbooks agent create "Petra Tours"
        travelbooks agent create "Gulf Hotels" --currency SAR --opening-balance 5290
    """
    service = PartyService(ctx.obj["db"], rates=ctx.obj["rates"])
    balance, _ = parse_money_or_exit(ctx, opening_balance)

    try:
        agent_id = service.create_agent(
            name=name,
            opening_balance=balance,
            currency=currency.upper(),
            party_type=party_type,
            phone=phone,
            email=email,
            notes=notes,
        )
        click.echo(f"Created agent '{name.strip()}' (ID: {agent_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@agent_group.command("list")
@click.option("--currency", type=CURRENCY_CHOICE, help="Show balances in this currency")
@click.pass_context
def list_agents(ctx, currency: str | None):
    """List all agents with what is owed to them."""
    party_views.list_parties(ctx, PartyKind.AGENT, currency)


@agent_group.command("show")
@click.argument("agent", metavar="AGENT")
@click.pass_context
def show_agent(ctx, agent: str):
    """Show an agent's details and balance breakdown.

    AGENT can be an agent name or ID.
    """
    party_views.show_party(ctx, PartyKind.AGENT, agent)


@agent_group.command("balance")
@click.argument("agent", metavar="AGENT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Show the balance in this currency")
@click.pass_context
def agent_balance(ctx, agent: str, currency: str | None):
    """Show what the agency owes an agent."""
    party_views.show_balance(ctx, PartyKind.AGENT, agent, currency)


@agent_group.command("statement")
@click.argument("agent", metavar="AGENT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Show amounts in this currency")
@click.option("--csv", "as_csv", is_flag=True, help="Print the statement as CSV")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the statement as CSV to a file")
@click.pass_context
def agent_statement(ctx, agent: str, currency: str | None, as_csv: bool, output: str | None):
    """Print an agent's statement of account."""
    party_views.show_statement(ctx, PartyKind.AGENT, agent, currency, as_csv, output)


@agent_group.command("delete")
@click.argument("agent", metavar="AGENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_agent(ctx, agent: str, yes: bool):
    """Delete an agent with no linked services or transactions."""
    party_views.delete_party(ctx, PartyKind.AGENT, agent, yes)


@agent_group.command("pay")
@click.argument("agent", metavar="AGENT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Currency of AMOUNT (default: base currency)")
@click.option("--treasury", help="Treasury name or ID the money is paid from")
@click.option("--date", "date_str", help="Payment date (default: today)")
@click.option("--reference", help="Payment voucher number")
@click.pass_context
def agent_pay(
    ctx,
    agent: str,
    amount: str,
    currency: str | None,
    treasury: str | None,
    date_str: str | None,
    reference: str | None,
):
    """Record a payment made to an agent.

    Examples:
        travelbooks agent pay "Petra Tours" 300 --treasury "Main Bank"
        travelbooks agent pay 2 "1000 SAR" --reference P-77
    """
    db = ctx.obj["db"]
    rates = ctx.obj["rates"]
    party_service = PartyService(db, rates=rates)
    agent_id = resolve_party_or_exit(ctx, party_service, PartyKind.AGENT, agent)
    treasury_id = resolve_treasury_or_exit(ctx, TreasuryService(db), treasury)
    value, paid_in = parse_money_or_exit(ctx, amount, currency)

    try:
        payment_date = parse_optional_date(date_str)
        base_amount = rates.to_base(value, paid_in)
        txn_id = TransactionService(db).record_agent_payment(
            agent_id,
            base_amount,
            treasury_id=treasury_id,
            date=payment_date,
            reference_no=reference,
        )
        click.echo(
            f"Recorded payment {txn_id}: {format_money(base_amount, BASE_CURRENCY)} "
            f"to '{party_service.require_party(agent_id).name}'"
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register agent commands with main CLI."""
    cli.add_command(agent_group, name="agent")
