"""Shared command bodies for the client and agent groups."""

import io

import click

from travelbooks.cli.output import (
    display_amount,
    echo_statement,
    format_money,
    resolve_display_currency,
    write_statement_csv,
)
from travelbooks.cli.resolution import resolve_party_or_exit
from travelbooks.domain.entities import PartyKind
from travelbooks.domain.party import PartyService


def party_service(ctx) -> PartyService:
    return PartyService(ctx.obj["db"], rates=ctx.obj["rates"])


def list_parties(ctx, kind: PartyKind, currency: str | None) -> None:
    """Print every party of a kind with its derived balance."""
    service = party_service(ctx)
    rates = ctx.obj["rates"]
    shown_in = resolve_display_currency(ctx, currency)

    rows = service.balances(kind)
    if not rows:
        click.echo(f"No {kind.value}s found.")
        return

    click.echo(f"\n{kind.value.capitalize()}s (balances in {shown_in.value}):")
    click.echo("-" * 80)
    for party, totals in rows:
        balance = format_money(display_amount(rates, totals.balance, shown_in))
        click.echo(f"ID: {party.id:3d} | {party.name:30s} | Balance: {balance:>14}")


def show_party(ctx, kind: PartyKind, party: str) -> None:
    """Print a party's details and balance breakdown."""
    service = party_service(ctx)
    party_id = resolve_party_or_exit(ctx, service, kind, party)
    entity = service.require_party(party_id, kind)
    totals = service.totals(party_id)

    click.echo(f"\n{kind.value.capitalize()} ID: {entity.id}")
    click.echo(f"  Name: {entity.name}")
    click.echo(f"  Type: {entity.party_type}")
    if kind == PartyKind.AGENT:
        click.echo(f"  Currency: {entity.currency.value}")
    if entity.phone:
        click.echo(f"  Phone: {entity.phone}")
    if entity.email:
        click.echo(f"  Email: {entity.email}")
    if entity.credit_limit is not None:
        click.echo(f"  Credit limit: {format_money(entity.credit_limit)}")
    if entity.notes:
        click.echo(f"  Notes: {entity.notes}")
    click.echo(f"  Opening balance: {format_money(totals.opening_balance)}")
    click.echo(f"  Debit: {format_money(totals.debit)}")
    click.echo(f"  Credit: {format_money(totals.credit)}")
    click.echo(f"  Balance: {format_money(totals.balance)}")


def show_balance(ctx, kind: PartyKind, party: str, currency: str | None) -> None:
    service = party_service(ctx)
    party_id = resolve_party_or_exit(ctx, service, kind, party)
    shown_in = resolve_display_currency(ctx, currency)
    entity = service.require_party(party_id, kind)
    balance = display_amount(ctx.obj["rates"], service.balance(party_id), shown_in)
    click.echo(f"{entity.name}: {format_money(balance, shown_in)}")


def show_statement(
    ctx, kind: PartyKind, party: str, currency: str | None, as_csv: bool, output: str | None
) -> None:
    """Print a statement as a table, or write it as CSV."""
    service = party_service(ctx)
    party_id = resolve_party_or_exit(ctx, service, kind, party)
    shown_in = resolve_display_currency(ctx, currency)
    statement = service.statement(party_id)
    rates = ctx.obj["rates"]

    if output:
        with open(output, "w", newline="", encoding="utf-8") as f:
            write_statement_csv(statement, rates, shown_in, f)
        click.echo(f"Wrote statement for '{statement.party.name}' to {output}")
    elif as_csv:
        buffer = io.StringIO()
        write_statement_csv(statement, rates, shown_in, buffer)
        click.echo(buffer.getvalue(), nl=False)
    else:
        echo_statement(statement, rates, shown_in)


def delete_party(ctx, kind: PartyKind, party: str, yes: bool) -> None:
    service = party_service(ctx)
    party_id = resolve_party_or_exit(ctx, service, kind, party)
    entity = service.require_party(party_id, kind)

    if not yes and not click.confirm(
        f"Are you sure you want to delete {kind.value} '{entity.name}' (ID: {party_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_party(party_id)
        click.echo(f"Deleted {kind.value} '{entity.name}'")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
