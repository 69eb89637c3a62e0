"""CLI helpers for resolving parties and treasuries."""

from __future__ import annotations

import click

from travelbooks.domain.entities import PartyKind
from travelbooks.domain.party import PartyService
from travelbooks.domain.treasury import TreasuryService
from travelbooks.utils.resolvers import resolve_party, resolve_treasury


def resolve_party_or_exit(
    ctx: click.Context, party_service: PartyService, kind: PartyKind, party: str | int
) -> int:
    """Resolve a client or agent name or ID, or exit with a CLI error."""
    try:
        return resolve_party(party_service, kind, party)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_treasury_or_exit(
    ctx: click.Context, treasury_service: TreasuryService, treasury: str | int | None
) -> int | None:
    """Resolve an optional treasury name or ID, or exit with a CLI error."""
    if treasury is None:
        return None
    try:
        return resolve_treasury(treasury_service, treasury)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
