"""Statement aggregation.

Builds the chronological ledger view of a party from the same entries the
ledger aggregator sums, so a statement's closing balance always equals the
party's computed balance. Amounts are kept unrounded; renderers round with
``round_money`` at display time.
"""

from decimal import Decimal
from typing import Sequence

from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.entities import (
    Booking,
    Party,
    Statement,
    StatementRow,
    Transaction,
)
from travelbooks.domain.ledger import LedgerEntry, ledger_entries

OPENING_REFERENCE = "OPENING"
OPENING_DESCRIPTION = "Opening Balance"


def opening_row(party: Party) -> StatementRow:
    """Synthetic first row carrying the party's opening balance."""
    opening = party.opening_balance
    return StatementRow(
        date=None,
        reference=OPENING_REFERENCE,
        description=OPENING_DESCRIPTION,
        debit=opening if opening > 0 else Decimal("0"),
        credit=-opening if opening < 0 else Decimal("0"),
        balance=opening,
    )


def sort_entries(entries: Sequence[LedgerEntry]) -> list[LedgerEntry]:
    """Stable ascending sort by date; undated entries go last."""
    return sorted(entries, key=lambda entry: (entry.date is None, entry.date or 0))


def build_statement(
    party: Party,
    bookings: Sequence[Booking],
    transactions: Sequence[Transaction],
    parties: Sequence[Party],
    rates: ExchangeRateTable,
) -> Statement:
    """Build a statement for a party.

    Args:
        party: Client or agent
        bookings: Every booking on record
        transactions: Every transaction on record
        parties: Every party of the same kind, used to detect overlapping names
        rates: Exchange rate table for service line costs

    Returns:
        Statement with the opening row first, then matched entries sorted
        by date with ties kept in collection order
    """
    entries = ledger_entries(party, bookings, transactions, parties, rates)
    # Totals are summed in collection order, as the ledger does, so the
    # closing balance matches compute_balance exactly.
    total_debit = sum((entry.debit for entry in entries), Decimal("0"))
    total_credit = sum((entry.credit for entry in entries), Decimal("0"))

    rows = [opening_row(party)]
    running = party.opening_balance
    for entry in sort_entries(entries):
        running = running + entry.debit - entry.credit
        rows.append(
            StatementRow(
                date=entry.date,
                reference=entry.reference,
                description=entry.description,
                debit=entry.debit,
                credit=entry.credit,
                balance=running,
            )
        )

    return Statement(
        party=party,
        rows=tuple(rows),
        opening_balance=party.opening_balance,
        total_debit=total_debit,
        total_credit=total_credit,
    )
