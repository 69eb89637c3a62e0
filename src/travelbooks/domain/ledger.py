"""Ledger aggregation for clients and agents.

A party's effective balance is never stored. It is derived on every call by
scanning the full booking and transaction collections:

- Client debits are the sales totals of the client's active bookings;
  credits are receipts recorded against the client.
- Agent debits are the base-currency costs of service lines supplied by the
  agent; credits are expense transactions paid to the agent.

Records carrying an explicit party id correlate by id. Legacy records
without one fall back to matching the party name inside the free-text
description. In that fallback a description that also contains the name of
an overlapping party ("Sam" and "Sam Tours") is credited to neither: an
ambiguous receipt is left out rather than counted twice. Agent credits use
the same exclusion on purpose: an expense naming both "Royal" and
"Royal Tours" is paid to neither agent.

Every function here is pure: inputs are never mutated and no state is kept
between calls.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Sequence

from travelbooks.domain.calculator import line_cost
from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.entities import (
    CLIENT_RECEIPT_CATEGORIES,
    INACTIVE_BOOKING_STATUSES,
    Booking,
    LedgerTotals,
    Party,
    PartyKind,
    ServiceLine,
    Transaction,
    TransactionType,
)


@dataclass(frozen=True)
class LedgerEntry:
    """A booking, service line or transaction matched to a party."""

    date: Optional[date]
    reference: str
    description: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")


def names_overlap(first: str, second: str) -> bool:
    """True when either name contains the other."""
    if not first or not second:
        return False
    return first in second or second in first


def find_conflicts(party: Party, parties: Iterable[Party]) -> list[Party]:
    """Other parties of the same kind whose names overlap the target's."""
    return [
        other
        for other in parties
        if other.id != party.id
        and other.kind == party.kind
        and names_overlap(party.name, other.name)
    ]


def mentions_party(description: Optional[str], party: Party, conflicts: Sequence[Party]) -> bool:
    """Whether a free-text description unambiguously names the party."""
    if not party.name or not description or party.name not in description:
        return False
    return not any(other.name in description for other in conflicts)


def transaction_matches(txn: Transaction, party: Party, conflicts: Sequence[Party]) -> bool:
    """Correlate a transaction to a party by id, else by description."""
    if txn.party_id is not None:
        return txn.party_id == party.id
    return mentions_party(txn.description, party, conflicts)


def is_client_booking(booking: Booking, client: Party) -> bool:
    """Active booking billed to the client."""
    if booking.status in INACTIVE_BOOKING_STATUSES:
        return False
    if booking.client_id is not None:
        return booking.client_id == client.id
    return booking.client_name == client.name


def is_client_receipt(txn: Transaction, client: Party, conflicts: Sequence[Party]) -> bool:
    """Income transaction received from the client."""
    return (
        txn.type == TransactionType.INCOME
        and txn.category in CLIENT_RECEIPT_CATEGORIES
        and transaction_matches(txn, client, conflicts)
    )


def is_supplied_by(line: ServiceLine, agent: Party) -> bool:
    """Service line supplied by the agent."""
    if line.supplier_id is not None:
        return line.supplier_id == agent.id
    return bool(agent.name) and line.supplier == agent.name


def is_agent_payment(txn: Transaction, agent: Party, conflicts: Sequence[Party]) -> bool:
    """Expense transaction paid to the agent."""
    return txn.type == TransactionType.EXPENSE and transaction_matches(txn, agent, conflicts)


def client_entries(
    client: Party,
    bookings: Iterable[Booking],
    transactions: Iterable[Transaction],
    conflicts: Sequence[Party],
) -> Iterator[LedgerEntry]:
    """Debit entries for bookings, then credit entries for receipts."""
    for booking in bookings:
        if is_client_booking(booking, client):
            description = f"{booking.booking_type} booking"
            if booking.destination:
                description = f"{description} - {booking.destination}"
            yield LedgerEntry(
                date=booking.date,
                reference=f"INV-{booking.reference}",
                description=description,
                debit=booking.amount,
            )
    for txn in transactions:
        if is_client_receipt(txn, client, conflicts):
            yield LedgerEntry(
                date=txn.date,
                reference=f"REC-{txn.reference}",
                description=txn.description,
                credit=txn.amount,
            )


def agent_entries(
    agent: Party,
    bookings: Iterable[Booking],
    transactions: Iterable[Transaction],
    conflicts: Sequence[Party],
    rates: ExchangeRateTable,
) -> Iterator[LedgerEntry]:
    """Debit entries for supplied services, then credit entries for payments."""
    for booking in bookings:
        for line in booking.services:
            if is_supplied_by(line, agent):
                description = line.service_type.value.capitalize()
                if booking.destination:
                    description = f"{description} - {booking.destination}"
                yield LedgerEntry(
                    date=booking.date,
                    reference=f"SRV-{booking.reference}",
                    description=f"{description} ({booking.client_name})",
                    debit=line_cost(line, rates),
                )
    for txn in transactions:
        if is_agent_payment(txn, agent, conflicts):
            yield LedgerEntry(
                date=txn.date,
                reference=f"PAY-{txn.reference}",
                description=txn.description,
                credit=txn.amount,
            )


def ledger_entries(
    party: Party,
    bookings: Sequence[Booking],
    transactions: Sequence[Transaction],
    parties: Sequence[Party],
    rates: ExchangeRateTable,
) -> list[LedgerEntry]:
    """All entries matched to a party, in collection order."""
    conflicts = find_conflicts(party, parties)
    if party.kind == PartyKind.CLIENT:
        return list(client_entries(party, bookings, transactions, conflicts))
    return list(agent_entries(party, bookings, transactions, conflicts, rates))


def compute_totals(
    party: Party,
    bookings: Sequence[Booking],
    transactions: Sequence[Transaction],
    parties: Sequence[Party],
    rates: ExchangeRateTable,
) -> LedgerTotals:
    """Opening balance with summed debits and credits for a party."""
    entries = ledger_entries(party, bookings, transactions, parties, rates)
    return LedgerTotals(
        opening_balance=party.opening_balance,
        debit=sum((entry.debit for entry in entries), Decimal("0")),
        credit=sum((entry.credit for entry in entries), Decimal("0")),
    )


def compute_balance(
    party: Party,
    bookings: Sequence[Booking],
    transactions: Sequence[Transaction],
    parties: Sequence[Party],
    rates: ExchangeRateTable,
) -> Decimal:
    """Effective balance of a party in the base currency.

    Args:
        party: Client or agent to compute
        bookings: Every booking on record
        transactions: Every transaction on record
        parties: Every party of the same kind, used to detect overlapping names
        rates: Exchange rate table for service line costs

    Returns:
        ``opening_balance + debit - credit``
    """
    return compute_totals(party, bookings, transactions, parties, rates).balance
