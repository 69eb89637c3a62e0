"""Client and agent domain service."""

from decimal import Decimal
from typing import Optional

from travelbooks.database.base import Database
from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.entities import (
    BASE_CURRENCY,
    Currency,
    LedgerTotals,
    Party,
    PartyKind,
    Statement,
)
from travelbooks.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    duplicate_party_name,
    party_delete_blocked,
    party_not_found,
)
from travelbooks.domain.ledger import compute_totals
from travelbooks.domain.rates import RateService
from travelbooks.domain.statement import build_statement
from travelbooks.utils.decimal_utils import coerce_decimal
from travelbooks.utils.logger import get_app_logger


class PartyService:
    """Service for managing clients and agents and their balances.

    Balances and statements are derived on every call from the full booking
    and transaction history; nothing is cached.
    """

    def __init__(
        self, db: Database, rates: Optional[ExchangeRateTable] = None, logger=None
    ):
        """Initialize party service.

        Args:
            db: Database instance
            rates: Exchange rate table; loaded from the database when omitted
            logger: Optional logger; defaults to the application logger
        """
        self.db = db
        self.rates = rates if rates is not None else RateService(db).load_table()
        self._logger = logger or get_app_logger()

    def create_client(
        self,
        name: str,
        opening_balance=Decimal("0"),
        party_type: str = "Individual",
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
        credit_limit=None,
    ) -> int:
        """Create a client.

        Args:
            name: Client name, unique among clients
            opening_balance: Amount the client already owes, in the base currency
            party_type: Individual or Company
            phone: Optional phone number
            email: Optional email
            notes: Optional notes
            credit_limit: Optional credit limit in the base currency

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a client with the same name exists
        """
        return self._create(
            PartyKind.CLIENT,
            name,
            opening_balance=coerce_decimal(opening_balance),
            party_type=party_type,
            phone=phone,
            email=email,
            notes=notes,
            credit_limit=None if credit_limit is None else coerce_decimal(credit_limit),
        )

    def create_agent(
        self,
        name: str,
        opening_balance=Decimal("0"),
        currency: Currency = BASE_CURRENCY,
        party_type: str = "General",
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an agent (supplier).

        The opening balance is entered in the agent's own currency and stored
        in the base currency.

        Returns:
            Agent ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If an agent with the same name exists
        """
        currency = Currency(currency)
        return self._create(
            PartyKind.AGENT,
            name,
            opening_balance=self.rates.to_base(coerce_decimal(opening_balance), currency),
            party_type=party_type,
            phone=phone,
            email=email,
            notes=notes,
            currency=currency,
        )

    def _create(self, kind: PartyKind, name: str, **fields) -> int:
        name = (name or "").strip()
        if not name:
            raise ValidationError(f"{kind.value.capitalize()} name is required")
        if self.db.get_party_by_name(kind, name) is not None:
            raise ConflictError(duplicate_party_name(kind.value, name))

        party_id = self.db.create_party(kind=kind, name=name, **fields)
        self._logger.info(f"Created {kind.value} '{name}' (ID: {party_id})")
        return party_id

    def get_party(self, party_id: int) -> Optional[Party]:
        """Get a client or agent by ID."""
        return self.db.get_party(party_id)

    def require_party(self, party_id: int, kind: Optional[PartyKind] = None) -> Party:
        """Get a party by ID or raise.

        Raises:
            NotFoundError: If no party with that ID exists, or it is of a
                different kind than requested
        """
        party = self.db.get_party(party_id)
        if party is None or (kind is not None and party.kind != kind):
            label = kind.value if kind is not None else "party"
            raise NotFoundError(party_not_found(label, party_id))
        return party

    def find_by_name(self, kind: PartyKind, name: str) -> Optional[Party]:
        return self.db.get_party_by_name(kind, name)

    def list_parties(self, kind: PartyKind) -> list[Party]:
        return self.db.list_parties(kind)

    def update_party(
        self,
        party_id: int,
        name: Optional[str] = None,
        opening_balance=None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update a party's details.

        Only the fields that are provided are changed. An agent's opening
        balance is given in the agent's currency, as in ``create_agent``.
        Records correlated to the party by name only (legacy data without a
        party ID) will no longer match after a rename.

        Raises:
            NotFoundError: If the party does not exist
            ConflictError: If the new name is taken by a party of the same kind
        """
        party = self.require_party(party_id)
        fields = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError(f"{party.kind.value.capitalize()} name is required")
            existing = self.db.get_party_by_name(party.kind, name)
            if existing is not None and existing.id != party_id:
                raise ConflictError(duplicate_party_name(party.kind.value, name))
            fields["name"] = name
        if opening_balance is not None:
            opening_balance = coerce_decimal(opening_balance)
            if party.kind == PartyKind.AGENT:
                opening_balance = self.rates.to_base(opening_balance, party.currency)
            fields["opening_balance"] = opening_balance
        if phone is not None:
            fields["phone"] = phone
        if email is not None:
            fields["email"] = email
        if notes is not None:
            fields["notes"] = notes

        if fields:
            self.db.update_party(party_id, **fields)
            self._logger.info(f"Updated {party.kind.value} {party_id}: {', '.join(sorted(fields))}")

    def delete_party(self, party_id: int) -> None:
        """Delete a party with no linked bookings or transactions.

        Raises:
            NotFoundError: If the party does not exist
            DependencyError: If bookings, service lines or transactions
                reference the party by ID
        """
        party = self.require_party(party_id)
        booking_count, transaction_count = self.db.get_party_activity_counts(party_id)
        if booking_count > 0 or transaction_count > 0:
            raise DependencyError(
                party_delete_blocked(party.kind.value, party_id, booking_count, transaction_count)
            )
        self.db.delete_party(party_id)
        self._logger.info(f"Deleted {party.kind.value} '{party.name}' (ID: {party_id})")

    def _history(self, kind: PartyKind):
        return (
            self.db.list_bookings(),
            self.db.list_transactions(),
            self.db.list_parties(kind),
        )

    def totals(self, party_id: int) -> LedgerTotals:
        """Opening balance, derived debit and credit for a party."""
        party = self.require_party(party_id)
        bookings, transactions, parties = self._history(party.kind)
        return compute_totals(party, bookings, transactions, parties, self.rates)

    def balance(self, party_id: int) -> Decimal:
        """Effective balance of a party in the base currency."""
        return self.totals(party_id).balance

    def statement(self, party_id: int) -> Statement:
        """Chronological statement for a party."""
        party = self.require_party(party_id)
        bookings, transactions, parties = self._history(party.kind)
        return build_statement(party, bookings, transactions, parties, self.rates)

    def balances(self, kind: PartyKind) -> list[tuple[Party, LedgerTotals]]:
        """Totals for every party of a kind, from one read of the history."""
        bookings, transactions, parties = self._history(kind)
        return [
            (party, compute_totals(party, bookings, transactions, parties, self.rates))
            for party in parties
        ]
