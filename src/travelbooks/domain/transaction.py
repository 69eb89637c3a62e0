"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from travelbooks.database.base import Database
from travelbooks.domain.calculator import payment_status
from travelbooks.domain.entities import (
    BOOKING_RECEIPTS,
    CLIENT_RECEIPTS,
    SUPPLIER_PAYMENTS,
    PartyKind,
    Transaction as TransactionEntity,
    TransactionType,
)
from travelbooks.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    party_not_found,
    transaction_not_found,
    treasury_not_found,
)
from travelbooks.utils.decimal_utils import coerce_decimal
from travelbooks.utils.logger import get_app_logger


def treasury_delta(txn_type: TransactionType, amount: Decimal) -> Decimal:
    """Signed effect of a transaction on its treasury balance."""
    return amount if txn_type == TransactionType.INCOME else -amount


def payment_reference(payment_id: int) -> str:
    """Reference number of the receipt recorded for a booking payment."""
    return f"PMT-{payment_id}"


class TransactionService:
    """Service for recording cash movements.

    Transactions are never deleted. An entry is undone by recording a
    reversing entry, which keeps both the balance correction and the audit
    trail.
    """

    def __init__(self, db: Database, logger=None):
        """Initialize transaction service.

        Args:
            db: Database instance
            logger: Optional logger; defaults to the application logger
        """
        self.db = db
        self._logger = logger or get_app_logger()

    def add_transaction(
        self,
        type: TransactionType,
        amount,
        category: str,
        description: str = "",
        date: Optional[date] = None,
        treasury_id: Optional[int] = None,
        party_id: Optional[int] = None,
        reference_no: Optional[str] = None,
        update_treasury: bool = True,
    ) -> int:
        """Record an income or expense.

        Args:
            type: Income or expense
            amount: Positive amount in the base currency
            category: Category name (e.g. "Customer Receipts")
            description: Free-text description
            date: Transaction date, defaults to today
            treasury_id: Optional treasury account the cash moves through
            party_id: Optional client or agent the movement belongs to
            reference_no: Optional voucher or reference number
            update_treasury: If True, apply the amount to the treasury balance

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the amount is not positive or category is empty
            NotFoundError: If the treasury or party does not exist
        """
        amount = coerce_decimal(amount)
        if amount <= 0:
            raise ValidationError(f"Transaction amount must be positive, got {amount}")
        if not category or not category.strip():
            raise ValidationError("Transaction category is required")
        if party_id is not None and self.db.get_party(party_id) is None:
            raise NotFoundError(party_not_found("party", party_id))

        return self._record(
            type=TransactionType(type),
            amount=amount,
            category=category.strip(),
            description=description or "",
            txn_date=date or date_today(),
            treasury_id=treasury_id,
            party_id=party_id,
            reference_no=reference_no,
            update_treasury=update_treasury,
        )

    def _record(
        self,
        type: TransactionType,
        amount: Decimal,
        category: str,
        description: str,
        txn_date: date,
        treasury_id: Optional[int],
        party_id: Optional[int],
        reference_no: Optional[str],
        update_treasury: bool = True,
        reverses_id: Optional[int] = None,
    ) -> int:
        if treasury_id is not None and self.db.get_treasury(treasury_id) is None:
            raise NotFoundError(treasury_not_found(treasury_id))

        transaction_id = self.db.create_transaction(
            date=txn_date,
            type=type,
            category=category,
            amount=amount,
            description=description,
            reference_no=reference_no,
            treasury_id=treasury_id,
            party_id=party_id,
            reverses_id=reverses_id,
        )
        if treasury_id is not None and update_treasury:
            self.db.adjust_treasury_balance(treasury_id, treasury_delta(type, amount))

        self._logger.info(
            f"Recorded {type.value} transaction {transaction_id}: {amount} ({category})"
        )
        return transaction_id

    def record_client_receipt(
        self,
        client_id: int,
        amount,
        treasury_id: Optional[int] = None,
        date: Optional[date] = None,
        reference_no: Optional[str] = None,
    ) -> int:
        """Record money received from a client against their account.

        Raises:
            NotFoundError: If the client or treasury does not exist
            ValidationError: If the amount is not positive
        """
        client = self.db.get_party(client_id)
        if client is None or client.kind != PartyKind.CLIENT:
            raise NotFoundError(party_not_found(PartyKind.CLIENT.value, client_id))
        return self.add_transaction(
            type=TransactionType.INCOME,
            amount=amount,
            category=CLIENT_RECEIPTS,
            description=f"Receipt from client: {client.name}",
            date=date,
            treasury_id=treasury_id,
            party_id=client.id,
            reference_no=reference_no,
        )

    def record_agent_payment(
        self,
        agent_id: int,
        amount,
        treasury_id: Optional[int] = None,
        date: Optional[date] = None,
        reference_no: Optional[str] = None,
    ) -> int:
        """Record money paid to an agent (supplier).

        Raises:
            NotFoundError: If the agent or treasury does not exist
            ValidationError: If the amount is not positive
        """
        agent = self.db.get_party(agent_id)
        if agent is None or agent.kind != PartyKind.AGENT:
            raise NotFoundError(party_not_found(PartyKind.AGENT.value, agent_id))
        return self.add_transaction(
            type=TransactionType.EXPENSE,
            amount=amount,
            category=SUPPLIER_PAYMENTS,
            description=f"Payment to supplier: {agent.name}",
            date=date,
            treasury_id=treasury_id,
            party_id=agent.id,
            reference_no=reference_no,
        )

    def reverse_transaction(self, transaction_id: int, date: Optional[date] = None) -> int:
        """Cancel a transaction with a compensating entry.

        The reversing entry copies the original's type, category, party and
        treasury with a negated amount, so every balance derived from the
        transaction returns to where it was before it was recorded. Reversing
        a booking receipt also removes its payment from the booking.

        Returns:
            ID of the reversing entry

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If the transaction is itself a reversal
            ConflictError: If the transaction was already reversed
        """
        original = self.require_transaction(transaction_id)
        if original.reverses_id is not None:
            raise ValidationError(
                f"Transaction {transaction_id} is a reversal and cannot be reversed"
            )
        if self.db.find_reversal(transaction_id) is not None:
            raise ConflictError(f"Transaction {transaction_id} has already been reversed")
        payment = self._booking_payment(original)

        reversal_id = self._record(
            type=original.type,
            amount=-original.amount,
            category=original.category,
            description=f"Reversal of #{original.id}: {original.description}",
            txn_date=date or date_today(),
            treasury_id=original.treasury_id,
            party_id=original.party_id,
            reference_no=f"REV-{original.reference}",
            reverses_id=original.id,
        )
        if payment is not None:
            self._release_payment(payment)
        self._logger.info(f"Reversed transaction {transaction_id} with {reversal_id}")
        return reversal_id

    def _booking_payment(self, txn: TransactionEntity):
        """Booking payment a receipt was recorded for, if any."""
        if txn.category != BOOKING_RECEIPTS or not txn.reference_no:
            return None
        prefix, _, payment_id = txn.reference_no.partition("-")
        if prefix != "PMT" or not payment_id.isdigit():
            return None
        return self.db.get_payment(int(payment_id))

    def _release_payment(self, payment) -> None:
        booking = self.db.get_booking(payment.booking_id)
        self.db.delete_payment(payment.id)
        if booking is None:
            return
        paid = max(booking.paid_amount - payment.final_amount, Decimal("0"))
        self.db.update_booking(
            booking.id,
            paid_amount=paid,
            payment_status=payment_status(booking.amount, paid),
        )
        self._logger.info(f"Removed payment {payment.id} from booking {booking.id}")

    def transfer_transaction(self, transaction_id: int, treasury_id: int) -> None:
        """Move a transaction to another treasury account.

        The old treasury's balance is restored and the new one receives the
        transaction's effect. Reversed entries and reversals cannot be
        moved.

        Raises:
            NotFoundError: If the transaction or treasury does not exist
            ValidationError: If the transaction has no treasury, already
                belongs to the target treasury, or is part of a reversal
        """
        txn = self.require_transaction(transaction_id)
        if txn.treasury_id is None:
            raise ValidationError(f"Transaction {transaction_id} is not linked to a treasury")
        if txn.treasury_id == treasury_id:
            raise ValidationError(
                f"Transaction {transaction_id} already belongs to treasury {treasury_id}"
            )
        if txn.reverses_id is not None:
            raise ValidationError(
                f"Transaction {transaction_id} is a reversal and cannot be transferred"
            )
        if self.db.find_reversal(transaction_id) is not None:
            raise ValidationError(
                f"Transaction {transaction_id} has been reversed and cannot be transferred"
            )
        if self.db.get_treasury(treasury_id) is None:
            raise NotFoundError(treasury_not_found(treasury_id))

        delta = treasury_delta(txn.type, txn.amount)
        self.db.adjust_treasury_balance(txn.treasury_id, -delta)
        self.db.adjust_treasury_balance(treasury_id, delta)
        self.db.update_transaction_treasury(transaction_id, treasury_id)
        self._logger.info(
            f"Moved transaction {transaction_id} from treasury {txn.treasury_id} to {treasury_id}"
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        treasury_id: Optional[int] = None,
        party_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with optional filters."""
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            type=type,
            category=category,
            treasury_id=treasury_id,
            party_id=party_id,
        )


def date_today() -> date:
    return date.today()
