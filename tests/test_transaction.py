"""Tests for the transaction service."""

import pytest
from datetime import date
from decimal import Decimal

from travelbooks.domain.entities import (
    CLIENT_RECEIPTS,
    GENERAL_EXPENSES,
    SUPPLIER_PAYMENTS,
    TransactionType,
)
from travelbooks.domain.errors import ConflictError, NotFoundError, ValidationError
from travelbooks.domain.transaction import treasury_delta


def test_add_income_updates_treasury(transaction_service, treasury_service, sample_treasury):
    transaction_id = transaction_service.add_transaction(
        type=TransactionType.INCOME,
        amount="75.25",
        category="Other Income",
        description="Commission",
        date=date(2024, 1, 15),
        treasury_id=sample_treasury.id,
    )
    txn = transaction_service.get_transaction(transaction_id)
    assert txn.amount == Decimal("75.25")
    assert txn.category == "Other Income"
    assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("75.25")


def test_add_expense_lowers_treasury(transaction_service, treasury_service, sample_treasury):
    transaction_service.add_transaction(
        type=TransactionType.EXPENSE,
        amount="30",
        category=GENERAL_EXPENSES,
        treasury_id=sample_treasury.id,
    )
    assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("-30")


def test_add_without_treasury_update(transaction_service, treasury_service, sample_treasury):
    """Test recording a movement already reflected in the treasury."""
    transaction_service.add_transaction(
        type=TransactionType.INCOME,
        amount="30",
        category="Other Income",
        treasury_id=sample_treasury.id,
        update_treasury=False,
    )
    assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("0")


def test_add_defaults_to_today(transaction_service):
    transaction_id = transaction_service.add_transaction(
        type=TransactionType.INCOME, amount="1", category="Other Income"
    )
    assert transaction_service.get_transaction(transaction_id).date == date.today()


@pytest.mark.parametrize("amount", ["0", "-10"])
def test_add_rejects_non_positive_amount(transaction_service, amount):
    with pytest.raises(ValidationError):
        transaction_service.add_transaction(
            type=TransactionType.INCOME, amount=amount, category="Other Income"
        )


def test_add_rejects_empty_category(transaction_service):
    with pytest.raises(ValidationError):
        transaction_service.add_transaction(type=TransactionType.INCOME, amount="10", category=" ")


def test_add_rejects_unknown_treasury(transaction_service):
    with pytest.raises(NotFoundError, match="Treasury 9 not found"):
        transaction_service.add_transaction(
            type=TransactionType.INCOME, amount="10", category="Other Income", treasury_id=9
        )


def test_add_rejects_unknown_party(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.add_transaction(
            type=TransactionType.INCOME, amount="10", category=CLIENT_RECEIPTS, party_id=9
        )


def test_record_client_receipt(transaction_service, sample_client):
    transaction_id = transaction_service.record_client_receipt(
        sample_client.id, "40", reference_no="R-1"
    )
    txn = transaction_service.get_transaction(transaction_id)
    assert txn.type == TransactionType.INCOME
    assert txn.category == CLIENT_RECEIPTS
    assert txn.party_id == sample_client.id
    assert txn.description == "Receipt from client: Ahmad Saleh"
    assert txn.reference == "R-1"


def test_record_client_receipt_rejects_agent(transaction_service, sample_agent):
    with pytest.raises(NotFoundError, match="Client"):
        transaction_service.record_client_receipt(sample_agent.id, "40")


def test_record_agent_payment(transaction_service, sample_agent):
    transaction_id = transaction_service.record_agent_payment(sample_agent.id, "90")
    txn = transaction_service.get_transaction(transaction_id)
    assert txn.type == TransactionType.EXPENSE
    assert txn.category == SUPPLIER_PAYMENTS
    assert txn.description == "Payment to supplier: Petra Tours"


class TestReverseTransaction:
    """Tests for reversing entries."""

    def test_reversal_negates_amount(self, transaction_service, sample_client):
        original_id = transaction_service.record_client_receipt(sample_client.id, "40")
        reversal_id = transaction_service.reverse_transaction(original_id, date=date(2024, 2, 1))

        reversal = transaction_service.get_transaction(reversal_id)
        assert reversal.amount == Decimal("-40")
        assert reversal.reverses_id == original_id
        assert reversal.party_id == sample_client.id
        assert reversal.category == CLIENT_RECEIPTS
        assert reversal.date == date(2024, 2, 1)
        assert reversal.description.startswith(f"Reversal of #{original_id}")

    def test_original_is_kept(self, transaction_service, sample_client):
        original_id = transaction_service.record_client_receipt(sample_client.id, "40")
        transaction_service.reverse_transaction(original_id)
        assert transaction_service.get_transaction(original_id).amount == Decimal("40")
        assert len(transaction_service.list_transactions()) == 2

    def test_reversal_restores_balances(
        self, transaction_service, party_service, treasury_service, sample_client, sample_treasury
    ):
        """Test a reversed receipt no longer affects the client or the treasury."""
        original_id = transaction_service.record_client_receipt(
            sample_client.id, "40", treasury_id=sample_treasury.id
        )
        assert party_service.balance(sample_client.id) == Decimal("-40")

        transaction_service.reverse_transaction(original_id)
        assert party_service.balance(sample_client.id) == Decimal("0")
        assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("0")

    def test_cannot_reverse_twice(self, transaction_service, sample_client):
        original_id = transaction_service.record_client_receipt(sample_client.id, "40")
        transaction_service.reverse_transaction(original_id)
        with pytest.raises(ConflictError):
            transaction_service.reverse_transaction(original_id)

    def test_cannot_reverse_a_reversal(self, transaction_service, sample_client):
        original_id = transaction_service.record_client_receipt(sample_client.id, "40")
        reversal_id = transaction_service.reverse_transaction(original_id)
        with pytest.raises(ValidationError):
            transaction_service.reverse_transaction(reversal_id)

    def test_missing_transaction(self, transaction_service):
        with pytest.raises(NotFoundError, match="Transaction 5 not found"):
            transaction_service.reverse_transaction(5)


class TestTransferTransaction:
    """Tests for moving a transaction between treasuries."""

    def test_transfer_moves_balance(self, transaction_service, treasury_service, sample_treasury):
        bank_id = treasury_service.create_treasury(name="Arab Bank", treasury_type="bank")
        transaction_id = transaction_service.add_transaction(
            type=TransactionType.INCOME,
            amount="100",
            category="Other Income",
            treasury_id=sample_treasury.id,
        )

        transaction_service.transfer_transaction(transaction_id, bank_id)

        assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("0")
        assert treasury_service.get_treasury(bank_id).balance == Decimal("100")
        assert transaction_service.get_transaction(transaction_id).treasury_id == bank_id

    def test_transfer_expense(self, transaction_service, treasury_service, sample_treasury):
        bank_id = treasury_service.create_treasury(name="Arab Bank", treasury_type="bank")
        transaction_id = transaction_service.add_transaction(
            type=TransactionType.EXPENSE,
            amount="20",
            category=GENERAL_EXPENSES,
            treasury_id=sample_treasury.id,
        )
        transaction_service.transfer_transaction(transaction_id, bank_id)
        assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("0")
        assert treasury_service.get_treasury(bank_id).balance == Decimal("-20")

    def test_transfer_requires_treasury(self, transaction_service, sample_treasury):
        transaction_id = transaction_service.add_transaction(
            type=TransactionType.INCOME, amount="5", category="Other Income"
        )
        with pytest.raises(ValidationError):
            transaction_service.transfer_transaction(transaction_id, sample_treasury.id)

    def test_transfer_to_same_treasury(self, transaction_service, sample_treasury):
        transaction_id = transaction_service.add_transaction(
            type=TransactionType.INCOME,
            amount="5",
            category="Other Income",
            treasury_id=sample_treasury.id,
        )
        with pytest.raises(ValidationError):
            transaction_service.transfer_transaction(transaction_id, sample_treasury.id)

    def test_transfer_to_unknown_treasury(self, transaction_service, sample_treasury):
        transaction_id = transaction_service.add_transaction(
            type=TransactionType.INCOME,
            amount="5",
            category="Other Income",
            treasury_id=sample_treasury.id,
        )
        with pytest.raises(NotFoundError):
            transaction_service.transfer_transaction(transaction_id, 77)

    def test_reversed_entries_stay_put(self, transaction_service, treasury_service, sample_treasury):
        """Test neither half of a reversal can be moved to another treasury."""
        bank_id = treasury_service.create_treasury(name="Arab Bank", treasury_type="bank")
        transaction_id = transaction_service.add_transaction(
            type=TransactionType.INCOME,
            amount="100",
            category="Other Income",
            treasury_id=sample_treasury.id,
        )
        reversal_id = transaction_service.reverse_transaction(transaction_id)

        with pytest.raises(ValidationError, match="has been reversed"):
            transaction_service.transfer_transaction(transaction_id, bank_id)
        with pytest.raises(ValidationError, match="is a reversal"):
            transaction_service.transfer_transaction(reversal_id, bank_id)

        assert treasury_service.get_treasury(sample_treasury.id).balance == Decimal("0")
        assert treasury_service.get_treasury(bank_id).balance == Decimal("0")
        assert transaction_service.get_transaction(transaction_id).treasury_id == sample_treasury.id


def test_list_transactions_filters(transaction_service, sample_client, sample_agent):
    transaction_service.record_client_receipt(sample_client.id, "10", date=date(2024, 1, 5))
    transaction_service.record_agent_payment(sample_agent.id, "20", date=date(2024, 2, 5))

    assert len(transaction_service.list_transactions()) == 2
    assert len(transaction_service.list_transactions(type=TransactionType.EXPENSE)) == 1
    assert len(transaction_service.list_transactions(party_id=sample_client.id)) == 1
    january = transaction_service.list_transactions(
        start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)
    )
    assert [t.category for t in january] == [CLIENT_RECEIPTS]


@pytest.mark.parametrize(
    "txn_type,amount,expected",
    [
        (TransactionType.INCOME, Decimal("10"), Decimal("10")),
        (TransactionType.EXPENSE, Decimal("10"), Decimal("-10")),
        (TransactionType.INCOME, Decimal("-10"), Decimal("-10")),
    ],
)
def test_treasury_delta(txn_type, amount, expected):
    assert treasury_delta(txn_type, amount) == expected
