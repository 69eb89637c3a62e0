"""Tests for the dashboard summary."""

from datetime import date
from decimal import Decimal

import pytest

from travelbooks.domain.dashboard import DashboardService
from travelbooks.domain.entities import (
    BOOKING_RECEIPTS,
    GENERAL_EXPENSES,
    BookingStatus,
    ServiceLine,
    ServiceType,
    TransactionType,
)


@pytest.fixture
def dashboard_service(temp_db):
    return DashboardService(temp_db)


def test_empty_summary(dashboard_service):
    summary = dashboard_service.summary()
    assert summary.bookings_count == 0
    assert summary.total_sales == Decimal("0")
    assert summary.treasury_balances == {}


def test_summary_totals(dashboard_service, booking_service, transaction_service, sample_agent, sample_treasury):
    """Test totals leave out cancelled bookings and supplier payments."""
    line = ServiceLine(service_type=ServiceType.TOUR, quantity=1, cost_price=Decimal("60"), supplier="Petra Tours")
    first = booking_service.create_booking("Walk-in", date(2024, 1, 10), [line], "100")
    booking_service.create_booking("Basel", date(2024, 1, 12), [], "50")
    cancelled = booking_service.create_booking("Omar", date(2024, 1, 14), [], "500")
    booking_service.update_status(cancelled, BookingStatus.CANCELLED)

    booking_service.add_payment(first, "70", treasury_id=sample_treasury.id)
    transaction_service.record_agent_payment(sample_agent.id, "60", treasury_id=sample_treasury.id)
    transaction_service.add_transaction(
        type=TransactionType.EXPENSE, amount="15", category=GENERAL_EXPENSES
    )

    summary = dashboard_service.summary()
    assert summary.bookings_count == 2
    assert summary.total_sales == Decimal("150")
    assert summary.total_collected == Decimal("70")
    assert summary.total_pending == Decimal("80")
    assert summary.total_cost == Decimal("60")
    assert summary.total_profit == Decimal("90")
    assert summary.total_expenses == Decimal("15")
    assert summary.treasury_balances == {"Main Cash": Decimal("10")}


def test_overpaid_booking_has_no_pending(dashboard_service, booking_service):
    booking_id = booking_service.create_booking("Walk-in", date(2024, 1, 10), [], "100")
    booking_service.add_payment(booking_id, "120")
    assert dashboard_service.summary().total_pending == Decimal("0")


def test_summary_date_range(dashboard_service, booking_service):
    booking_service.create_booking("Walk-in", date(2024, 1, 10), [], "100")
    booking_service.create_booking("Walk-in", date(2024, 3, 10), [], "40")
    summary = dashboard_service.summary(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))
    assert summary.bookings_count == 1
    assert summary.total_sales == Decimal("40")


def test_reversed_booking_receipt_not_collected(
    dashboard_service, booking_service, transaction_service, sample_treasury
):
    """Test a reversed booking receipt drops out of collected and treasury totals."""
    booking_id = booking_service.create_booking("Walk-in", date(2024, 1, 10), [], "100")
    booking_service.add_payment(booking_id, "100", treasury_id=sample_treasury.id)
    receipt = transaction_service.list_transactions(category=BOOKING_RECEIPTS)[0]
    transaction_service.reverse_transaction(receipt.id)

    summary = dashboard_service.summary()
    assert summary.total_collected == Decimal("0")
    assert summary.total_pending == Decimal("100")
    assert summary.treasury_balances == {"Main Cash": Decimal("0")}
