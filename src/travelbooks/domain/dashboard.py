"""Dashboard summary service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from travelbooks.database.base import Database
from travelbooks.domain.entities import (
    INACTIVE_BOOKING_STATUSES,
    SUPPLIER_PAYMENTS,
    DashboardSummary,
    TransactionType,
)


class DashboardService:
    """Service for headline totals across bookings and transactions."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> DashboardSummary:
        """Build headline totals in the base currency.

        Cancelled and voided bookings are left out. Expenses are operational
        only: supplier payments settle booking costs, which are already
        counted in the gross profit.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter

        Returns:
            DashboardSummary
        """
        bookings = [
            b
            for b in self.db.list_bookings(start_date=start_date, end_date=end_date)
            if b.status not in INACTIVE_BOOKING_STATUSES
        ]
        expenses = [
            t
            for t in self.db.list_transactions(
                start_date=start_date, end_date=end_date, type=TransactionType.EXPENSE
            )
            if t.category != SUPPLIER_PAYMENTS
        ]

        total_sales = sum((b.amount for b in bookings), Decimal("0"))
        total_collected = sum((b.paid_amount for b in bookings), Decimal("0"))
        total_cost = sum((b.cost for b in bookings), Decimal("0"))
        total_pending = sum(
            (max(b.amount - b.paid_amount, Decimal("0")) for b in bookings), Decimal("0")
        )

        return DashboardSummary(
            bookings_count=len(bookings),
            total_sales=total_sales,
            total_collected=total_collected,
            total_pending=total_pending,
            total_cost=total_cost,
            total_profit=total_sales - total_cost,
            total_expenses=sum((t.amount for t in expenses), Decimal("0")),
            treasury_balances={t.name: t.balance for t in self.db.list_treasuries()},
        )
