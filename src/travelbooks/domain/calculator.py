"""Booking financial calculator.

Turns service lines and a manually entered sales total into the cost,
profit and amount persisted on a booking. The calculator accepts partially
filled form data: missing or negative quantities and costs count as zero
and nothing here raises for business data.
"""

import math
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.entities import (
    BASE_CURRENCY,
    BookingTotals,
    Currency,
    PaymentStatus,
    ServiceLine,
    ServiceType,
)
from travelbooks.utils.decimal_utils import coerce_decimal, non_negative

# Collected amounts within this margin of the total count as fully paid.
PAYMENT_TOLERANCE = Decimal("0.01")


def hotel_nights(check_in: Optional[date], check_out: Optional[date]) -> int:
    """Number of nights between two stay dates, never less than 1.

    A missing check-out means a one-night stay. A check-out on or before
    the check-in date also clamps to one night.
    """
    if check_in is None:
        return 1
    if check_out is None:
        check_out = check_in + timedelta(days=1)
    days = (check_out - check_in).total_seconds() / 86400
    return max(1, math.ceil(days))


def hotel_quantity(
    check_in: Optional[date], check_out: Optional[date], room_count: Optional[int]
) -> int:
    """Rooms times nights for a hotel line. Room count defaults to 1."""
    rooms = room_count if room_count and room_count > 0 else 1
    return rooms * hotel_nights(check_in, check_out)


def effective_quantity(line: ServiceLine) -> int:
    """Quantity used for costing a line.

    Hotel lines with a check-in date derive their quantity from the stay;
    the stored quantity is ignored while dates are present.
    """
    if line.service_type == ServiceType.HOTEL and line.check_in is not None:
        return hotel_quantity(line.check_in, line.check_out, line.room_count)
    try:
        quantity = int(line.quantity or 0)
    except (TypeError, ValueError):
        return 0
    return max(quantity, 0)


def normalize_line(line: ServiceLine) -> ServiceLine:
    """Return the line with derived hotel fields filled in.

    Sets the default check-out and room count and stores the derived
    quantity so the persisted line matches what was costed.
    """
    if line.service_type != ServiceType.HOTEL or line.check_in is None:
        return replace(line, quantity=effective_quantity(line))
    check_out = line.check_out
    if check_out is None or check_out <= line.check_in:
        check_out = line.check_in + timedelta(days=1)
    room_count = line.room_count if line.room_count and line.room_count > 0 else 1
    return replace(
        line,
        check_out=check_out,
        room_count=room_count,
        quantity=hotel_quantity(line.check_in, check_out, room_count),
    )


def line_cost(line: ServiceLine, rates: ExchangeRateTable) -> Decimal:
    """Cost of a line in the base currency."""
    unit_cost = non_negative(line.cost_price)
    currency = line.cost_currency or BASE_CURRENCY
    return rates.to_base(unit_cost * effective_quantity(line), currency)


def compute_cost(lines: Iterable[ServiceLine], rates: ExchangeRateTable) -> Decimal:
    """Total cost of all lines in the base currency."""
    return sum((line_cost(line, rates) for line in lines), Decimal("0"))


def compute_profit(
    lines: Iterable[ServiceLine],
    sales_total,
    display_currency: Currency,
    rates: ExchangeRateTable,
) -> Decimal:
    """Sales total converted to the base currency minus total cost."""
    sales = rates.to_base(coerce_decimal(sales_total), display_currency)
    return sales - compute_cost(lines, rates)


def payment_status(amount, paid) -> PaymentStatus:
    """Payment status of a booking given its total and collected amount."""
    amount = coerce_decimal(amount)
    paid = coerce_decimal(paid)
    if paid > 0 and paid >= amount - PAYMENT_TOLERANCE:
        return PaymentStatus.PAID
    if paid > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


class BookingCalculator:
    """Cost and profit for a set of service lines.

    Every call recomputes from the current lines and rates; nothing is
    cached between edits.
    """

    def __init__(self, rates: ExchangeRateTable, lines: Sequence[ServiceLine] = ()):
        """Initialize calculator.

        Args:
            rates: Exchange rate table used for every conversion
            lines: Initial service lines
        """
        self.rates = rates
        self.lines: list[ServiceLine] = list(lines)

    def add_line(self, line: ServiceLine) -> None:
        self.lines.append(line)

    def update_line(self, index: int, **changes) -> ServiceLine:
        """Replace fields of a line and return the updated line."""
        self.lines[index] = replace(self.lines[index], **changes)
        return self.lines[index]

    def remove_line(self, index: int) -> None:
        del self.lines[index]

    def compute_cost(self) -> Decimal:
        return compute_cost(self.lines, self.rates)

    def compute_profit(self, sales_total, display_currency: Currency = BASE_CURRENCY) -> Decimal:
        return compute_profit(self.lines, sales_total, display_currency, self.rates)

    def totals(self, sales_total, display_currency: Currency = BASE_CURRENCY) -> BookingTotals:
        """Amount, cost and profit in the base currency."""
        amount = self.rates.to_base(coerce_decimal(sales_total), display_currency)
        cost = self.compute_cost()
        return BookingTotals(amount=amount, cost=cost, profit=amount - cost)

    def normalized_lines(self) -> list[ServiceLine]:
        return [normalize_line(line) for line in self.lines]
