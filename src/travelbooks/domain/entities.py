"""Domain model entities for travelbooks.

These are pure data classes representing business concepts, independent of
database schema. Every monetary field holds an amount in the base currency
(JOD) unless the field name says otherwise.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Currency(str, Enum):
    """Currencies an amount can be entered or displayed in."""

    JOD = "JOD"
    USD = "USD"
    EUR = "EUR"
    ILS = "ILS"
    SAR = "SAR"


BASE_CURRENCY = Currency.JOD


class PartyKind(str, Enum):
    """Kind of counterparty carrying a running balance."""

    CLIENT = "client"
    AGENT = "agent"


class BookingStatus(str, Enum):
    """Booking lifecycle status."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    ON_REQUEST = "on_request"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    VOIDED = "voided"


# Bookings in these states never bill the client.
INACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.VOIDED})


class PaymentStatus(str, Enum):
    """How much of a booking's sales total has been collected."""

    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class TransactionType(str, Enum):
    """Direction of a cash movement."""

    INCOME = "income"
    EXPENSE = "expense"


class ServiceType(str, Enum):
    """Kind of service sold inside a booking."""

    VISA = "visa"
    HOTEL = "hotel"
    FLIGHT = "flight"
    TRANSPORT = "transport"
    INSURANCE = "insurance"
    TOUR = "tour"
    OTHER = "other"


class TreasuryType(str, Enum):
    """Kind of cash account."""

    CASH = "cash"
    BANK = "bank"
    CHECKS = "checks"


# Transaction categories
CLIENT_RECEIPTS = "Customer Receipts"
BOOKING_RECEIPTS = "Booking Receipts"
SUPPLIER_PAYMENTS = "Supplier Payments"
GENERAL_EXPENSES = "General Expenses"

CLIENT_RECEIPT_CATEGORIES = frozenset({CLIENT_RECEIPTS, BOOKING_RECEIPTS})


@dataclass(frozen=True)
class Party:
    """Client or agent (supplier) with an opening balance.

    ``opening_balance`` is signed: positive means the client owes the
    business, or the business owes the agent.
    """

    id: int
    kind: PartyKind
    name: str
    opening_balance: Decimal = Decimal("0")
    party_type: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    credit_limit: Optional[Decimal] = None
    currency: Currency = BASE_CURRENCY
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ServiceLine:
    """One cost/sale item within a booking.

    ``cost_price`` is a unit cost in ``cost_currency``. For hotel lines the
    quantity is derived from the stay dates and room count.
    """

    service_type: ServiceType = ServiceType.OTHER
    quantity: int = 1
    cost_price: Decimal = Decimal("0")
    cost_currency: Currency = BASE_CURRENCY
    selling_price: Decimal = Decimal("0")
    supplier: Optional[str] = None
    supplier_id: Optional[int] = None
    inventory_id: Optional[int] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    room_count: Optional[int] = None
    details: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class Payment:
    """Payment applied to a booking."""

    id: int
    booking_id: int
    amount: Decimal
    currency: Currency
    exchange_rate: Decimal
    final_amount: Decimal
    date: date
    treasury_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Booking:
    """Booking with its cost/profit snapshot."""

    id: int
    client_name: str
    date: date
    amount: Decimal
    cost: Decimal
    profit: Decimal
    paid_amount: Decimal = Decimal("0")
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    destination: str = ""
    booking_type: str = "General"
    file_no: Optional[str] = None
    client_id: Optional[int] = None
    services: tuple[ServiceLine, ...] = ()
    payments: tuple[Payment, ...] = ()
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def reference(self) -> str:
        """File number if set, else the booking ID."""
        return self.file_no or str(self.id)


@dataclass(frozen=True)
class Transaction:
    """Cash movement.

    A reversing entry carries a negated ``amount`` and points back at the
    entry it cancels through ``reverses_id``.
    """

    id: int
    date: date
    type: TransactionType
    category: str
    amount: Decimal
    description: str = ""
    reference_no: Optional[str] = None
    treasury_id: Optional[int] = None
    party_id: Optional[int] = None
    reverses_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def reference(self) -> str:
        """Reference number if set, else the transaction ID."""
        return self.reference_no or str(self.id)


@dataclass(frozen=True)
class Treasury:
    """Cash, bank or checks account."""

    id: int
    name: str
    treasury_type: TreasuryType
    balance: Decimal
    currency: Currency = BASE_CURRENCY
    account_number: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class InventoryItem:
    """Prepaid travel product held in stock (rooms, seats, visas)."""

    id: int
    name: str
    service_type: ServiceType
    total_quantity: int
    cost_price: Decimal
    selling_price: Decimal
    currency: Currency = BASE_CURRENCY
    supplier: Optional[str] = None
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class InventoryStock:
    """Sold and remaining counts for an inventory item."""

    item_id: int
    total: int
    sold: int

    @property
    def remaining(self) -> int:
        return self.total - self.sold


@dataclass(frozen=True)
class BookingTotals:
    """Calculator output persisted on a booking."""

    amount: Decimal
    cost: Decimal
    profit: Decimal


@dataclass(frozen=True)
class LedgerTotals:
    """Derived debit/credit pair and resulting balance for a party."""

    opening_balance: Decimal
    debit: Decimal
    credit: Decimal

    @property
    def balance(self) -> Decimal:
        return self.opening_balance + self.debit - self.credit


@dataclass(frozen=True)
class StatementRow:
    """One line of a party statement."""

    date: Optional[date]
    reference: str
    description: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class Statement:
    """Chronological ledger view of a party.

    ``rows`` starts with the opening balance row. Totals exclude the opening
    balance.
    """

    party: Party
    rows: tuple[StatementRow, ...]
    opening_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal

    @property
    def closing_balance(self) -> Decimal:
        return self.opening_balance + self.total_debit - self.total_credit


@dataclass(frozen=True)
class DashboardSummary:
    """Headline totals across all bookings and transactions."""

    bookings_count: int
    total_sales: Decimal
    total_collected: Decimal
    total_pending: Decimal
    total_cost: Decimal
    total_profit: Decimal
    total_expenses: Decimal
    treasury_balances: dict[str, Decimal] = field(default_factory=dict)
