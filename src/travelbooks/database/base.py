"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain services
from travelbooks.domain.entities import (
    Booking,
    BookingStatus,
    Currency,
    InventoryItem,
    Party,
    PartyKind,
    Payment,
    PaymentStatus,
    ServiceLine,
    ServiceType,
    Transaction,
    TransactionType,
    Treasury,
    TreasuryType,
)


class Database(ABC):
    """Abstract database interface for travelbooks."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Party operations
    @abstractmethod
    def create_party(
        self,
        kind: PartyKind,
        name: str,
        opening_balance: Decimal = Decimal("0"),
        party_type: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
        credit_limit: Optional[Decimal] = None,
        currency: Currency = Currency.JOD,
    ) -> int:
        """Create a client or agent. Returns party ID."""
        pass

    @abstractmethod
    def get_party(self, party_id: int) -> Optional[Party]:
        """Get party by ID."""
        pass

    @abstractmethod
    def get_party_by_name(self, kind: PartyKind, name: str) -> Optional[Party]:
        """Get party by exact name within a kind."""
        pass

    @abstractmethod
    def list_parties(self, kind: Optional[PartyKind] = None) -> list[Party]:
        """List parties, optionally filtered by kind."""
        pass

    @abstractmethod
    def update_party(self, party_id: int, **fields) -> None:
        """Update the given party columns."""
        pass

    @abstractmethod
    def delete_party(self, party_id: int) -> None:
        """Delete a party."""
        pass

    @abstractmethod
    def get_party_activity_counts(self, party_id: int) -> tuple[int, int]:
        """Return (booking count, transaction count) linked to a party by ID."""
        pass

    # Treasury operations
    @abstractmethod
    def create_treasury(
        self,
        name: str,
        treasury_type: TreasuryType,
        balance: Decimal = Decimal("0"),
        currency: Currency = Currency.JOD,
        account_number: Optional[str] = None,
    ) -> int:
        """Create a treasury account. Returns treasury ID."""
        pass

    @abstractmethod
    def get_treasury(self, treasury_id: int) -> Optional[Treasury]:
        """Get treasury by ID."""
        pass

    @abstractmethod
    def list_treasuries(self) -> list[Treasury]:
        """List all treasury accounts."""
        pass

    @abstractmethod
    def adjust_treasury_balance(self, treasury_id: int, delta: Decimal) -> None:
        """Add a signed amount to a treasury balance."""
        pass

    # Booking operations
    @abstractmethod
    def create_booking(
        self,
        client_name: str,
        date: date,
        amount: Decimal,
        cost: Decimal,
        profit: Decimal,
        services: Sequence[ServiceLine],
        status: BookingStatus = BookingStatus.CONFIRMED,
        payment_status: PaymentStatus = PaymentStatus.UNPAID,
        client_id: Optional[int] = None,
        destination: str = "",
        booking_type: str = "General",
        file_no: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a booking with its service lines. Returns booking ID."""
        pass

    @abstractmethod
    def get_booking(self, booking_id: int) -> Optional[Booking]:
        """Get booking by ID, with service lines and payments."""
        pass

    @abstractmethod
    def list_bookings(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[BookingStatus] = None,
        client_name: Optional[str] = None,
    ) -> list[Booking]:
        """List bookings ordered by date then ID."""
        pass

    @abstractmethod
    def update_booking(self, booking_id: int, services: Optional[Sequence[ServiceLine]] = None, **fields) -> None:
        """Update booking columns; replaces all service lines when given."""
        pass

    @abstractmethod
    def delete_booking(self, booking_id: int) -> None:
        """Delete a booking with its lines and payments."""
        pass

    @abstractmethod
    def add_payment(
        self,
        booking_id: int,
        amount: Decimal,
        currency: Currency,
        exchange_rate: Decimal,
        final_amount: Decimal,
        date: date,
        treasury_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record a payment on a booking. Returns payment ID."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get booking payment by ID."""
        pass

    @abstractmethod
    def delete_payment(self, payment_id: int) -> None:
        """Delete a booking payment."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        type: TransactionType,
        category: str,
        amount: Decimal,
        description: str = "",
        reference_no: Optional[str] = None,
        treasury_id: Optional[int] = None,
        party_id: Optional[int] = None,
        reverses_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def find_reversal(self, transaction_id: int) -> Optional[Transaction]:
        """Get the entry reversing a transaction, if any."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        treasury_id: Optional[int] = None,
        party_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions ordered by date then ID."""
        pass

    @abstractmethod
    def update_transaction_treasury(self, transaction_id: int, treasury_id: int) -> None:
        """Move a transaction to another treasury account."""
        pass

    # Exchange rate operations
    @abstractmethod
    def get_exchange_rates(self) -> dict[Currency, Decimal]:
        """Get all persisted exchange rates."""
        pass

    @abstractmethod
    def set_exchange_rate(self, currency: Currency, rate: Decimal) -> None:
        """Persist the rate for a currency."""
        pass

    # Inventory operations
    @abstractmethod
    def create_inventory_item(
        self,
        name: str,
        service_type: ServiceType,
        total_quantity: int,
        cost_price: Decimal,
        selling_price: Decimal,
        currency: Currency = Currency.JOD,
        supplier: Optional[str] = None,
        description: Optional[str] = None,
        expiry_date: Optional[date] = None,
    ) -> int:
        """Create an inventory item. Returns item ID."""
        pass

    @abstractmethod
    def get_inventory_item(self, item_id: int) -> Optional[InventoryItem]:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    def list_inventory_items(self) -> list[InventoryItem]:
        """List all inventory items."""
        pass
