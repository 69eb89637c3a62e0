"""Booking domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from travelbooks.database.base import Database
from travelbooks.domain.calculator import BookingCalculator, payment_status
from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.entities import (
    BASE_CURRENCY,
    BOOKING_RECEIPTS,
    Booking,
    BookingStatus,
    Currency,
    PartyKind,
    ServiceLine,
    TransactionType,
)
from travelbooks.domain.errors import (
    DependencyError,
    InvalidRateError,
    NotFoundError,
    ValidationError,
    booking_not_found,
    invalid_rate,
    party_not_found,
    treasury_not_found,
)
from travelbooks.domain.rates import RateService
from travelbooks.domain.transaction import TransactionService, payment_reference
from travelbooks.utils.decimal_utils import coerce_decimal
from travelbooks.utils.logger import get_app_logger


class BookingService:
    """Service for creating bookings and applying payments.

    Cost and profit are always recomputed by the calculator before a
    booking is written, so stored figures match the stored service lines.
    """

    def __init__(
        self, db: Database, rates: Optional[ExchangeRateTable] = None, logger=None
    ):
        """Initialize booking service.

        Args:
            db: Database instance
            rates: Exchange rate table; loaded from the database when omitted
            logger: Optional logger; defaults to the application logger
        """
        self.db = db
        self.rates = rates if rates is not None else RateService(db).load_table()
        self._logger = logger or get_app_logger()

    def create_booking(
        self,
        client_name: str,
        date: date,
        services: Sequence[ServiceLine],
        sales_total,
        display_currency: Currency = BASE_CURRENCY,
        destination: str = "",
        booking_type: str = "General",
        status: BookingStatus = BookingStatus.CONFIRMED,
        file_no: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a booking.

        Args:
            client_name: Client the booking is billed to
            date: Booking (travel) date
            services: Service lines with unit costs in their own currencies
            sales_total: Sales total as typed, in ``display_currency``
            display_currency: Currency the sales total was entered in
            destination: Destination label
            booking_type: Free-form booking type (Tourism, Umrah, Flight...)
            status: Initial status
            file_no: Optional file number used on printed documents
            notes: Optional notes

        Returns:
            Booking ID

        Raises:
            ValidationError: If the client name is empty
        """
        client_name = (client_name or "").strip()
        if not client_name:
            raise ValidationError("Client name is required")

        client = self.db.get_party_by_name(PartyKind.CLIENT, client_name)
        calculator = BookingCalculator(self.rates, self.link_suppliers(services))
        totals = calculator.totals(sales_total, display_currency)

        booking_id = self.db.create_booking(
            client_name=client_name,
            client_id=client.id if client is not None else None,
            date=date,
            amount=totals.amount,
            cost=totals.cost,
            profit=totals.profit,
            services=calculator.normalized_lines(),
            status=BookingStatus(status),
            payment_status=payment_status(totals.amount, Decimal("0")),
            destination=destination or "",
            booking_type=booking_type or "General",
            file_no=file_no,
            notes=notes,
        )
        self._logger.info(
            f"Created booking {booking_id} for '{client_name}': "
            f"amount={totals.amount} cost={totals.cost} profit={totals.profit}"
        )
        return booking_id

    def link_suppliers(self, services: Sequence[ServiceLine]) -> list[ServiceLine]:
        """Attach agent IDs to service lines that name a known supplier."""
        linked = []
        for line in services:
            if line.supplier_id is None and line.supplier:
                agent = self.db.get_party_by_name(PartyKind.AGENT, line.supplier.strip())
                if agent is not None:
                    line = replace(line, supplier=agent.name, supplier_id=agent.id)
            elif line.supplier_id is not None and not line.supplier:
                agent = self.db.get_party(line.supplier_id)
                if agent is None or agent.kind != PartyKind.AGENT:
                    raise NotFoundError(f"Agent {line.supplier_id} not found")
                line = replace(line, supplier=agent.name)
            linked.append(line)
        return linked

    def update_booking(
        self,
        booking_id: int,
        services: Optional[Sequence[ServiceLine]] = None,
        sales_total=None,
        display_currency: Currency = BASE_CURRENCY,
        destination: Optional[str] = None,
        notes: Optional[str] = None,
        date: Optional[date] = None,
    ) -> Booking:
        """Amend a booking and recompute its cost, profit and payment status.

        Omitted services keep the stored lines; an omitted sales total keeps
        the stored base-currency amount. Totals are recomputed with the
        current exchange rates either way.

        Returns:
            The updated booking

        Raises:
            NotFoundError: If the booking does not exist
        """
        booking = self.require_booking(booking_id)
        lines = self.link_suppliers(services) if services is not None else list(booking.services)
        if sales_total is None:
            sales_total, display_currency = booking.amount, BASE_CURRENCY

        calculator = BookingCalculator(self.rates, lines)
        totals = calculator.totals(sales_total, display_currency)

        fields = {
            "amount": totals.amount,
            "cost": totals.cost,
            "profit": totals.profit,
            "payment_status": payment_status(totals.amount, booking.paid_amount),
        }
        if destination is not None:
            fields["destination"] = destination
        if notes is not None:
            fields["notes"] = notes
        if date is not None:
            fields["date"] = date

        self.db.update_booking(booking_id, services=calculator.normalized_lines(), **fields)
        self._logger.info(
            f"Updated booking {booking_id}: amount={totals.amount} cost={totals.cost} profit={totals.profit}"
        )
        return self.require_booking(booking_id)

    def update_status(self, booking_id: int, status: BookingStatus) -> None:
        """Change a booking's status.

        Raises:
            NotFoundError: If the booking does not exist
        """
        booking = self.require_booking(booking_id)
        status = BookingStatus(status)
        self.db.update_booking(booking_id, status=status)
        self._logger.info(
            f"Booking {booking_id} status changed from {booking.status.value} to {status.value}"
        )

    def add_payment(
        self,
        booking_id: int,
        amount,
        currency: Currency = BASE_CURRENCY,
        date: Optional[date] = None,
        treasury_id: Optional[int] = None,
        exchange_rate=None,
        notes: Optional[str] = None,
    ) -> int:
        """Apply a payment to a booking.

        The payment is converted to the base currency with ``exchange_rate``
        (units of ``currency`` per 1 base unit; the table rate when omitted).
        The booking's paid amount and payment status are updated and a
        booking receipt is recorded as income against the client.

        Returns:
            Payment ID

        Raises:
            NotFoundError: If the booking or treasury does not exist
            ValidationError: If the amount is not positive
            InvalidRateError: If the exchange rate is not positive
        """
        booking = self.require_booking(booking_id)
        amount = coerce_decimal(amount)
        if amount <= 0:
            raise ValidationError(f"Payment amount must be positive, got {amount}")
        currency = Currency(currency)
        rate = (
            self.rates.get_rate(currency)
            if exchange_rate is None
            else coerce_decimal(exchange_rate)
        )
        if rate <= 0:
            raise InvalidRateError(invalid_rate(currency.value, rate))
        # Check references before anything is written
        if treasury_id is not None and self.db.get_treasury(treasury_id) is None:
            raise NotFoundError(treasury_not_found(treasury_id))
        if booking.client_id is not None and self.db.get_party(booking.client_id) is None:
            raise NotFoundError(party_not_found(PartyKind.CLIENT.value, booking.client_id))
        final_amount = amount / rate
        payment_date = date or date_today()

        transactions = TransactionService(self.db, logger=self._logger)
        payment_id = self.db.add_payment(
            booking_id=booking_id,
            amount=amount,
            currency=currency,
            exchange_rate=rate,
            final_amount=final_amount,
            date=payment_date,
            treasury_id=treasury_id,
            notes=notes,
        )
        paid = booking.paid_amount + final_amount
        self.db.update_booking(
            booking_id,
            paid_amount=paid,
            payment_status=payment_status(booking.amount, paid),
        )
        transactions.add_transaction(
            type=TransactionType.INCOME,
            amount=final_amount,
            category=BOOKING_RECEIPTS,
            description=f"Booking payment from {booking.client_name} - file {booking.reference}",
            date=payment_date,
            treasury_id=treasury_id,
            party_id=booking.client_id,
            reference_no=payment_reference(payment_id),
        )
        self._logger.info(f"Added payment {payment_id} of {final_amount} to booking {booking_id}")
        return payment_id

    def delete_booking(self, booking_id: int) -> None:
        """Delete a booking that has no payments.

        Raises:
            NotFoundError: If the booking does not exist
            DependencyError: If payments were applied to the booking
        """
        booking = self.require_booking(booking_id)
        if booking.payments:
            raise DependencyError(
                f"Cannot delete booking {booking_id}: it has {len(booking.payments)} "
                f"payment{'s' if len(booking.payments) != 1 else ''}. "
                "Cancel or void it instead."
            )
        self.db.delete_booking(booking_id)
        self._logger.info(f"Deleted booking {booking_id}")

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        """Get booking by ID."""
        return self.db.get_booking(booking_id)

    def require_booking(self, booking_id: int) -> Booking:
        """Get booking by ID or raise NotFoundError."""
        booking = self.db.get_booking(booking_id)
        if booking is None:
            raise NotFoundError(booking_not_found(booking_id))
        return booking

    def list_bookings(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[BookingStatus] = None,
        client_name: Optional[str] = None,
    ) -> list[Booking]:
        """List bookings with optional filters."""
        return self.db.list_bookings(
            start_date=start_date,
            end_date=end_date,
            status=status,
            client_name=client_name,
        )


def date_today() -> date:
    return date.today()
