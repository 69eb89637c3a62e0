"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the string columns that
hold enum values, so the domain never sees ORM objects.
"""

from travelbooks.domain import entities as domain
from travelbooks.database.models import (
    Party as ORMParty,
    Treasury as ORMTreasury,
    Booking as ORMBooking,
    ServiceLine as ORMServiceLine,
    Payment as ORMPayment,
    Transaction as ORMTransaction,
    InventoryItem as ORMInventoryItem,
)
from travelbooks.utils.decimal_utils import coerce_decimal


def party_to_domain(orm_party: ORMParty) -> domain.Party:
    """Convert SQLAlchemy Party model to domain Party entity."""
    return domain.Party(
        id=orm_party.id,
        kind=domain.PartyKind(orm_party.kind),
        name=orm_party.name,
        opening_balance=coerce_decimal(orm_party.opening_balance),
        party_type=orm_party.party_type,
        phone=orm_party.phone,
        email=orm_party.email,
        notes=orm_party.notes,
        credit_limit=orm_party.credit_limit,
        currency=domain.Currency(orm_party.currency),
        created_at=orm_party.created_at,
    )


def treasury_to_domain(orm_treasury: ORMTreasury) -> domain.Treasury:
    """Convert SQLAlchemy Treasury model to domain Treasury entity."""
    return domain.Treasury(
        id=orm_treasury.id,
        name=orm_treasury.name,
        treasury_type=domain.TreasuryType(orm_treasury.treasury_type),
        balance=coerce_decimal(orm_treasury.balance),
        currency=domain.Currency(orm_treasury.currency),
        account_number=orm_treasury.account_number,
        created_at=orm_treasury.created_at,
    )


def service_line_to_domain(orm_line: ORMServiceLine) -> domain.ServiceLine:
    """Convert SQLAlchemy ServiceLine model to domain ServiceLine entity."""
    return domain.ServiceLine(
        id=orm_line.id,
        service_type=domain.ServiceType(orm_line.service_type),
        quantity=orm_line.quantity,
        cost_price=coerce_decimal(orm_line.cost_price),
        cost_currency=domain.Currency(orm_line.cost_currency),
        selling_price=coerce_decimal(orm_line.selling_price),
        supplier=orm_line.supplier,
        supplier_id=orm_line.supplier_id,
        inventory_id=orm_line.inventory_id,
        check_in=orm_line.check_in,
        check_out=orm_line.check_out,
        room_count=orm_line.room_count,
        details=orm_line.details,
    )


def service_line_to_orm(line: domain.ServiceLine) -> ORMServiceLine:
    """Build a SQLAlchemy ServiceLine from a domain ServiceLine."""
    return ORMServiceLine(
        service_type=line.service_type.value,
        quantity=line.quantity,
        cost_price=line.cost_price,
        cost_currency=line.cost_currency.value,
        selling_price=line.selling_price,
        supplier=line.supplier,
        supplier_id=line.supplier_id,
        inventory_id=line.inventory_id,
        check_in=line.check_in,
        check_out=line.check_out,
        room_count=line.room_count,
        details=line.details,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        booking_id=orm_payment.booking_id,
        amount=coerce_decimal(orm_payment.amount),
        currency=domain.Currency(orm_payment.currency),
        exchange_rate=coerce_decimal(orm_payment.exchange_rate),
        final_amount=coerce_decimal(orm_payment.final_amount),
        date=orm_payment.date,
        treasury_id=orm_payment.treasury_id,
        notes=orm_payment.notes,
    )


def booking_to_domain(orm_booking: ORMBooking) -> domain.Booking:
    """Convert SQLAlchemy Booking model, with its lines and payments, to a domain Booking."""
    return domain.Booking(
        id=orm_booking.id,
        file_no=orm_booking.file_no,
        client_name=orm_booking.client_name,
        client_id=orm_booking.client_id,
        destination=orm_booking.destination,
        booking_type=orm_booking.booking_type,
        date=orm_booking.date,
        amount=coerce_decimal(orm_booking.amount),
        cost=coerce_decimal(orm_booking.cost),
        profit=coerce_decimal(orm_booking.profit),
        paid_amount=coerce_decimal(orm_booking.paid_amount),
        status=domain.BookingStatus(orm_booking.status),
        payment_status=domain.PaymentStatus(orm_booking.payment_status),
        services=tuple(service_line_to_domain(line) for line in orm_booking.services),
        payments=tuple(payment_to_domain(p) for p in orm_booking.payments),
        notes=orm_booking.notes,
        created_at=orm_booking.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
        amount=coerce_decimal(orm_transaction.amount),
        description=orm_transaction.description or "",
        reference_no=orm_transaction.reference_no,
        treasury_id=orm_transaction.treasury_id,
        party_id=orm_transaction.party_id,
        reverses_id=orm_transaction.reverses_id,
        created_at=orm_transaction.created_at,
    )


def inventory_item_to_domain(orm_item: ORMInventoryItem) -> domain.InventoryItem:
    """Convert SQLAlchemy InventoryItem model to domain InventoryItem entity."""
    return domain.InventoryItem(
        id=orm_item.id,
        name=orm_item.name,
        service_type=domain.ServiceType(orm_item.service_type),
        total_quantity=orm_item.total_quantity,
        cost_price=coerce_decimal(orm_item.cost_price),
        selling_price=coerce_decimal(orm_item.selling_price),
        currency=domain.Currency(orm_item.currency),
        supplier=orm_item.supplier,
        description=orm_item.description,
        expiry_date=orm_item.expiry_date,
        created_at=orm_item.created_at,
    )
