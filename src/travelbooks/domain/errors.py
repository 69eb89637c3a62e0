"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidRateError(ValidationError):
    """Rejected exchange rate update; the previous rate is kept."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def party_not_found(kind: str, party_id: int | str) -> str:
    """Return message for missing client or agent."""
    return f"{kind.capitalize()} {party_id} not found"


def duplicate_party_name(kind: str, name: str) -> str:
    """Return message for a client or agent name already in use."""
    return f"{kind.capitalize()} with name '{name}' already exists"


def booking_not_found(booking_id: int) -> str:
    """Return message for missing booking."""
    return f"Booking {booking_id} not found"


def payment_not_found(payment_id: int) -> str:
    """Return message for missing booking payment."""
    return f"Payment {payment_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def treasury_not_found(treasury_id: int | str) -> str:
    """Return message for missing treasury account."""
    return f"Treasury {treasury_id} not found"


def inventory_item_not_found(item_id: int) -> str:
    """Return message for missing inventory item."""
    return f"Inventory item {item_id} not found"


def invalid_rate(currency: str, rate: Decimal) -> str:
    """Return message for a rejected exchange rate."""
    return f"Exchange rate for {currency} must be positive, got {rate}"


def party_delete_blocked(kind: str, party_id: int, booking_count: int, transaction_count: int) -> str:
    """Return message when a party still has linked bookings or transactions."""
    parts = []
    if booking_count > 0:
        parts.append(f"{booking_count} booking{'s' if booking_count != 1 else ''}")
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    return (
        f"Cannot delete {kind} {party_id}: it has {', '.join(parts)}. "
        "Please reassign or reverse them first."
    )
