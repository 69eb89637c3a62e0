"""Inventory domain service."""

from datetime import date
from typing import Iterable, Optional

from travelbooks.database.base import Database
from travelbooks.domain.calculator import effective_quantity
from travelbooks.domain.entities import (
    BASE_CURRENCY,
    INACTIVE_BOOKING_STATUSES,
    Booking,
    Currency,
    InventoryItem,
    InventoryStock,
    ServiceType,
)
from travelbooks.domain.errors import NotFoundError, ValidationError, inventory_item_not_found
from travelbooks.utils.decimal_utils import coerce_decimal
from travelbooks.utils.logger import get_app_logger


def count_sold(item: InventoryItem, bookings: Iterable[Booking]) -> int:
    """Units of an inventory item consumed by active bookings.

    Hotel stock is counted in rooms, not room-nights; every other service
    type counts the line's quantity.
    """
    sold = 0
    for booking in bookings:
        if booking.status in INACTIVE_BOOKING_STATUSES:
            continue
        for line in booking.services:
            if line.inventory_id != item.id:
                continue
            if item.service_type == ServiceType.HOTEL:
                sold += max(line.room_count or 1, 1)
            else:
                sold += effective_quantity(line)
    return sold


class InventoryService:
    """Service for prepaid stock (hotel allotments, seats, visas)."""

    def __init__(self, db: Database, logger=None):
        """Initialize inventory service.

        Args:
            db: Database instance
            logger: Optional logger; defaults to the application logger
        """
        self.db = db
        self._logger = logger or get_app_logger()

    def create_item(
        self,
        name: str,
        service_type: ServiceType,
        total_quantity: int,
        cost_price,
        selling_price,
        currency: Currency = BASE_CURRENCY,
        supplier: Optional[str] = None,
        description: Optional[str] = None,
        expiry_date: Optional[date] = None,
    ) -> int:
        """Add an inventory item.

        Returns:
            Inventory item ID

        Raises:
            ValidationError: If the name is empty or the quantity is negative
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Inventory item name is required")
        if total_quantity < 0:
            raise ValidationError(f"Quantity cannot be negative, got {total_quantity}")

        item_id = self.db.create_inventory_item(
            name=name,
            service_type=ServiceType(service_type),
            total_quantity=total_quantity,
            cost_price=coerce_decimal(cost_price),
            selling_price=coerce_decimal(selling_price),
            currency=Currency(currency),
            supplier=supplier,
            description=description,
            expiry_date=expiry_date,
        )
        self._logger.info(f"Created inventory item '{name}' (ID: {item_id}, qty {total_quantity})")
        return item_id

    def list_items(self) -> list[InventoryItem]:
        return self.db.list_inventory_items()

    def require_item(self, item_id: int) -> InventoryItem:
        """Get inventory item by ID or raise NotFoundError."""
        item = self.db.get_inventory_item(item_id)
        if item is None:
            raise NotFoundError(inventory_item_not_found(item_id))
        return item

    def stock(self, item_id: int) -> InventoryStock:
        """Sold and remaining units for one item."""
        item = self.require_item(item_id)
        sold = count_sold(item, self.db.list_bookings())
        return InventoryStock(item_id=item.id, total=item.total_quantity, sold=sold)

    def stock_levels(self) -> list[tuple[InventoryItem, InventoryStock]]:
        """Sold and remaining units for every item."""
        bookings = self.db.list_bookings()
        return [
            (
                item,
                InventoryStock(
                    item_id=item.id,
                    total=item.total_quantity,
                    sold=count_sold(item, bookings),
                ),
            )
            for item in self.db.list_inventory_items()
        ]
