"""Treasury domain service."""

from decimal import Decimal
from typing import Optional

from travelbooks.database.base import Database
from travelbooks.domain.entities import (
    BASE_CURRENCY,
    Currency,
    Treasury as TreasuryEntity,
    TreasuryType,
)
from travelbooks.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    treasury_not_found,
)
from travelbooks.utils.decimal_utils import coerce_decimal
from travelbooks.utils.logger import get_app_logger


class TreasuryService:
    """Service for managing cash, bank and checks accounts."""

    def __init__(self, db: Database, logger=None):
        """Initialize treasury service.

        Args:
            db: Database instance
            logger: Optional logger; defaults to the application logger
        """
        self.db = db
        self._logger = logger or get_app_logger()

    def create_treasury(
        self,
        name: str,
        treasury_type: TreasuryType = TreasuryType.CASH,
        balance=Decimal("0"),
        currency: Currency = BASE_CURRENCY,
        account_number: Optional[str] = None,
    ) -> int:
        """Create a treasury account.

        Args:
            name: Account name
            treasury_type: Cash, bank or checks
            balance: Starting balance
            currency: Account currency
            account_number: Optional bank account number

        Returns:
            Treasury ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a treasury with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Treasury name is required")
        for existing in self.db.list_treasuries():
            if existing.name == name:
                raise ConflictError(f"Treasury with name '{name}' already exists")

        treasury_id = self.db.create_treasury(
            name=name,
            treasury_type=TreasuryType(treasury_type),
            balance=coerce_decimal(balance),
            currency=Currency(currency),
            account_number=account_number,
        )
        self._logger.info(f"Created treasury '{name}' (ID: {treasury_id})")
        return treasury_id

    def get_treasury(self, treasury_id: int) -> Optional[TreasuryEntity]:
        """Get treasury by ID."""
        return self.db.get_treasury(treasury_id)

    def require_treasury(self, treasury_id: int) -> TreasuryEntity:
        """Get treasury by ID or raise NotFoundError."""
        treasury = self.db.get_treasury(treasury_id)
        if treasury is None:
            raise NotFoundError(treasury_not_found(treasury_id))
        return treasury

    def list_treasuries(self) -> list[TreasuryEntity]:
        return self.db.list_treasuries()
