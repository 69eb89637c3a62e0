"""Exchange rate domain service."""

from decimal import Decimal
from travelbooks.database.base import Database
from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.entities import Currency
from travelbooks.domain.errors import InvalidRateError
from travelbooks.utils.logger import get_app_logger


class RateService:
    """Service for loading and updating persisted exchange rates."""

    def __init__(self, db: Database, logger=None):
        """Initialize rate service.

        Args:
            db: Database instance
            logger: Optional logger; defaults to the application logger
        """
        self.db = db
        self._logger = logger or get_app_logger()

    def load_table(self) -> ExchangeRateTable:
        """Build a rate table from persisted rates over the defaults."""
        return ExchangeRateTable(self.db.get_exchange_rates())

    def set_rate(
        self, table: ExchangeRateTable, currency: Currency | str, rate
    ) -> Decimal:
        """Update a rate in the table and persist it.

        Returns:
            The previous rate

        Raises:
            InvalidRateError: If the rate is rejected; nothing is persisted
        """
        try:
            previous = table.set_rate(currency, rate)
        except InvalidRateError as exc:
            self._logger.warning(f"Rejected exchange rate update: {exc}")
            raise
        currency = Currency(currency)
        self.db.set_exchange_rate(currency, table.get_rate(currency))
        self._logger.info(
            f"Exchange rate for {currency.value} changed from {previous} to {table.get_rate(currency)}"
        )
        return previous
