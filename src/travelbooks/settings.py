"""Settings loaded from the environment."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

from travelbooks.domain.entities import BASE_CURRENCY, Currency

DB_PATH_ENV = "TRAVELBOOKS_DB_PATH"
LOG_LEVEL_ENV = "TRAVELBOOKS_LOG_LEVEL"
DISPLAY_CURRENCY_ENV = "TRAVELBOOKS_DISPLAY_CURRENCY"


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        database_path: Optional SQLite file path; None means the default
            location under the user's home directory.
        log_level: Name of the logging level for the application logger.
        display_currency: Currency amounts are shown in by the CLI.
    """

    database_path: Optional[str] = None
    log_level: str = "WARNING"
    display_currency: Currency = BASE_CURRENCY

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Returns:
            Settings: Settings sourced from environment variables.
        """
        database_path = os.getenv(DB_PATH_ENV) or None
        log_level = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING"
        raw_currency = os.getenv(DISPLAY_CURRENCY_ENV, BASE_CURRENCY.value).strip().upper()
        try:
            display_currency = Currency(raw_currency)
        except ValueError:
            display_currency = BASE_CURRENCY
        return cls(
            database_path=database_path,
            log_level=log_level,
            display_currency=display_currency,
        )

    def resolve_database_path(self) -> str:
        """Return the configured database path, creating the default directory."""
        if self.database_path:
            return self.database_path
        db_dir = Path.home() / ".travelbooks"
        db_dir.mkdir(exist_ok=True)
        return str(db_dir / "travelbooks.db")
