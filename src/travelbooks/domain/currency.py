"""Exchange rate table and currency conversion.

Rates are expressed as units of a currency per 1 unit of the base currency
(JOD): ``rate[USD] = 1.41`` means 1 JOD buys 1.41 USD, so a USD amount is
divided by the rate to get JOD. The base rate is always 1 and never stored.

Conversions work on unrounded ``Decimal`` values. Rounding happens only when
an amount is shown, through :func:`round_money`, using ROUND_HALF_UP (half
away from zero) to the cent.
"""

import threading
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional

from travelbooks.domain.entities import BASE_CURRENCY, Currency
from travelbooks.domain.errors import InvalidRateError, invalid_rate
from travelbooks.utils.decimal_utils import coerce_decimal

CENT = Decimal("0.01")

DEFAULT_RATES: dict[Currency, Decimal] = {
    Currency.USD: Decimal("1.41"),
    Currency.EUR: Decimal("1.32"),
    Currency.ILS: Decimal("5.25"),
    Currency.SAR: Decimal("5.29"),
}


def round_money(value) -> Decimal:
    """Round an amount to the cent, half away from zero."""
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class ExchangeRateTable:
    """Process-wide mapping of currency to rate against the base currency.

    Writers replace a single rate under a lock; readers take a snapshot of
    the mapping so a conversion never mixes old and new values.
    """

    def __init__(self, rates: Optional[Mapping[Currency, Decimal]] = None):
        """Initialize the table.

        Args:
            rates: Optional initial rates; missing currencies fall back to
                DEFAULT_RATES. A base currency entry is ignored.

        Raises:
            InvalidRateError: If an initial rate is not positive
        """
        self._lock = threading.Lock()
        initial = dict(DEFAULT_RATES)
        for currency, rate in (rates or {}).items():
            currency = Currency(currency)
            if currency == BASE_CURRENCY:
                continue
            rate = coerce_decimal(rate)
            if rate <= 0:
                raise InvalidRateError(invalid_rate(currency.value, rate))
            initial[currency] = rate
        self._rates = initial

    def get_rate(self, currency: Currency | str) -> Decimal:
        """Return units of ``currency`` per 1 base unit."""
        currency = Currency(currency)
        if currency == BASE_CURRENCY:
            return Decimal("1")
        return self._rates[currency]

    def set_rate(self, currency: Currency | str, rate) -> Decimal:
        """Replace the rate for a currency.

        Returns:
            The previous rate

        Raises:
            InvalidRateError: If the rate is not positive or the currency is
                the base currency
        """
        currency = Currency(currency)
        rate = coerce_decimal(rate)
        if currency == BASE_CURRENCY:
            raise InvalidRateError(f"The {BASE_CURRENCY.value} rate is fixed at 1")
        if rate <= 0:
            raise InvalidRateError(invalid_rate(currency.value, rate))
        with self._lock:
            previous = self._rates[currency]
            rates = dict(self._rates)
            rates[currency] = rate
            self._rates = rates
        return previous

    def convert(self, amount, from_currency: Currency | str, to_currency: Currency | str) -> Decimal:
        """Convert an amount between two currencies through the base currency."""
        amount = coerce_decimal(amount)
        from_currency = Currency(from_currency)
        to_currency = Currency(to_currency)
        if from_currency == to_currency:
            return amount
        rates = self._rates
        rate_from = Decimal("1") if from_currency == BASE_CURRENCY else rates[from_currency]
        rate_to = Decimal("1") if to_currency == BASE_CURRENCY else rates[to_currency]
        return amount / rate_from * rate_to

    def to_base(self, amount, currency: Currency | str) -> Decimal:
        return self.convert(amount, currency, BASE_CURRENCY)

    def from_base(self, amount, currency: Currency | str) -> Decimal:
        return self.convert(amount, BASE_CURRENCY, currency)

    def as_dict(self) -> dict[Currency, Decimal]:
        """Snapshot of all rates including the base currency."""
        snapshot = {BASE_CURRENCY: Decimal("1")}
        snapshot.update(self._rates)
        return snapshot
