"""Tests for the exchange rate table."""

import threading
from decimal import Decimal

import pytest

from travelbooks.domain.currency import DEFAULT_RATES, ExchangeRateTable, round_money
from travelbooks.domain.entities import BASE_CURRENCY, Currency
from travelbooks.domain.errors import InvalidRateError, ValidationError


def test_default_rates():
    """Test the table starts from the default rates."""
    table = ExchangeRateTable()
    assert table.get_rate(Currency.USD) == Decimal("1.41")
    assert table.get_rate(Currency.EUR) == Decimal("1.32")
    assert table.get_rate(Currency.ILS) == Decimal("5.25")
    assert table.get_rate(Currency.SAR) == Decimal("5.29")


def test_base_rate_is_one():
    """Test the base currency rate is always 1."""
    table = ExchangeRateTable({Currency.JOD: Decimal("3")})
    assert table.get_rate(BASE_CURRENCY) == Decimal("1")


def test_initial_rates_override_defaults():
    """Test persisted rates replace the defaults they name."""
    table = ExchangeRateTable({Currency.USD: Decimal("1.5")})
    assert table.get_rate(Currency.USD) == Decimal("1.5")
    assert table.get_rate(Currency.EUR) == DEFAULT_RATES[Currency.EUR]


def test_initial_non_positive_rate_rejected():
    """Test a table cannot be built with a zero rate."""
    with pytest.raises(InvalidRateError):
        ExchangeRateTable({Currency.USD: Decimal("0")})


def test_rate_lookup_accepts_strings():
    table = ExchangeRateTable()
    assert table.get_rate("USD") == Decimal("1.41")


def test_convert_to_base():
    """Test converting a foreign amount divides by its rate."""
    table = ExchangeRateTable()
    assert table.to_base(Decimal("141"), Currency.USD) == Decimal("100")


def test_convert_from_base():
    """Test converting a base amount multiplies by the target rate."""
    table = ExchangeRateTable()
    assert table.from_base(Decimal("100"), Currency.SAR) == Decimal("529")


def test_convert_between_foreign_currencies():
    """Test cross conversion goes through the base currency."""
    table = ExchangeRateTable()
    result = table.convert(Decimal("141"), Currency.USD, Currency.EUR)
    assert result == Decimal("132")


def test_convert_same_currency_is_identity():
    table = ExchangeRateTable()
    assert table.convert(Decimal("12.345"), Currency.EUR, Currency.EUR) == Decimal("12.345")


def test_convert_treats_missing_amount_as_zero():
    """Test unparseable amounts convert as zero."""
    table = ExchangeRateTable()
    assert table.convert(None, Currency.USD, Currency.JOD) == Decimal("0")
    assert table.convert("not a number", Currency.USD, Currency.JOD) == Decimal("0")


@pytest.mark.parametrize(
    "amount,source,target",
    [
        ("100", Currency.USD, Currency.JOD),
        ("0.07", Currency.ILS, Currency.SAR),
        ("99999.99", Currency.EUR, Currency.ILS),
        ("-250.10", Currency.JOD, Currency.USD),
        ("1", Currency.SAR, Currency.EUR),
    ],
)
def test_conversion_round_trip_within_a_cent(amount, source, target):
    """Test converting there and back returns the original amount to the cent."""
    table = ExchangeRateTable()
    x = Decimal(amount)
    back = table.convert(table.convert(x, source, target), target, source)
    assert abs(back - x) < Decimal("0.01")


def test_set_rate_returns_previous():
    """Test updating a rate returns the previous one."""
    table = ExchangeRateTable()
    previous = table.set_rate(Currency.USD, Decimal("1.42"))
    assert previous == Decimal("1.41")
    assert table.get_rate(Currency.USD) == Decimal("1.42")


@pytest.mark.parametrize("bad_rate", [Decimal("0"), Decimal("-1.41"), "abc"])
def test_set_rate_rejects_non_positive(bad_rate):
    """Test a rejected update keeps the previous rate."""
    table = ExchangeRateTable()
    with pytest.raises(InvalidRateError):
        table.set_rate(Currency.USD, bad_rate)
    assert table.get_rate(Currency.USD) == Decimal("1.41")


def test_set_rate_rejects_base_currency():
    table = ExchangeRateTable()
    with pytest.raises(InvalidRateError):
        table.set_rate(Currency.JOD, Decimal("2"))


def test_invalid_rate_error_is_validation_error():
    """Test InvalidRateError keeps ValueError compatibility."""
    assert issubclass(InvalidRateError, ValidationError)
    assert issubclass(InvalidRateError, ValueError)


def test_as_dict_is_a_snapshot():
    """Test later updates do not change an earlier snapshot."""
    table = ExchangeRateTable()
    snapshot = table.as_dict()
    table.set_rate(Currency.USD, Decimal("2"))
    assert snapshot[Currency.USD] == Decimal("1.41")
    assert snapshot[Currency.JOD] == Decimal("1")


def test_concurrent_readers_see_old_or_new_rate():
    """Test readers never see a value other than one of the written rates."""
    table = ExchangeRateTable()
    seen = set()
    allowed = {Decimal("1.41"), Decimal("1.5"), Decimal("1.6")}

    def reader():
        for _ in range(500):
            seen.add(table.get_rate(Currency.USD))

    def writer():
        for i in range(250):
            table.set_rate(Currency.USD, Decimal("1.5") if i % 2 else Decimal("1.6"))

    threads = [threading.Thread(target=reader) for _ in range(3)] + [threading.Thread(target=writer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert seen <= allowed


@pytest.mark.parametrize(
    "value,expected",
    [
        ("140.845", "140.85"),
        ("59.155", "59.16"),
        ("-0.005", "-0.01"),
        ("2.344", "2.34"),
        (None, "0.00"),
    ],
)
def test_round_money_half_away_from_zero(value, expected):
    """Test display rounding is half away from zero to the cent."""
    assert round_money(value) == Decimal(expected)
