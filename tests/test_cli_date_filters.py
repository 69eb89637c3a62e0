"""Tests for CLI date filter helpers."""

import click
import pytest

from travelbooks.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from travelbooks.utils.date_parser import get_date_range, parse_date


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_rejects_period_with_start_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags={"this-year": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"last-year": True, "this-month": False},
    )
    assert (start, end) == get_date_range("last-year")


def test_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="05/01/2024",
        period_flags={},
    )
    assert start == parse_date("2024-01-02")
    assert end == parse_date("2024-01-05")


def test_no_filters_means_open_range():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period_flags={}) == (None, None)


@pytest.mark.parametrize("option,label", [("start_date", "Invalid start date"), ("end_date", "Invalid end date")])
def test_invalid_dates(capsys, option, label):
    kwargs = {"start_date": None, "end_date": None, option: "not-a-date"}
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), period_flags={}, **kwargs)

    assert excinfo.value.exit_code == 1
    assert label in capsys.readouterr().err


def test_period_flags_from_kwargs():
    flags = period_flags_from({"this_month": True, "last_year": False})
    assert flags == {
        "this-month": True,
        "this-year": False,
        "last-month": False,
        "last-year": False,
    }


def test_period_options_adds_flags(cli_runner):
    @click.command()
    @period_options
    def report(**periods):
        click.echo(",".join(p for p, on in period_flags_from(periods).items() if on))

    result = cli_runner.invoke(report, ["--last-month"])
    assert result.exit_code == 0
    assert result.output.strip() == "last-month"
