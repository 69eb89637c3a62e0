"""Tests for the treasury service."""

import pytest
from decimal import Decimal

from travelbooks.domain.entities import Currency, TreasuryType
from travelbooks.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_treasury(treasury_service):
    treasury_id = treasury_service.create_treasury(
        name="Housing Bank",
        treasury_type=TreasuryType.BANK,
        balance="1500",
        currency=Currency.USD,
        account_number="JO12-0001",
    )
    treasury = treasury_service.get_treasury(treasury_id)
    assert treasury.name == "Housing Bank"
    assert treasury.treasury_type == TreasuryType.BANK
    assert treasury.balance == Decimal("1500")
    assert treasury.currency == Currency.USD
    assert treasury.account_number == "JO12-0001"


def test_create_treasury_defaults(treasury_service, sample_treasury):
    assert sample_treasury.treasury_type == TreasuryType.CASH
    assert sample_treasury.balance == Decimal("0")
    assert sample_treasury.currency == Currency.JOD


def test_create_treasury_requires_name(treasury_service):
    with pytest.raises(ValidationError):
        treasury_service.create_treasury(name="")


def test_duplicate_treasury_rejected(treasury_service, sample_treasury):
    with pytest.raises(ConflictError):
        treasury_service.create_treasury(name="Main Cash")


def test_require_treasury_missing(treasury_service):
    with pytest.raises(NotFoundError, match="Treasury 3 not found"):
        treasury_service.require_treasury(3)


def test_list_treasuries_sorted_by_name(treasury_service, sample_treasury):
    treasury_service.create_treasury(name="Cheques", treasury_type=TreasuryType.CHECKS)
    assert [t.name for t in treasury_service.list_treasuries()] == ["Cheques", "Main Cash"]
