"""Utility functions for travelbooks."""

from travelbooks.utils.date_parser import parse_date
from travelbooks.utils.amount_parser import parse_amount
from travelbooks.utils.decimal_utils import coerce_decimal

__all__ = ["parse_date", "parse_amount", "coerce_decimal"]
