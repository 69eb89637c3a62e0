"""Domain layer for travelbooks application.

Services live in their own modules (``travelbooks.domain.party`` and so on)
and are imported from there; only the pure ledger core is re-exported here.
"""

from travelbooks.domain.currency import ExchangeRateTable, round_money
from travelbooks.domain.calculator import BookingCalculator, compute_cost, compute_profit
from travelbooks.domain.ledger import compute_balance, compute_totals, find_conflicts
from travelbooks.domain.statement import build_statement

__all__ = [
    "ExchangeRateTable",
    "round_money",
    "BookingCalculator",
    "compute_cost",
    "compute_profit",
    "compute_balance",
    "compute_totals",
    "find_conflicts",
    "build_statement",
]
