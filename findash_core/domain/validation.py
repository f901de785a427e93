"""
Boundary checks for data entering the store or read from files.

The calculation services never validate; everything they receive is expected
to have passed through here first.
"""
from __future__ import annotations

import datetime as dt
import math
import re
from typing import Union

from findash_core.domain.models import (
    INVESTMENT_TYPES,
    TRANSACTION_TYPES,
    Budget,
    ForecastScenario,
    Investment,
    Transaction,
)

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_date(value: Union[str, dt.date]) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise ValueError(f"Malformed date {value!r}, expected YYYY-MM-DD") from exc


def validate_period(period: str) -> str:
    if not isinstance(period, str) or not _PERIOD_RE.match(period):
        raise ValueError(f"Malformed period {period!r}, expected YYYY-MM")
    return period


def _finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value}")


def _non_negative(name: str, value: float) -> None:
    _finite(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def _fraction(name: str, value: float) -> None:
    _finite(name, value)
    if not 0 <= value <= 1:
        raise ValueError(f"{name} must be a fraction in [0, 1], got {value}")


def validate_transaction(txn: Transaction) -> Transaction:
    if txn.type not in TRANSACTION_TYPES:
        raise ValueError(f"Unknown transaction type {txn.type!r}")
    _non_negative("amount", txn.amount)
    if not txn.category or not txn.category.strip():
        raise ValueError("Transaction category is required")
    return txn


def validate_budget(budget: Budget) -> Budget:
    validate_period(budget.period)
    _non_negative("allocated", budget.allocated)
    _non_negative("spent", budget.spent)
    return budget


def validate_investment(investment: Investment) -> Investment:
    if investment.type not in INVESTMENT_TYPES:
        raise ValueError(f"Unknown investment type {investment.type!r}")
    _non_negative("value", investment.value)
    _non_negative("initial_investment", investment.initial_investment)
    dates = [point.date for point in investment.history]
    if dates != sorted(dates):
        raise ValueError(f"History of {investment.name!r} is not in date order")
    return investment


def validate_scenario(scenario: ForecastScenario) -> ForecastScenario:
    _non_negative("monthly_income", scenario.monthly_income)
    _non_negative("monthly_expenses", scenario.monthly_expenses)
    _fraction("savings_rate", scenario.savings_rate)
    _fraction("investment_return_rate", scenario.investment_return_rate)
    _fraction("inflation_rate", scenario.inflation_rate)
    if int(scenario.years) != scenario.years or scenario.years < 1:
        raise ValueError(f"years must be a whole number >= 1, got {scenario.years}")
    return scenario
