from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

import numpy as np

from findash_core.domain.models import Budget, ForecastScenario, Investment, Transaction, new_id
from findash_core.services.history import synthesize_history
from findash_core.services.periods import period_key, previous_period


def _day(period: str, day: int) -> dt.date:
    return dt.date.fromisoformat(f"{period}-{day:02d}")


def sample_transactions(today: dt.date) -> List[Transaction]:
    current = period_key(today)
    last = previous_period(current)
    rows = [
        (current, 5, 3500.0, "Salary", "Monthly salary", "income"),
        (current, 10, 1200.0, "Rent", "Monthly rent", "expense"),
        (current, 15, 200.0, "Groceries", "Weekly groceries", "expense"),
        (current, 20, 100.0, "Utilities", "Electricity bill", "expense"),
        (current, 25, 50.0, "Subscriptions", "Netflix", "expense"),
        (last, 5, 3500.0, "Salary", "Monthly salary", "income"),
        (last, 10, 1200.0, "Rent", "Monthly rent", "expense"),
    ]
    return [
        Transaction(id=new_id(), date=_day(p, d), amount=a, category=c, description=desc, type=kind)
        for p, d, a, c, desc, kind in rows
    ]


def sample_budgets(today: dt.date) -> List[Budget]:
    current = period_key(today)
    rows = [
        ("Housing", 1500.0, 1200.0),
        ("Food", 500.0, 350.0),
        ("Transportation", 300.0, 250.0),
        ("Entertainment", 200.0, 180.0),
        ("Utilities", 250.0, 220.0),
    ]
    return [Budget(id=new_id(), category=c, allocated=a, spent=s, period=current) for c, a, s in rows]


def sample_investments(today: dt.date, rng: np.random.Generator) -> List[Investment]:
    # (name, type, value, initial, rate, purchased, months of history)
    rows = [
        ("S&P 500 ETF", "etf", 15000.0, 10000.0, 0.08, dt.date(2020, 1, 15), 24),
        ("Tech Growth Fund", "etf", 8000.0, 5000.0, 0.12, dt.date(2021, 3, 10), 18),
        ("Bitcoin", "crypto", 3000.0, 2000.0, 0.15, dt.date(2022, 1, 5), 12),
        ("Corporate Bonds", "bond", 5000.0, 5000.0, 0.04, dt.date(2021, 6, 20), 15),
    ]
    return [
        Investment(
            id=new_id(),
            name=name,
            type=kind,
            value=value,
            initial_investment=initial,
            return_rate=rate,
            purchase_date=purchased,
            history=tuple(synthesize_history(months, initial, rate, rng=rng, today=today)),
        )
        for name, kind, value, initial, rate, purchased, months in rows
    ]


def sample_scenarios() -> List[ForecastScenario]:
    rows = [
        ("Conservative", "Low risk, steady growth", 4000.0, 3000.0, 0.25, 0.06, 10),
        ("Aggressive", "Higher risk, higher potential returns", 4000.0, 2800.0, 0.30, 0.10, 10),
        ("Early Retirement", "Maximize savings for early retirement", 5000.0, 3000.0, 0.40, 0.08, 15),
    ]
    return [
        ForecastScenario(
            id=new_id(),
            name=name,
            description=description,
            monthly_income=income,
            monthly_expenses=expenses,
            savings_rate=savings,
            investment_return_rate=returns,
            inflation_rate=0.03,
            years=years,
        )
        for name, description, income, expenses, savings, returns, years in rows
    ]


def build_sample_data(today: Optional[dt.date] = None, rng: Optional[np.random.Generator] = None) -> Dict[str, list]:
    today = today or dt.date.today()
    rng = rng if rng is not None else np.random.default_rng()
    return {
        "transactions": sample_transactions(today),
        "budgets": sample_budgets(today),
        "investments": sample_investments(today, rng),
        "scenarios": sample_scenarios(),
    }
