from __future__ import annotations

import dataclasses
import datetime as dt
import uuid
from typing import Tuple

TRANSACTION_TYPES = ("income", "expense")
INVESTMENT_TYPES = ("stock", "crypto", "etf", "bond", "real-estate")


def new_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclasses.dataclass(frozen=True)
class Transaction:
    id: str
    date: dt.date
    amount: float
    category: str
    description: str
    type: str  # "income" or "expense"

    @property
    def period(self) -> str:
        return self.date.isoformat()[:7]


@dataclasses.dataclass(frozen=True)
class Budget:
    id: str
    category: str
    allocated: float
    spent: float
    period: str  # YYYY-MM

    @property
    def remaining(self) -> float:
        return self.allocated - self.spent


@dataclasses.dataclass(frozen=True)
class HistoryPoint:
    date: dt.date
    value: float


@dataclasses.dataclass(frozen=True)
class Investment:
    id: str
    name: str
    type: str
    value: float
    initial_investment: float
    return_rate: float
    purchase_date: dt.date
    history: Tuple[HistoryPoint, ...] = ()


@dataclasses.dataclass(frozen=True)
class ForecastScenario:
    id: str
    name: str
    description: str
    monthly_income: float
    monthly_expenses: float
    savings_rate: float  # 0..1
    investment_return_rate: float  # 0..1, annual
    inflation_rate: float  # 0..1, carried but not applied
    years: int

    @property
    def monthly_savings(self) -> float:
        return self.monthly_income * self.savings_rate

    @property
    def months(self) -> int:
        return int(self.years) * 12


@dataclasses.dataclass(frozen=True)
class FinancialSummary:
    total_income: float
    total_expenses: float
    net_worth: float
    savings_rate: float  # percent
    monthly_change: float  # percent
    investment_value: float
    investment_return: float  # percent


@dataclasses.dataclass
class MonthlyProjection:
    month_label: str
    balance: float
    cumulative_savings: float
    investment_total: float


@dataclasses.dataclass
class ScenarioOutcome:
    scenario_id: str
    final_investment_total: float
    final_balance: float
    monthly_savings: float
    total_contributions: float

    @property
    def investment_growth(self) -> float:
        return self.final_investment_total - self.total_contributions


@dataclasses.dataclass
class CashFlowPoint:
    name: str  # short month name, e.g. "Jan"
    period: str
    income: float
    expenses: float

    @property
    def savings(self) -> float:
        return self.income - self.expenses


@dataclasses.dataclass
class BudgetProgress:
    category: str
    allocated: float
    spent: float
    remaining: float
    utilization: float  # percent
    status: str  # "on-track", "warning" or "over"


@dataclasses.dataclass
class InvestmentPerformance:
    name: str
    value: float
    gain: float
    return_pct: float


@dataclasses.dataclass
class PortfolioPoint:
    name: str
    period: str
    value: float


@dataclasses.dataclass
class PortfolioTotals:
    total_value: float
    total_initial: float
    total_return: float  # percent
    type_count: int

    @property
    def total_gain(self) -> float:
        return self.total_value - self.total_initial
