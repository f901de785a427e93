from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from findash_core.domain.models import (
    Budget,
    BudgetProgress,
    CashFlowPoint,
    Investment,
    InvestmentPerformance,
    PortfolioPoint,
    PortfolioTotals,
    Transaction,
)
from findash_core.services.periods import add_months, period_key, shift_period, short_month_name
from findash_core.services.summary import percent_change, transactions_in_period

WARNING_THRESHOLD = 70.0
OVER_THRESHOLD = 90.0


def spending_by_category(transactions: Iterable[Transaction], period: str) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for txn in transactions_in_period(transactions, period):
        if txn.type != "expense":
            continue
        totals[txn.category] = totals.get(txn.category, 0.0) + txn.amount
    return totals


def cash_flow_history(transactions: Sequence[Transaction], period: str, months: int = 6) -> List[CashFlowPoint]:
    """Income and expenses for the ``months`` periods ending at ``period``, oldest first."""
    periods = [shift_period(period, i - (months - 1)) for i in range(months)]

    rows = [{"period": t.period, "type": t.type, "amount": t.amount} for t in transactions]
    if rows:
        df = pd.DataFrame(rows)
        totals = df.groupby(["period", "type"])["amount"].sum().unstack(fill_value=0.0)
    else:
        totals = pd.DataFrame()

    def lookup(p: str, kind: str) -> float:
        if p in totals.index and kind in totals.columns:
            return float(totals.at[p, kind])
        return 0.0

    return [
        CashFlowPoint(
            name=short_month_name(p),
            period=p,
            income=lookup(p, "income"),
            expenses=lookup(p, "expense"),
        )
        for p in periods
    ]


def _budget_status(utilization: float) -> str:
    if utilization < WARNING_THRESHOLD:
        return "on-track"
    if utilization < OVER_THRESHOLD:
        return "warning"
    return "over"


def budget_progress(budgets: Iterable[Budget], period: str) -> List[BudgetProgress]:
    progress: List[BudgetProgress] = []
    for budget in budgets:
        if budget.period != period:
            continue
        if budget.allocated:
            utilization = budget.spent / budget.allocated * 100
        else:
            # nothing allocated: any spending is over budget
            utilization = 100.0 if budget.spent > 0 else 0.0
        progress.append(
            BudgetProgress(
                category=budget.category,
                allocated=budget.allocated,
                spent=budget.spent,
                remaining=budget.remaining,
                utilization=utilization,
                status=_budget_status(utilization),
            )
        )
    return progress


def budget_totals(budgets: Iterable[Budget], period: str) -> Tuple[float, float]:
    current = [b for b in budgets if b.period == period]
    return float(sum(b.allocated for b in current)), float(sum(b.spent for b in current))


def investment_performance(investments: Iterable[Investment]) -> List[InvestmentPerformance]:
    return [
        InvestmentPerformance(
            name=inv.name,
            value=inv.value,
            gain=inv.value - inv.initial_investment,
            return_pct=percent_change(inv.value, inv.initial_investment),
        )
        for inv in investments
    ]


def allocation_by_type(investments: Iterable[Investment]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for inv in investments:
        totals[inv.type] = totals.get(inv.type, 0.0) + inv.value
    return totals


def portfolio_history(
    investments: Sequence[Investment],
    today: Optional[dt.date] = None,
    months: int = 12,
) -> List[PortfolioPoint]:
    """Summed history value per month for the last ``months`` months, oldest first."""
    today = today or dt.date.today()
    points: List[PortfolioPoint] = []
    for i in range(months):
        month = add_months(today, -(months - 1 - i))
        key = period_key(month)
        total = 0.0
        for inv in investments:
            match = next((h for h in inv.history if period_key(h.date) == key), None)
            if match is not None:
                total += match.value
        points.append(PortfolioPoint(name=month.strftime("%b"), period=key, value=total))
    return points


def portfolio_totals(investments: Sequence[Investment]) -> PortfolioTotals:
    total_value = float(sum(inv.value for inv in investments))
    total_initial = float(sum(inv.initial_investment for inv in investments))
    return PortfolioTotals(
        total_value=total_value,
        total_initial=total_initial,
        total_return=percent_change(total_value, total_initial),
        type_count=len({inv.type for inv in investments}),
    )
