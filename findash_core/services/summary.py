from __future__ import annotations

from typing import Iterable, List, Sequence

from findash_core.domain.models import FinancialSummary, Investment, Transaction


def transactions_in_period(transactions: Iterable[Transaction], period: str) -> List[Transaction]:
    return [t for t in transactions if t.date.isoformat().startswith(period)]


def total_of_type(transactions: Iterable[Transaction], kind: str) -> float:
    return float(sum(t.amount for t in transactions if t.type == kind))


def percent_change(current: float, baseline: float) -> float:
    """Percent change from ``baseline`` to ``current``; 0 when there is no baseline."""
    if not baseline:
        return 0.0
    return (current - baseline) / baseline * 100


def compute_summary(
    transactions: Sequence[Transaction],
    investments: Sequence[Investment],
    current_period: str,
    previous_period: str,
) -> FinancialSummary:
    """
    Derive the dashboard summary for ``current_period``.

    Income and expenses only count transactions of the current period, while the
    investment figures are a point-in-time snapshot over every holding.
    """
    current = transactions_in_period(transactions, current_period)
    previous = transactions_in_period(transactions, previous_period)

    total_income = total_of_type(current, "income")
    total_expenses = total_of_type(current, "expense")
    previous_expenses = total_of_type(previous, "expense")

    investment_value = float(sum(inv.value for inv in investments))
    initial_value = float(sum(inv.initial_investment for inv in investments))

    net = total_income - total_expenses
    return FinancialSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_worth=investment_value + net,
        savings_rate=net / total_income * 100 if total_income else 0.0,
        monthly_change=percent_change(total_expenses, previous_expenses),
        investment_value=investment_value,
        investment_return=percent_change(investment_value, initial_value),
    )
