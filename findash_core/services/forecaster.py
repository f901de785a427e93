from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional, Sequence, Union

from findash_core.domain.models import ForecastScenario, MonthlyProjection, ScenarioOutcome
from findash_core.services.periods import month_label


def project_scenario(
    scenario: ForecastScenario,
    starting_investment_total: float,
    today: Optional[dt.date] = None,
) -> List[MonthlyProjection]:
    """
    Month-by-month projection of a scenario over ``years * 12`` months:
    - Savings are a constant share of income, accumulated each month.
    - The investment balance compounds at return_rate / 12, then receives the month's savings.
    - Balance is the linear running net cash flow and does not feed the investments.
    Inflation is carried on the scenario but not applied.
    """
    today = today or dt.date.today()
    monthly_savings = scenario.monthly_income * scenario.savings_rate
    monthly_net = scenario.monthly_income - scenario.monthly_expenses
    growth = 1 + scenario.investment_return_rate / 12

    cumulative_savings = 0.0
    investment_total = float(starting_investment_total)
    projections: List[MonthlyProjection] = []

    for i in range(scenario.months):
        cumulative_savings += monthly_savings
        investment_total = investment_total * growth + monthly_savings
        projections.append(
            MonthlyProjection(
                month_label=month_label(today, i),
                balance=monthly_net * (i + 1),
                cumulative_savings=cumulative_savings,
                investment_total=investment_total,
            )
        )

    return projections


def scenario_outcome(scenario: ForecastScenario, projections: Sequence[MonthlyProjection]) -> ScenarioOutcome:
    final = projections[-1] if projections else None
    return ScenarioOutcome(
        scenario_id=scenario.id,
        final_investment_total=final.investment_total if final else 0.0,
        final_balance=final.balance if final else 0.0,
        monthly_savings=scenario.monthly_savings,
        total_contributions=scenario.monthly_savings * scenario.months,
    )


def compare_scenarios(
    scenarios: Sequence[ForecastScenario],
    starting_investment_total: float,
    years: int = 10,
    today: Optional[dt.date] = None,
) -> List[Dict[str, Union[int, float]]]:
    """
    Year-end investment totals of several scenarios side by side.
    Scenarios with a shorter horizon drop out of the later rows.
    """
    today = today or dt.date.today()
    projected = [(s.name, project_scenario(s, starting_investment_total, today=today)) for s in scenarios]

    rows: List[Dict[str, Union[int, float]]] = []
    for year in range(1, years + 1):
        row: Dict[str, Union[int, float]] = {"year": year}
        idx = year * 12 - 1
        for name, projections in projected:
            if idx < len(projections):
                row[name] = projections[idx].investment_total
        rows.append(row)
    return rows
