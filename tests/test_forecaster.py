import datetime as dt

import pytest

from findash_core.domain.models import ForecastScenario
from findash_core.services.forecaster import compare_scenarios, project_scenario, scenario_outcome

TODAY = dt.date(2024, 11, 18)


def _scenario(
    income: float = 4000.0,
    expenses: float = 3000.0,
    savings: float = 0.25,
    returns: float = 0.06,
    years: int = 1,
    name: str = "Conservative",
) -> ForecastScenario:
    return ForecastScenario(
        id=name.lower(),
        name=name,
        description="",
        monthly_income=income,
        monthly_expenses=expenses,
        savings_rate=savings,
        investment_return_rate=returns,
        inflation_rate=0.03,
        years=years,
    )


def test_compounding_example():
    projections = project_scenario(_scenario(), 0.0, today=TODAY)
    assert len(projections) == 12
    assert projections[0].investment_total == pytest.approx(1000.0)
    assert projections[1].investment_total == pytest.approx(2005.0)
    assert projections[1].cumulative_savings == 2000.0


@pytest.mark.parametrize("years", [1, 3, 15])
def test_projection_length(years):
    assert len(project_scenario(_scenario(years=years), 500.0, today=TODAY)) == years * 12


def test_zero_return_is_pure_accumulation():
    start = 12500.0
    projections = project_scenario(_scenario(savings=0.5, returns=0.0, years=2), start, today=TODAY)
    for i, p in enumerate(projections):
        assert p.investment_total == start + 2000.0 * (i + 1)
        assert p.cumulative_savings == 2000.0 * (i + 1)


def test_compounds_before_contribution():
    projections = project_scenario(_scenario(income=1200.0, savings=0.1, returns=0.12), 1000.0, today=TODAY)
    # 1000 * 1.01 + 120, not (1000 + 120) * 1.01
    assert projections[0].investment_total == pytest.approx(1130.0)


def test_balance_ignores_return_rate():
    low = project_scenario(_scenario(returns=0.0, years=2), 0.0, today=TODAY)
    high = project_scenario(_scenario(returns=0.2, years=2), 0.0, today=TODAY)
    for i, (a, b) in enumerate(zip(low, high)):
        assert a.balance == b.balance == 1000.0 * (i + 1)


def test_month_labels_start_at_current_month():
    projections = project_scenario(_scenario(), 0.0, today=TODAY)
    assert projections[0].month_label == "Nov 2024"
    assert projections[1].month_label == "Dec 2024"
    assert projections[2].month_label == "Jan 2025"
    assert projections[-1].month_label == "Oct 2025"


def test_projection_is_deterministic():
    scenario = _scenario(years=5)
    assert project_scenario(scenario, 321.0, today=TODAY) == project_scenario(scenario, 321.0, today=TODAY)


def test_inflation_is_not_applied():
    base = _scenario(years=2)
    inflated = ForecastScenario(**{**base.__dict__, "inflation_rate": 0.9})
    assert project_scenario(base, 0.0, today=TODAY) == project_scenario(inflated, 0.0, today=TODAY)


def test_scenario_outcome():
    scenario = _scenario(returns=0.0, years=2)
    outcome = scenario_outcome(scenario, project_scenario(scenario, 0.0, today=TODAY))
    assert outcome.monthly_savings == 1000.0
    assert outcome.total_contributions == 24000.0
    assert outcome.final_investment_total == 24000.0
    assert outcome.investment_growth == 0.0
    assert outcome.final_balance == 24000.0


def test_compare_scenarios_drops_short_horizons():
    short = _scenario(years=1, name="Short", returns=0.0)
    long = _scenario(years=3, name="Long", returns=0.0)
    rows = compare_scenarios([short, long], 0.0, years=3, today=TODAY)

    assert [row["year"] for row in rows] == [1, 2, 3]
    assert rows[0]["Short"] == 12000.0
    assert rows[0]["Long"] == 12000.0
    assert "Short" not in rows[1]
    assert rows[2]["Long"] == 36000.0
