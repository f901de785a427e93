from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from findash_core.domain.models import FinancialSummary, ForecastScenario, MonthlyProjection, ScenarioOutcome, new_id
from findash_core.domain.validation import validate_period, validate_scenario
from findash_core.io import config as config_io
from findash_core.io import ledger as ledger_io
from findash_core.services import analytics, forecaster, history
from findash_core.services.periods import period_key, previous_period
from findash_core.services.store import FinanceStore
from findash_core.services.summary import compute_summary

app = typer.Typer(help="Personal finance dashboard CLI: summaries, forecasts and scenario comparison.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload, out: Optional[Path], what: str) -> None:
    if out:
        _save_json(out, payload)
        typer.echo(f"{what} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _summary_to_json(summary: FinancialSummary) -> dict:
    return {
        "total_income": summary.total_income,
        "total_expenses": summary.total_expenses,
        "net_worth": summary.net_worth,
        "savings_rate": summary.savings_rate,
        "monthly_change": summary.monthly_change,
        "investment_value": summary.investment_value,
        "investment_return": summary.investment_return,
    }


def _scenario_to_json(scenario: ForecastScenario) -> dict:
    return {
        "id": scenario.id,
        "name": scenario.name,
        "description": scenario.description,
        "monthly_income": scenario.monthly_income,
        "monthly_expenses": scenario.monthly_expenses,
        "savings_rate": scenario.savings_rate,
        "investment_return_rate": scenario.investment_return_rate,
        "inflation_rate": scenario.inflation_rate,
        "years": scenario.years,
    }


def _outcome_to_json(outcome: ScenarioOutcome) -> dict:
    return {
        "final_investment_total": outcome.final_investment_total,
        "final_balance": outcome.final_balance,
        "monthly_savings": outcome.monthly_savings,
        "total_contributions": outcome.total_contributions,
        "investment_growth": outcome.investment_growth,
    }


def _projections_to_json(projections: List[MonthlyProjection]) -> list:
    return [
        {
            "month": p.month_label,
            "balance": p.balance,
            "cumulative_savings": p.cumulative_savings,
            "investment_total": p.investment_total,
        }
        for p in projections
    ]


def _starting_total(starting_total: Optional[float], investments: Optional[Path]) -> float:
    if investments:
        return float(sum(inv.value for inv in config_io.load_investments(investments)))
    if starting_total is not None and starting_total < 0:
        raise typer.BadParameter(f"--starting-total must be non-negative, got {starting_total}")
    return starting_total or 0.0


def _select_scenario(scenarios: List[ForecastScenario], name: Optional[str]) -> ForecastScenario:
    if not scenarios:
        raise typer.BadParameter("Scenario file contains no scenarios")
    if name is None:
        return scenarios[0]
    for scenario in scenarios:
        if scenario.name.lower() == name.lower():
            return scenario
    raise typer.BadParameter(f"No scenario named {name!r}")


@app.command()
def summary(
    ledger: Path = typer.Option(..., help="CSV ledger with date,amount,category,type[,description]"),
    investments: Optional[Path] = typer.Option(None, help="Investments JSON"),
    month: Optional[str] = typer.Option(None, help="Period to summarise (YYYY-MM), defaults to the current month"),
    out: Optional[Path] = typer.Option(None, help="Output path for summary JSON"),
):
    """Summarise one month of transactions plus the investment snapshot."""
    try:
        period = validate_period(month or period_key(dt.date.today()))
        transactions = ledger_io.load_transactions(ledger)
        holdings = config_io.load_investments(investments) if investments else []
    except (ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    result = compute_summary(transactions, holdings, period, previous_period(period))
    payload = {
        "period": period,
        "summary": _summary_to_json(result),
        "spending_by_category": analytics.spending_by_category(transactions, period),
        "cash_flow": [
            {"month": p.name, "period": p.period, "income": p.income, "expenses": p.expenses, "savings": p.savings}
            for p in analytics.cash_flow_history(transactions, period)
        ],
    }
    _emit(payload, out, "Summary")


@app.command()
def forecast(
    scenarios: Optional[Path] = typer.Option(None, help="Scenarios JSON"),
    name: Optional[str] = typer.Option(None, help="Scenario name to project (defaults to the first)"),
    income: Optional[float] = typer.Option(None, help="Monthly income if no scenarios file"),
    expenses: Optional[float] = typer.Option(None, help="Monthly expenses if no scenarios file"),
    savings_rate: float = typer.Option(0.2, help="Share of income saved each month (0-1)"),
    return_rate: float = typer.Option(0.06, help="Annual investment return (0-1)"),
    inflation: float = typer.Option(0.03, help="Annual inflation (stored, not applied)"),
    years: int = typer.Option(10, help="Projection horizon in years"),
    starting_total: Optional[float] = typer.Option(None, help="Starting investment total"),
    investments: Optional[Path] = typer.Option(None, help="Investments JSON used for the starting total"),
    out: Optional[Path] = typer.Option(None, help="Output path for forecast JSON"),
):
    """Project a scenario month by month."""
    try:
        if scenarios:
            scenario = _select_scenario(config_io.load_scenarios(scenarios), name)
        elif income is not None and expenses is not None:
            scenario = validate_scenario(
                ForecastScenario(
                    id=new_id(),
                    name=name or "Ad hoc",
                    description="",
                    monthly_income=income,
                    monthly_expenses=expenses,
                    savings_rate=savings_rate,
                    investment_return_rate=return_rate,
                    inflation_rate=inflation,
                    years=years,
                )
            )
        else:
            raise typer.BadParameter("Provide either --scenarios or --income and --expenses")
        start = _starting_total(starting_total, investments)
    except (ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    projections = forecaster.project_scenario(scenario, start)
    payload = {
        "scenario": _scenario_to_json(scenario),
        "starting_investment_total": start,
        "outcome": _outcome_to_json(forecaster.scenario_outcome(scenario, projections)),
        "monthly": _projections_to_json(projections),
    }
    _emit(payload, out, "Forecast")


@app.command()
def compare(
    scenarios: Path = typer.Option(..., help="Scenarios JSON"),
    years: int = typer.Option(10, help="Number of year-end rows"),
    starting_total: Optional[float] = typer.Option(None, help="Starting investment total"),
    investments: Optional[Path] = typer.Option(None, help="Investments JSON used for the starting total"),
    out: Optional[Path] = typer.Option(None, help="Output path for comparison JSON"),
):
    """Compare year-end investment totals across scenarios."""
    try:
        loaded = config_io.load_scenarios(scenarios)
        start = _starting_total(starting_total, investments)
    except (ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    rows = forecaster.compare_scenarios(loaded, start, years=years)
    _emit({"starting_investment_total": start, "years": rows}, out, "Comparison")


@app.command()
def budgets(
    file: Path = typer.Option(..., "--budgets", help="Budgets JSON"),
    month: Optional[str] = typer.Option(None, help="Period to report (YYYY-MM), defaults to the current month"),
    out: Optional[Path] = typer.Option(None, help="Output path for budget report JSON"),
):
    """Report budget usage for one month."""
    try:
        period = validate_period(month or period_key(dt.date.today()))
        loaded = config_io.load_budgets(file)
    except (ValueError, FileNotFoundError, KeyError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    allocated, spent = analytics.budget_totals(loaded, period)
    payload = {
        "period": period,
        "allocated": allocated,
        "spent": spent,
        "remaining": allocated - spent,
        "budgets": [
            {
                "category": b.category,
                "allocated": b.allocated,
                "spent": b.spent,
                "remaining": b.remaining,
                "utilization": b.utilization,
                "status": b.status,
            }
            for b in analytics.budget_progress(loaded, period)
        ],
    }
    _emit(payload, out, "Budget report")


@app.command("history")
def history_cmd(
    months: int = typer.Option(..., help="Months elapsed since purchase"),
    initial: float = typer.Option(..., help="Initial investment value"),
    rate: float = typer.Option(..., help="Expected annual return (0-1)"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
):
    """Synthesize a noisy monthly value history for an investment."""
    points = history.synthesize_history(months, initial, rate, rng=np.random.default_rng(seed))
    typer.echo(json.dumps([{"date": p.date.isoformat(), "value": p.value} for p in points], indent=2))


@app.command()
def dashboard(
    seed: Optional[int] = typer.Option(None, help="Random seed for the sample investment histories"),
):
    """
    Print the dashboard for the built-in sample data.
    """
    console = Console()
    store = FinanceStore.with_sample_data(rng=np.random.default_rng(seed))
    s = store.summary

    console.print(f"[bold cyan]Financial Dashboard - {store.current_month}[/bold cyan]\n")
    console.print(
        f"Income [green]{s.total_income:,.2f}[/green] | Expenses [red]{s.total_expenses:,.2f}[/red] | "
        f"Savings rate [bold]{s.savings_rate:.1f}%[/bold] | Expense change {s.monthly_change:+.1f}%"
    )
    console.print(
        f"Investments [cyan]{s.investment_value:,.2f}[/cyan] ({s.investment_return:+.1f}%) | "
        f"Net worth [bold]{s.net_worth:,.2f}[/bold]\n"
    )

    budget_table = Table(title="Budgets")
    for col in ("Category", "Allocated", "Spent", "Remaining", "Used", "Status"):
        budget_table.add_column(col)
    colors = {"on-track": "green", "warning": "yellow", "over": "red"}
    for b in analytics.budget_progress(store.budgets, store.current_month):
        budget_table.add_row(
            b.category,
            f"{b.allocated:,.2f}",
            f"{b.spent:,.2f}",
            f"{b.remaining:,.2f}",
            f"{b.utilization:.0f}%",
            f"[{colors[b.status]}]{b.status}[/]",
        )
    console.print(budget_table)
    allocated, spent = analytics.budget_totals(store.budgets, store.current_month)
    overall = spent / allocated * 100 if allocated else 0.0
    console.print(
        f"Budgeted [bold]{allocated:,.2f}[/bold] | Spent [bold]{spent:,.2f}[/bold] | "
        f"Left {allocated - spent:,.2f} | Overall {overall:.0f}% used\n"
    )

    portfolio = Table(title="Investments")
    for col in ("Name", "Value", "Gain", "Return"):
        portfolio.add_column(col)
    for p in analytics.investment_performance(store.investments):
        portfolio.add_row(p.name, f"{p.value:,.2f}", f"{p.gain:+,.2f}", f"{p.return_pct:+.1f}%")
    console.print(portfolio)
    totals = analytics.portfolio_totals(store.investments)
    console.print(
        f"Portfolio [cyan]{totals.total_value:,.2f}[/cyan] | Invested {totals.total_initial:,.2f} | "
        f"Gain {totals.total_gain:+,.2f} ({totals.total_return:+.1f}%) | {totals.type_count} asset types"
    )
    allocation = analytics.allocation_by_type(store.investments)
    console.print(
        "Allocation: "
        + ", ".join(
            f"{kind} {value / totals.total_value * 100 if totals.total_value else 0.0:.0f}%"
            for kind, value in allocation.items()
        )
    )

    trend = Table(title="Portfolio value, last 12 months")
    trend.add_column("Month")
    trend.add_column("Value")
    for point in analytics.portfolio_history(store.investments, today=store.today):
        trend.add_row(f"{point.name} {point.period[:4]}", f"{point.value:,.2f}")
    console.print(trend)

    outcomes = Table(title="Scenarios")
    for col in ("Scenario", "Years", "Monthly savings", "Contributions", "Growth", "Final investments"):
        outcomes.add_column(col)
    for scenario in store.scenarios:
        outcome = forecaster.scenario_outcome(scenario, store.forecast(scenario))
        outcomes.add_row(
            scenario.name,
            str(scenario.years),
            f"{outcome.monthly_savings:,.0f}",
            f"{outcome.total_contributions:,.0f}",
            f"{outcome.investment_growth:,.0f}",
            f"{outcome.final_investment_total:,.0f}",
        )
    console.print(outcomes)


if __name__ == "__main__":
    app()
