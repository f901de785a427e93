from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, TypeVar, Union

import numpy as np

from findash_core.domain.models import (
    Budget,
    FinancialSummary,
    ForecastScenario,
    Investment,
    MonthlyProjection,
    Transaction,
    new_id,
)
from findash_core.domain.validation import (
    parse_date,
    validate_budget,
    validate_investment,
    validate_period,
    validate_scenario,
    validate_transaction,
)
from findash_core.services import forecaster, summary as summary_service
from findash_core.services.history import synthesize_history
from findash_core.services.periods import months_between, period_key, previous_period, shift_period
from findash_core.services.sample_data import build_sample_data

logger = logging.getLogger(__name__)

T = TypeVar("T", Budget, Investment, ForecastScenario)


def _replace_by_id(items: List[T], item: T, kind: str) -> List[T]:
    if not any(existing.id == item.id for existing in items):
        raise KeyError(f"Unknown {kind} id: {item.id}")
    return [item if existing.id == item.id else existing for existing in items]


class FinanceStore:
    """
    In-memory owner of the finance collections.

    Every mutation replaces the affected collection and, for transactions,
    investments and month changes, recomputes the summary before returning.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        budgets: Iterable[Budget] = (),
        investments: Iterable[Investment] = (),
        scenarios: Iterable[ForecastScenario] = (),
        current_month: Optional[str] = None,
        today: Optional[dt.date] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.today = today or dt.date.today()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.transactions: List[Transaction] = [validate_transaction(t) for t in transactions]
        self.budgets: List[Budget] = [validate_budget(b) for b in budgets]
        self.investments: List[Investment] = [validate_investment(i) for i in investments]
        self.scenarios: List[ForecastScenario] = [validate_scenario(s) for s in scenarios]
        self.current_month = validate_period(current_month or period_key(self.today))
        self.summary: FinancialSummary = self._recompute_summary()

    @classmethod
    def with_sample_data(
        cls,
        today: Optional[dt.date] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "FinanceStore":
        today = today or dt.date.today()
        rng = rng if rng is not None else np.random.default_rng()
        data = build_sample_data(today=today, rng=rng)
        return cls(
            transactions=data["transactions"],
            budgets=data["budgets"],
            investments=data["investments"],
            scenarios=data["scenarios"],
            today=today,
            rng=rng,
        )

    def _recompute_summary(self) -> FinancialSummary:
        self.summary = summary_service.compute_summary(
            self.transactions,
            self.investments,
            self.current_month,
            previous_period(self.current_month),
        )
        return self.summary

    # Transactions

    def add_transaction(
        self,
        date: Union[str, dt.date],
        amount: float,
        category: str,
        type: str,
        description: str = "",
    ) -> Transaction:
        txn = validate_transaction(
            Transaction(
                id=new_id(),
                date=parse_date(date),
                amount=float(amount),
                category=category,
                description=description,
                type=type,
            )
        )
        self.transactions = [*self.transactions, txn]
        self._recompute_summary()
        logger.debug("Added %s transaction %s (%.2f, %s)", txn.type, txn.id, txn.amount, txn.category)
        return txn

    # Budgets

    def add_budget(self, category: str, allocated: float, spent: float = 0.0, period: Optional[str] = None) -> Budget:
        budget = validate_budget(
            Budget(
                id=new_id(),
                category=category,
                allocated=float(allocated),
                spent=float(spent),
                period=period or self.current_month,
            )
        )
        self.budgets = [*self.budgets, budget]
        logger.debug("Added budget %s for %s in %s", budget.id, budget.category, budget.period)
        return budget

    def update_budget(self, budget: Budget) -> Budget:
        validate_budget(budget)
        self.budgets = _replace_by_id(self.budgets, budget, "budget")
        return budget

    # Investments

    def add_investment(
        self,
        name: str,
        type: str,
        value: float,
        initial_investment: float,
        return_rate: float,
        purchase_date: Union[str, dt.date],
    ) -> Investment:
        purchased = parse_date(purchase_date)
        history = synthesize_history(
            months_between(purchased, self.today),
            initial_investment,
            return_rate,
            rng=self.rng,
            today=self.today,
        )
        investment = validate_investment(
            Investment(
                id=new_id(),
                name=name,
                type=type,
                value=float(value),
                initial_investment=float(initial_investment),
                return_rate=float(return_rate),
                purchase_date=purchased,
                history=tuple(history),
            )
        )
        self.investments = [*self.investments, investment]
        self._recompute_summary()
        logger.debug("Added investment %s (%s) with %d history points", investment.id, name, len(history))
        return investment

    def update_investment(self, investment: Investment) -> Investment:
        validate_investment(investment)
        self.investments = _replace_by_id(self.investments, investment, "investment")
        self._recompute_summary()
        logger.debug("Updated investment %s", investment.id)
        return investment

    def starting_investment_total(self) -> float:
        return float(sum(inv.value for inv in self.investments))

    # Scenarios

    def add_scenario(
        self,
        name: str,
        monthly_income: float,
        monthly_expenses: float,
        savings_rate: float,
        investment_return_rate: float,
        inflation_rate: float = 0.03,
        years: int = 10,
        description: str = "",
    ) -> ForecastScenario:
        scenario = validate_scenario(
            ForecastScenario(
                id=new_id(),
                name=name,
                description=description,
                monthly_income=float(monthly_income),
                monthly_expenses=float(monthly_expenses),
                savings_rate=float(savings_rate),
                investment_return_rate=float(investment_return_rate),
                inflation_rate=float(inflation_rate),
                years=years,
            )
        )
        self.scenarios = [*self.scenarios, scenario]
        logger.debug("Added scenario %s (%s)", scenario.id, name)
        return scenario

    def update_scenario(self, scenario: ForecastScenario) -> ForecastScenario:
        validate_scenario(scenario)
        self.scenarios = _replace_by_id(self.scenarios, scenario, "scenario")
        return scenario

    def delete_scenario(self, scenario_id: str) -> None:
        self.get_scenario(scenario_id)
        self.scenarios = [s for s in self.scenarios if s.id != scenario_id]
        logger.debug("Deleted scenario %s", scenario_id)

    def get_scenario(self, scenario_id: str) -> ForecastScenario:
        for scenario in self.scenarios:
            if scenario.id == scenario_id:
                return scenario
        raise KeyError(f"Unknown scenario id: {scenario_id}")

    def forecast(self, scenario: Union[str, ForecastScenario]) -> List[MonthlyProjection]:
        if isinstance(scenario, str):
            scenario = self.get_scenario(scenario)
        return forecaster.project_scenario(scenario, self.starting_investment_total(), today=self.today)

    def compare_scenarios(self, years: int = 10) -> List[Dict[str, Union[int, float]]]:
        return forecaster.compare_scenarios(
            self.scenarios, self.starting_investment_total(), years=years, today=self.today
        )

    # Month navigation

    def set_current_month(self, period: str) -> None:
        self.current_month = validate_period(period)
        self._recompute_summary()

    def next_month(self) -> str:
        self.set_current_month(shift_period(self.current_month, 1))
        return self.current_month

    def previous_month(self) -> str:
        self.set_current_month(shift_period(self.current_month, -1))
        return self.current_month
