from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from findash_core.domain.models import Budget, ForecastScenario, HistoryPoint, Investment, new_id
from findash_core.domain.validation import (
    parse_date,
    validate_budget,
    validate_investment,
    validate_scenario,
)
from findash_core.services.history import synthesize_history
from findash_core.services.periods import months_between

logger = logging.getLogger(__name__)


def load_scenarios(path: str | Path) -> List[ForecastScenario]:
    scenarios = [_scenario_from_dict(item) for item in _read_items(path, "scenarios")]
    logger.debug("Loaded %d scenarios from %s", len(scenarios), path)
    return scenarios


def load_investments(
    path: str | Path,
    rng: Optional[np.random.Generator] = None,
    today: Optional[dt.date] = None,
) -> List[Investment]:
    today = today or dt.date.today()
    investments = [_investment_from_dict(item, rng, today) for item in _read_items(path, "investments")]
    logger.debug("Loaded %d investments from %s", len(investments), path)
    return investments


def load_budgets(path: str | Path) -> List[Budget]:
    budgets = []
    for item in _read_items(path, "budgets"):
        budgets.append(
            validate_budget(
                Budget(
                    id=str(item.get("id") or new_id()),
                    category=str(item["category"]),
                    allocated=float(item.get("allocated", 0.0)),
                    spent=float(item.get("spent", 0.0)),
                    period=str(item["period"]),
                )
            )
        )
    return budgets


def _scenario_from_dict(data: Dict[str, Any]) -> ForecastScenario:
    return validate_scenario(
        ForecastScenario(
            id=str(data.get("id") or new_id()),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            monthly_income=float(_pick(data, "monthlyIncome", "monthly_income", 0.0)),
            monthly_expenses=float(_pick(data, "monthlyExpenses", "monthly_expenses", 0.0)),
            savings_rate=float(_pick(data, "savingsRate", "savings_rate", 0.0)),
            investment_return_rate=float(_pick(data, "investmentReturnRate", "investment_return_rate", 0.0)),
            inflation_rate=float(_pick(data, "inflationRate", "inflation_rate", 0.03)),
            years=int(data.get("years", 10)),
        )
    )


def _investment_from_dict(data: Dict[str, Any], rng: Optional[np.random.Generator], today: dt.date) -> Investment:
    initial = float(_pick(data, "initialInvestment", "initial_investment", 0.0))
    rate = float(_pick(data, "returnRate", "return_rate", 0.0))
    purchased = parse_date(_pick(data, "purchaseDate", "purchase_date", today.isoformat()))

    raw_history = data.get("history")
    if raw_history:
        history = [HistoryPoint(date=parse_date(h["date"]), value=float(h["value"])) for h in raw_history]
    else:
        history = synthesize_history(months_between(purchased, today), initial, rate, rng=rng, today=today)

    return validate_investment(
        Investment(
            id=str(data.get("id") or new_id()),
            name=str(data["name"]),
            type=str(data["type"]).lower(),
            value=float(data.get("value", initial)),
            initial_investment=initial,
            return_rate=rate,
            purchase_date=purchased,
            history=tuple(history),
        )
    )


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _read_items(path: str | Path, key: str) -> List[Dict[str, Any]]:
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {key} in {path}")
    return data


def _read_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
