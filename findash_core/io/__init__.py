from findash_core.io.ledger import load_transactions  # noqa: F401
from findash_core.io.config import (  # noqa: F401
    load_budgets,
    load_investments,
    load_scenarios,
)

__all__ = ["load_transactions", "load_budgets", "load_investments", "load_scenarios"]
