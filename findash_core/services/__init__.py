from findash_core.services.forecaster import compare_scenarios, project_scenario, scenario_outcome  # noqa: F401
from findash_core.services.history import synthesize_history  # noqa: F401
from findash_core.services.store import FinanceStore  # noqa: F401
from findash_core.services.summary import compute_summary  # noqa: F401

__all__ = [
    "compute_summary",
    "project_scenario",
    "scenario_outcome",
    "compare_scenarios",
    "synthesize_history",
    "FinanceStore",
]
