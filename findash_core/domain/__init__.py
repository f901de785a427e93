from findash_core.domain.models import (  # noqa: F401
    INVESTMENT_TYPES,
    TRANSACTION_TYPES,
    Budget,
    BudgetProgress,
    CashFlowPoint,
    FinancialSummary,
    ForecastScenario,
    HistoryPoint,
    Investment,
    InvestmentPerformance,
    MonthlyProjection,
    PortfolioPoint,
    PortfolioTotals,
    ScenarioOutcome,
    Transaction,
)

__all__ = [
    "INVESTMENT_TYPES",
    "TRANSACTION_TYPES",
    "Budget",
    "BudgetProgress",
    "CashFlowPoint",
    "FinancialSummary",
    "ForecastScenario",
    "HistoryPoint",
    "Investment",
    "InvestmentPerformance",
    "MonthlyProjection",
    "PortfolioPoint",
    "PortfolioTotals",
    "ScenarioOutcome",
    "Transaction",
]
