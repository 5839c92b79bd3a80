"""Domain models package."""

from .finance import (
    BudgetComparison,
    BudgetProgress,
    BudgetStatus,
    BudgetSummary,
    BudgetVsActual,
    BusinessPersonalSplit,
    CategoryAmount,
    DashboardStats,
    FinancialHealth,
    FlowTotals,
    GoalProgress,
    GoalSummary,
    HealthInsight,
    InsightKind,
    InvoiceStats,
    LedgerScope,
    MonthlyTrend,
    NetWorthSummary,
    TopSelection,
    ViewerContext,
)
from .fx import ExchangeRateCacheEntry
from .ledger import (
    Account,
    AccountSide,
    AccountType,
    Budget,
    BudgetPeriod,
    Category,
    CategoryType,
    Goal,
    Invoice,
    InvoiceStatus,
    Transaction,
    TransactionType,
    account_side,
)

__all__ = [
    "Account",
    "AccountSide",
    "AccountType",
    "Budget",
    "BudgetPeriod",
    "BudgetComparison",
    "BudgetProgress",
    "BudgetStatus",
    "BudgetSummary",
    "BudgetVsActual",
    "BusinessPersonalSplit",
    "Category",
    "CategoryAmount",
    "CategoryType",
    "DashboardStats",
    "ExchangeRateCacheEntry",
    "FinancialHealth",
    "FlowTotals",
    "Goal",
    "GoalProgress",
    "GoalSummary",
    "HealthInsight",
    "InsightKind",
    "Invoice",
    "InvoiceStats",
    "InvoiceStatus",
    "LedgerScope",
    "MonthlyTrend",
    "NetWorthSummary",
    "TopSelection",
    "Transaction",
    "TransactionType",
    "ViewerContext",
    "account_side",
]
