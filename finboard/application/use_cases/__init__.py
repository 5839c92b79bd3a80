"""Application use cases package."""

from .exchange_rates import ExchangeRateCache, convert_amount
from .get_budget_progress import (
    GetBudgetSummaryUseCase,
    ListActiveBudgetsUseCase,
)
from .get_budget_vs_actual import GetBudgetVsActualUseCase
from .get_business_personal_split import GetBusinessPersonalSplitUseCase
from .get_category_breakdown import GetCategoryBreakdownUseCase
from .get_dashboard_stats import GetDashboardStatsUseCase
from .get_financial_health import GetFinancialHealthUseCase
from .get_goal_progress import GetGoalSummaryUseCase, ListActiveGoalsUseCase
from .get_invoice_stats import GetInvoiceStatsUseCase
from .get_monthly_trends import GetMonthlyTrendsUseCase
from .seed_default_categories import (
    SeedCategoriesResult,
    SeedDefaultCategoriesUseCase,
)

__all__ = [
    "ExchangeRateCache",
    "convert_amount",
    "GetDashboardStatsUseCase",
    "GetMonthlyTrendsUseCase",
    "ListActiveBudgetsUseCase",
    "GetBudgetSummaryUseCase",
    "ListActiveGoalsUseCase",
    "GetGoalSummaryUseCase",
    "GetCategoryBreakdownUseCase",
    "GetBusinessPersonalSplitUseCase",
    "GetBudgetVsActualUseCase",
    "GetFinancialHealthUseCase",
    "GetInvoiceStatsUseCase",
    "SeedDefaultCategoriesUseCase",
    "SeedCategoriesResult",
]
