"""CLI adapter printing the dashboard views for the configured user."""

import os

from finboard.application.use_cases.get_budget_progress import (
    GetBudgetSummaryUseCase,
    ListActiveBudgetsUseCase,
)
from finboard.application.use_cases.get_dashboard_stats import (
    GetDashboardStatsUseCase,
)
from finboard.application.use_cases.get_goal_progress import (
    GetGoalSummaryUseCase,
    ListActiveGoalsUseCase,
)
from finboard.application.use_cases.get_monthly_trends import (
    DEFAULT_MONTHS_BACK,
    GetMonthlyTrendsUseCase,
)
from finboard.domain.models import ViewerContext
from finboard.infrastructure.container import (
    build_exchange_rate_cache,
    build_ledger_repository,
)
from finboard.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from finboard.infrastructure.settings import FinboardSettings


def _parse_months(value: str | None, logger) -> int:
    """Parse the trend window length.

    Args:
        value: Raw number of months.
        logger: Logger used for warnings.

    Returns:
        int: Parsed positive month count or the default.
    """
    if not value:
        return DEFAULT_MONTHS_BACK
    try:
        months = int(value)
    except ValueError:
        logger.warning(f"Invalid months '{value}'. Expected an integer.")
        return DEFAULT_MONTHS_BACK
    if months <= 0:
        logger.warning(f"Months must be positive, got {months}.")
        return DEFAULT_MONTHS_BACK
    return months


def main() -> None:
    """Print stats, trends, and the top budgets and goals."""
    logger = get_app_logger()
    usage_logger = get_usage_logger()
    settings = FinboardSettings.from_env()
    months = _parse_months(os.getenv("DASHBOARD_MONTHS"), logger)
    context = ViewerContext(
        display_currency=settings.display_currency,
        scope=settings.scope,
    )

    repository = build_ledger_repository()
    rate_cache = build_exchange_rate_cache(settings)
    usage_logger.info(
        f"dashboard_cli currency={context.display_currency} "
        f"scope={context.scope.value} months={months}"
    )

    stats = GetDashboardStatsUseCase(
        repository, rate_cache, logger=logger
    ).execute(context)
    trends = GetMonthlyTrendsUseCase(
        repository, rate_cache, logger=logger
    ).execute(context, months_back=months)
    budgets = ListActiveBudgetsUseCase(repository, rate_cache, logger=logger)
    budget_summary = GetBudgetSummaryUseCase(
        repository, rate_cache, logger=logger
    ).execute(context.display_currency)
    goals = ListActiveGoalsUseCase(repository, logger=logger)
    goal_summary = GetGoalSummaryUseCase(
        repository, rate_cache, logger=logger
    ).execute(context.display_currency)

    currency = stats.currency_code
    savings_rate = (
        f"{stats.savings_rate}%" if stats.savings_rate is not None else "n/a"
    )
    print(f"Dashboard ({currency}, scope={context.scope.value})")
    print(
        f"net_worth={stats.net_worth}, assets={stats.asset_total}, "
        f"liabilities={stats.liability_total}"
    )
    print(
        f"income={stats.monthly_income}, expenses={stats.monthly_expenses}, "
        f"savings={stats.monthly_savings}, savings_rate={savings_rate}"
    )
    print(
        f"pending_invoices={stats.pending_invoices} "
        f"({stats.pending_invoice_amount}), "
        f"credit_card_owed={stats.pending_cc_balance}"
    )
    if stats.is_partial:
        print(
            "Partial totals; no rate for: "
            + ", ".join(stats.unconverted_currencies)
        )

    print("Trends:")
    for trend in trends:
        print(
            f"  {trend.month} {trend.year}: income={trend.income}, "
            f"expenses={trend.expenses}, net={trend.net}"
        )

    top_budgets = budgets.top()
    print(
        f"Budgets: {budget_summary.total_budgets} active, "
        f"{budget_summary.over_budget} over budget"
    )
    for item in top_budgets.items:
        name = item.category.name if item.category else item.budget.category_id
        print(
            f"  {name}: {item.spent}/{item.budget.amount} "
            f"{item.budget.currency} ({item.percent_used:.0f}%, "
            f"{item.status.value})"
        )
    if top_budgets.remainder:
        print(f"  +{top_budgets.remainder} more budgets")

    top_goals = goals.top()
    overall = (
        f"{goal_summary.percent_complete:.0f}%"
        if goal_summary.percent_complete is not None
        else "n/a"
    )
    print(
        f"Goals: {goal_summary.total_saved} saved, {overall} overall"
    )
    for item in top_goals.items:
        print(
            f"  {item.goal.name}: {item.goal.current_amount}/"
            f"{item.goal.target_amount} {item.goal.currency} "
            f"({item.display_percent:.0f}%)"
        )
    if top_goals.remainder:
        print(f"  +{top_goals.remainder} more goals")


if __name__ == "__main__":  # pragma: no cover
    main()
