"""Use case to score financial health over the last 30 days."""

from datetime import datetime, timedelta
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import FinancialHealth, ViewerContext
from finboard.domain.services.finance import (
    compute_net_worth_summary,
    is_in_window,
    percent_complete,
    sum_flows,
)
from finboard.domain.services.health import (
    build_insights,
    compute_health_score,
    percent_change,
    savings_rate_percent,
)
from finboard.infrastructure.logging.logger import get_app_logger

WINDOW_DAYS = 30


class GetFinancialHealthUseCase:
    """Compare the last 30 days against the 30 days before and score them."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        rate_cache: RateProvider,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger records.
            rate_cache: Source of exchange rates for cross-currency amounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._rate_cache = rate_cache
        self._logger = logger or get_app_logger()

    def execute(
        self,
        context: ViewerContext,
        now: datetime | None = None,
    ) -> FinancialHealth:
        """Return the health score, 30-day changes, and insights.

        The recent window starts 30 days before ``now`` and is open ended;
        the previous window covers the 30 days before it.

        Args:
            context: Display currency and business/personal scope.
            now: Reference time; defaults to the current local time.

        Returns:
            FinancialHealth: Score and comparisons in the display currency.
        """
        now = now or datetime.now()
        recent_start = now - timedelta(days=WINDOW_DAYS)
        previous_start = recent_start - timedelta(days=WINDOW_DAYS)
        convert = CurrencyConverter(
            self._rate_cache,
            context.display_currency,
            self._logger,
        )

        transactions = [
            transaction
            for transaction in self._ledger_repository.fetch_transactions(
                start=previous_start,
            )
            if context.scope.includes(transaction.is_business)
        ]
        recent = sum_flows(
            (t for t in transactions if is_in_window(t, recent_start, None)),
            convert,
        )
        previous = sum_flows(
            (
                t
                for t in transactions
                if is_in_window(t, previous_start, recent_start)
            ),
            convert,
        )

        accounts = [
            account
            for account in self._ledger_repository.fetch_accounts()
            if context.scope.includes(account.is_business)
        ]
        net_worth = compute_net_worth_summary(
            accounts,
            convert,
            target_currency=convert.target_currency,
            logger=self._logger,
        ).net_worth

        active_budgets = len(
            [
                budget
                for budget in self._ledger_repository.fetch_budgets(
                    active_only=True
                )
                if budget.is_active
            ]
        )
        goals = [
            goal
            for goal in self._ledger_repository.fetch_goals(
                include_completed=False
            )
            if not goal.is_completed
        ]
        percents = [
            percent
            for percent in (
                percent_complete(goal.current_amount, goal.target_amount)
                for goal in goals
            )
            if percent is not None
        ]
        goals_progress = (
            sum(percents, Decimal("0")) / len(percents)
            if percents
            else Decimal("0")
        )

        savings_rate = savings_rate_percent(recent)
        health = FinancialHealth(
            currency_code=convert.target_currency,
            health_score=compute_health_score(
                savings_rate,
                net_worth,
                active_budgets,
                len(goals),
                goals_progress,
            ),
            savings_rate=savings_rate,
            previous_savings_rate=savings_rate_percent(previous),
            net_worth=net_worth,
            recent=recent,
            previous=previous,
            income_change=percent_change(recent.income, previous.income),
            expense_change=percent_change(
                recent.expenses,
                previous.expenses,
            ),
            insights=build_insights(
                savings_rate,
                recent,
                previous,
                len(goals),
                goals_progress,
            ),
            active_goals=len(goals),
            active_budgets=active_budgets,
            unconverted_currencies=convert.unconverted,
        )
        self._logger.info(
            f"Financial health computed: score={health.health_score}, "
            f"savings_rate={health.savings_rate:.1f}%"
        )
        return health


__all__ = ["GetFinancialHealthUseCase", "FinancialHealth"]
