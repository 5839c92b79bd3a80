"""Use cases to compute savings goal progress."""

import math
from datetime import datetime
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import Goal, GoalProgress, GoalSummary, TopSelection
from finboard.domain.services.finance import (
    DEFAULT_TOP_LIMIT,
    percent_complete,
    select_top,
)
from finboard.infrastructure.logging.logger import get_app_logger

SECONDS_PER_DAY = 24 * 60 * 60
DAYS_PER_MONTH = Decimal("30")


def build_goal_progress(goal: Goal, now: datetime) -> GoalProgress:
    """Derive progress figures for a single goal.

    Args:
        goal: Goal record.
        now: Reference time for target date arithmetic.

    Returns:
        GoalProgress: Goal with percent complete and schedule figures.
    """
    days_remaining = None
    is_overdue = False
    monthly_needed = None
    if goal.target_date is not None:
        seconds = (goal.target_date - now).total_seconds()
        days_remaining = math.ceil(seconds / SECONDS_PER_DAY)
        is_overdue = days_remaining < 0 and not goal.is_completed
        remaining = goal.target_amount - goal.current_amount
        if days_remaining > 0 and remaining > 0:
            months = Decimal(days_remaining) / DAYS_PER_MONTH
            monthly_needed = remaining / months
    return GoalProgress(
        goal=goal,
        percent_complete=percent_complete(
            goal.current_amount,
            goal.target_amount,
        ),
        days_remaining=days_remaining,
        is_overdue=is_overdue,
        monthly_needed=monthly_needed,
    )


class ListActiveGoalsUseCase:
    """List incomplete goals with their progress."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, now: datetime | None = None) -> list[GoalProgress]:
        """Return goals not marked completed, in store order.

        Args:
            now: Reference time; defaults to the current local time.

        Returns:
            list[GoalProgress]: Progress for each active goal.
        """
        now = now or datetime.now()
        goals = self._ledger_repository.fetch_goals(include_completed=False)
        progress = [
            build_goal_progress(goal, now)
            for goal in goals
            if not goal.is_completed
        ]
        self._logger.info(f"Computed progress for {len(progress)} goals")
        return progress

    def top(
        self,
        now: datetime | None = None,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> TopSelection[GoalProgress]:
        """Return the goals closest to completion.

        Goals without a computable percent rank as 0.
        """
        return select_top(
            self.execute(now),
            key=lambda item: item.percent_complete or Decimal("0"),
            limit=limit,
        )


class GetGoalSummaryUseCase:
    """Pool progress across every goal, active or completed."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        rate_cache: RateProvider,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._rate_cache = rate_cache
        self._logger = logger or get_app_logger()

    def execute(self, display_currency: str) -> GoalSummary:
        """Return pooled goal totals in the display currency.

        ``percent_complete`` is total saved over total target, not the mean
        of per-goal percentages, and is None when nothing is targeted.

        Args:
            display_currency: Currency the totals are expressed in.

        Returns:
            GoalSummary: Pooled totals and counts.
        """
        goals = self._ledger_repository.fetch_goals(include_completed=True)
        convert = CurrencyConverter(
            self._rate_cache,
            display_currency,
            self._logger,
        )
        total_target = Decimal("0")
        total_saved = Decimal("0")
        completed = 0
        for goal in goals:
            if goal.is_completed:
                completed += 1
            target = convert(goal.target_amount, goal.currency)
            saved = convert(goal.current_amount, goal.currency)
            if target is None or saved is None:
                continue
            total_target += target
            total_saved += saved

        summary = GoalSummary(
            currency_code=convert.target_currency,
            total_goals=len(goals),
            active_goals=len(goals) - completed,
            completed_goals=completed,
            total_target=total_target,
            total_saved=total_saved,
            percent_complete=percent_complete(total_saved, total_target),
            unconverted_currencies=convert.unconverted,
        )
        self._logger.info(
            f"Goal summary computed: goals={summary.total_goals}, "
            f"saved={summary.total_saved} {summary.currency_code}"
        )
        return summary


__all__ = [
    "ListActiveGoalsUseCase",
    "GetGoalSummaryUseCase",
    "build_goal_progress",
    "GoalProgress",
    "GoalSummary",
]
