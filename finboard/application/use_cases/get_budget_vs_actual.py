"""Use case to compare budget limits with actual spending over a window."""

from datetime import datetime
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.application.use_cases.get_budget_progress import (
    sum_category_spending,
)
from finboard.domain.models import (
    BudgetComparison,
    BudgetStatus,
    BudgetVsActual,
    TransactionType,
)
from finboard.domain.services.finance import classify_budget, percent_used
from finboard.infrastructure.logging.logger import get_app_logger


class GetBudgetVsActualUseCase:
    """Compare every active budget with spending in a caller-chosen window."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        rate_cache: RateProvider,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._rate_cache = rate_cache
        self._logger = logger or get_app_logger()

    def execute(
        self,
        display_currency: str,
        start: datetime,
        end: datetime,
    ) -> BudgetVsActual:
        """Return comparisons sorted by percent used, highest first.

        Unlike budget progress, the window ignores each budget's period.
        Rows are in the budget's own currency; totals are converted into
        ``display_currency``.

        Args:
            display_currency: Currency the totals are expressed in.
            start: Inclusive lower bound.
            end: Exclusive upper bound.

        Returns:
            BudgetVsActual: Sorted comparisons and totals.

        Raises:
            ValueError: If ``end`` is before ``start``.
        """
        if end < start:
            raise ValueError(f"end {end} is before start {start}")
        categories = {
            category.id: category
            for category in self._ledger_repository.fetch_categories()
        }
        transactions = self._ledger_repository.fetch_transactions(
            start=start,
            end=end,
            transaction_type=TransactionType.EXPENSE,
        )
        converters: dict[str, CurrencyConverter] = {}
        comparisons = []
        for budget in self._ledger_repository.fetch_budgets(active_only=True):
            if not budget.is_active:
                continue
            convert = converters.get(budget.currency)
            if convert is None:
                convert = CurrencyConverter(
                    self._rate_cache,
                    budget.currency,
                    self._logger,
                )
                converters[budget.currency] = convert
            actual, missing = sum_category_spending(
                transactions,
                budget.category_id,
                convert,
            )
            used = percent_used(actual, budget.amount)
            comparisons.append(
                BudgetComparison(
                    budget=budget,
                    category=categories.get(budget.category_id),
                    actual=actual,
                    percent_used=used,
                    status=classify_budget(used),
                    unconverted_currencies=missing,
                )
            )
        comparisons.sort(key=lambda item: item.percent_used, reverse=True)

        convert = CurrencyConverter(
            self._rate_cache,
            display_currency,
            self._logger,
        )
        unconverted = set()
        total_budgeted = Decimal("0")
        total_actual = Decimal("0")
        for item in comparisons:
            unconverted.update(item.unconverted_currencies)
            budgeted = convert(item.budgeted, item.budget.currency)
            actual = convert(item.actual, item.budget.currency)
            if budgeted is None or actual is None:
                continue
            total_budgeted += budgeted
            total_actual += actual

        result = BudgetVsActual(
            currency_code=convert.target_currency,
            comparisons=comparisons,
            total_budgeted=total_budgeted,
            total_actual=total_actual,
            over_budget_count=sum(
                1 for c in comparisons if c.status is BudgetStatus.OVER_BUDGET
            ),
            near_limit_count=sum(
                1 for c in comparisons if c.status is BudgetStatus.NEAR_LIMIT
            ),
            unconverted_currencies=tuple(
                sorted(unconverted.union(convert.unconverted))
            ),
        )
        self._logger.info(
            f"Budget vs actual computed: budgets={len(comparisons)}, "
            f"actual={result.total_actual} {result.currency_code}"
        )
        return result


__all__ = ["GetBudgetVsActualUseCase", "BudgetComparison", "BudgetVsActual"]
