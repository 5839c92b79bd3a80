"""Use cases to compute budget utilization and portfolio totals."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import (
    BudgetProgress,
    BudgetStatus,
    BudgetSummary,
    TopSelection,
    Transaction,
    TransactionType,
)
from finboard.domain.services.finance import (
    DEFAULT_TOP_LIMIT,
    classify_budget,
    percent_used,
    select_top,
    sum_flows,
)
from finboard.domain.services.normalization import normalize_currency
from finboard.domain.services.periods import (
    budget_period_window,
    normalize_to_monthly,
)
from finboard.infrastructure.logging.logger import get_app_logger


def sum_category_spending(
    transactions: Iterable[Transaction],
    category_id: str,
    convert: CurrencyConverter,
) -> tuple[Decimal, tuple[str, ...]]:
    """Sum converted expenses booked on one category.

    Args:
        transactions: Candidate transactions.
        category_id: Category the spending is attributed to.
        convert: Converter into the budget currency.

    Returns:
        tuple[Decimal, tuple[str, ...]]: Spent amount and the currencies of
        matching expenses that could not be converted.
    """
    matching = [
        transaction
        for transaction in transactions
        if transaction.category_id == category_id
        and transaction.transaction_type is TransactionType.EXPENSE
    ]
    spent = sum_flows(matching, convert).expenses
    currencies = {normalize_currency(t.currency) for t in matching}
    missing = tuple(
        code for code in convert.unconverted if code in currencies
    )
    return spent, missing


class ListActiveBudgetsUseCase:
    """Enrich active budgets with spending for their current period."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        rate_cache: RateProvider,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger records.
            rate_cache: Source of exchange rates for cross-currency spending.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._rate_cache = rate_cache
        self._logger = logger or get_app_logger()

    def execute(self, now: datetime | None = None) -> list[BudgetProgress]:
        """Return active budgets in store order with spend figures.

        ``spent`` is expressed in each budget's own currency and
        ``percent_used`` is not clamped, so overspent budgets exceed 100.

        Args:
            now: Reference time; defaults to the current local time.

        Returns:
            list[BudgetProgress]: One entry per active budget.
        """
        now = now or datetime.now()
        categories = {
            category.id: category
            for category in self._ledger_repository.fetch_categories()
        }
        converters: dict[str, CurrencyConverter] = {}
        progress = []
        for budget in self._ledger_repository.fetch_budgets(active_only=True):
            if not budget.is_active:
                continue
            start, end = budget_period_window(
                budget.period,
                now,
                budget.start_date,
            )
            transactions = self._ledger_repository.fetch_transactions(
                start=start,
                end=end,
                category_id=budget.category_id,
                transaction_type=TransactionType.EXPENSE,
            )
            convert = converters.get(budget.currency)
            if convert is None:
                convert = CurrencyConverter(
                    self._rate_cache,
                    budget.currency,
                    self._logger,
                )
                converters[budget.currency] = convert
            spent, missing = sum_category_spending(
                transactions,
                budget.category_id,
                convert,
            )
            used = percent_used(spent, budget.amount)
            category = categories.get(budget.category_id)
            if category is None:
                self._logger.warning(
                    f"Budget {budget.id} references missing category "
                    f"{budget.category_id}"
                )
            progress.append(
                BudgetProgress(
                    budget=budget,
                    category=category,
                    spent=spent,
                    percent_used=used,
                    status=classify_budget(used),
                    period_start=start,
                    period_end=end,
                    unconverted_currencies=missing,
                )
            )
        self._logger.info(f"Computed progress for {len(progress)} budgets")
        return progress

    def top(
        self,
        now: datetime | None = None,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> TopSelection[BudgetProgress]:
        """Return the budgets with the highest percent used.

        Args:
            now: Reference time; defaults to the current local time.
            limit: Maximum number of budgets to keep.

        Returns:
            TopSelection[BudgetProgress]: Leading budgets and the remainder.
        """
        return select_top(
            self.execute(now),
            key=lambda item: item.percent_used,
            limit=limit,
        )


class GetBudgetSummaryUseCase:
    """Aggregate active budgets into portfolio totals."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        rate_cache: RateProvider,
        logger=None,
    ) -> None:
        self._rate_cache = rate_cache
        self._logger = logger or get_app_logger()
        self._list_budgets = ListActiveBudgetsUseCase(
            ledger_repository,
            rate_cache,
            logger=self._logger,
        )

    def execute(
        self,
        display_currency: str,
        now: datetime | None = None,
    ) -> BudgetSummary:
        """Return totals in the display currency and status counts.

        Status counts use each budget's own ``percent_used``; the portfolio
        ``percent_used`` pools total spent over total budgeted.
        ``unconverted_currencies`` merges budget-level and display-level
        misses.

        Args:
            display_currency: Currency the totals are expressed in.
            now: Reference time; defaults to the current local time.

        Returns:
            BudgetSummary: Portfolio totals.
        """
        progress = self._list_budgets.execute(now)
        convert = CurrencyConverter(
            self._rate_cache,
            display_currency,
            self._logger,
        )
        counts = {status: 0 for status in BudgetStatus}
        total_budgeted = Decimal("0")
        monthly_budgeted = Decimal("0")
        total_spent = Decimal("0")
        unconverted = set()
        for item in progress:
            counts[item.status] += 1
            unconverted.update(item.unconverted_currencies)
            budgeted = convert(item.budget.amount, item.budget.currency)
            spent = convert(item.spent, item.budget.currency)
            if budgeted is None or spent is None:
                continue
            total_budgeted += budgeted
            monthly_budgeted += normalize_to_monthly(
                budgeted,
                item.budget.period,
            )
            total_spent += spent

        summary = BudgetSummary(
            currency_code=convert.target_currency,
            total_budgets=len(progress),
            total_budgeted=total_budgeted,
            monthly_budgeted=monthly_budgeted,
            total_spent=total_spent,
            percent_used=percent_used(total_spent, total_budgeted),
            on_track=counts[BudgetStatus.ON_TRACK],
            near_limit=counts[BudgetStatus.NEAR_LIMIT],
            over_budget=counts[BudgetStatus.OVER_BUDGET],
            unconverted_currencies=tuple(
                sorted(unconverted.union(convert.unconverted))
            ),
        )
        self._logger.info(
            f"Budget summary computed: budgets={summary.total_budgets}, "
            f"over_budget={summary.over_budget}, "
            f"spent={summary.total_spent} {summary.currency_code}"
        )
        return summary


__all__ = [
    "ListActiveBudgetsUseCase",
    "sum_category_spending",
    "GetBudgetSummaryUseCase",
    "BudgetProgress",
    "BudgetSummary",
]
