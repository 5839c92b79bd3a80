"""Use case to break down income or expenses by category."""

from datetime import datetime
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import (
    CategoryAmount,
    CategoryType,
    TransactionType,
    ViewerContext,
)
from finboard.domain.services.finance import HUNDRED
from finboard.domain.services.periods import month_window
from finboard.infrastructure.logging.logger import get_app_logger

UNCATEGORIZED_NAME = "Uncategorized"
UNCATEGORIZED_COLOR = "#9ca3af"


class GetCategoryBreakdownUseCase:
    """Aggregate one transaction type per category for a window."""

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
        context: ViewerContext,
        category_type: CategoryType,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> list[CategoryAmount]:
        """Return category totals sorted by amount, highest first.

        Transactions without a category, or whose category no longer
        exists, are grouped under "Uncategorized".

        Args:
            context: Display currency and business/personal scope.
            category_type: Income or expense.
            start: Inclusive lower bound; defaults to the current month.
            end: Exclusive upper bound; defaults to the current month.
            now: Reference time for the default window.

        Returns:
            list[CategoryAmount]: Totals with their share of the whole.
        """
        if start is None or end is None:
            month_start, month_end = month_window(now or datetime.now())
            start = start or month_start
            end = end or month_end
        transaction_type = TransactionType(CategoryType(category_type).value)
        categories = {
            category.id: category
            for category in self._ledger_repository.fetch_categories()
        }
        transactions = self._ledger_repository.fetch_transactions(
            start=start,
            end=end,
            transaction_type=transaction_type,
        )
        convert = CurrencyConverter(
            self._rate_cache,
            context.display_currency,
            self._logger,
        )

        totals: dict[str | None, Decimal] = {}
        labels: dict[str | None, tuple[str, str]] = {}
        for transaction in transactions:
            if transaction.transaction_type is not transaction_type:
                continue
            if not context.scope.includes(transaction.is_business):
                continue
            converted = convert(abs(transaction.amount), transaction.currency)
            if converted is None:
                continue
            category = categories.get(transaction.category_id)
            key = category.id if category else None
            if key not in totals:
                totals[key] = Decimal("0")
                labels[key] = (
                    (category.name, category.color)
                    if category
                    else (UNCATEGORIZED_NAME, UNCATEGORIZED_COLOR)
                )
            totals[key] += converted

        grand_total = sum(totals.values(), Decimal("0"))
        breakdown = [
            CategoryAmount(
                category_id=key,
                name=labels[key][0],
                color=labels[key][1],
                amount=amount,
                percentage=(
                    amount / grand_total * HUNDRED
                    if grand_total > 0
                    else Decimal("0")
                ),
            )
            for key, amount in totals.items()
        ]
        breakdown.sort(key=lambda item: item.amount, reverse=True)
        self._logger.info(
            f"Computed {len(breakdown)} {transaction_type.value} categories, "
            f"total={grand_total} {convert.target_currency}"
        )
        return breakdown


__all__ = ["GetCategoryBreakdownUseCase", "CategoryAmount"]
