"""Use case to compute a rolling series of monthly income and expenses."""

from datetime import datetime

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import MonthlyTrend, Transaction, ViewerContext
from finboard.domain.services.finance import sum_flows
from finboard.domain.services.periods import add_months, month_start
from finboard.infrastructure.logging.logger import get_app_logger

DEFAULT_MONTHS_BACK = 6


class GetMonthlyTrendsUseCase:
    """Compute per-month income, expenses, and net for charting."""

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
        months_back: int = DEFAULT_MONTHS_BACK,
        now: datetime | None = None,
    ) -> list[MonthlyTrend]:
        """Return exactly ``months_back`` entries, oldest first.

        Months without activity are included with zero totals.

        Args:
            context: Display currency and business/personal scope.
            months_back: Number of months ending with the current one.
            now: Reference time; defaults to the current local time.

        Returns:
            list[MonthlyTrend]: Fixed-length series.

        Raises:
            ValueError: If ``months_back`` is negative.
        """
        if months_back < 0:
            raise ValueError(
                f"months_back must be non-negative, got {months_back}"
            )
        if months_back == 0:
            return []

        now = now or datetime.now()
        current = month_start(now)
        starts = [
            add_months(current, offset)
            for offset in range(-(months_back - 1), 1)
        ]
        window_end = add_months(current, 1)

        buckets: dict[datetime, list[Transaction]] = {
            start: [] for start in starts
        }
        transactions = self._ledger_repository.fetch_transactions(
            start=starts[0],
            end=window_end,
        )
        for transaction in transactions:
            if not context.scope.includes(transaction.is_business):
                continue
            bucket = buckets.get(month_start(transaction.occurred_at))
            if bucket is not None:
                bucket.append(transaction)

        convert = CurrencyConverter(
            self._rate_cache,
            context.display_currency,
            self._logger,
        )
        trends = []
        for start in starts:
            flows = sum_flows(buckets[start], convert)
            trends.append(
                MonthlyTrend(
                    month=start.strftime("%b"),
                    year=start.year,
                    month_start=start,
                    income=flows.income,
                    expenses=flows.expenses,
                )
            )
        self._logger.info(
            f"Computed {len(trends)} monthly trends in "
            f"{convert.target_currency}"
        )
        return trends


__all__ = ["GetMonthlyTrendsUseCase", "MonthlyTrend", "DEFAULT_MONTHS_BACK"]
