"""Use case to split income and expenses into business and personal."""

from datetime import datetime

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import BusinessPersonalSplit
from finboard.domain.services.finance import sum_flows
from finboard.domain.services.periods import month_window
from finboard.infrastructure.logging.logger import get_app_logger


class GetBusinessPersonalSplitUseCase:
    """Compute income and expense totals per ledger side."""

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
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> BusinessPersonalSplit:
        """Return business and personal flows for a window.

        Args:
            display_currency: Currency the totals are expressed in.
            start: Inclusive lower bound; defaults to the current month.
            end: Exclusive upper bound; defaults to the current month.
            now: Reference time for the default window.

        Returns:
            BusinessPersonalSplit: Flows per side; transfers are excluded.
        """
        if start is None or end is None:
            month_start, month_end = month_window(now or datetime.now())
            start = start or month_start
            end = end or month_end
        transactions = self._ledger_repository.fetch_transactions(
            start=start,
            end=end,
        )
        convert = CurrencyConverter(
            self._rate_cache,
            display_currency,
            self._logger,
        )
        business = sum_flows(
            (t for t in transactions if t.is_business),
            convert,
        )
        personal = sum_flows(
            (t for t in transactions if not t.is_business),
            convert,
        )
        self._logger.info(
            f"Business/personal split computed: business_net={business.net}, "
            f"personal_net={personal.net} {convert.target_currency}"
        )
        return BusinessPersonalSplit(
            business=business,
            personal=personal,
            currency_code=convert.target_currency,
        )


__all__ = ["GetBusinessPersonalSplitUseCase", "BusinessPersonalSplit"]
