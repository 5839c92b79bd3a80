"""Use case to compute point-in-time dashboard metrics."""

from datetime import datetime
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import DashboardStats, ViewerContext
from finboard.domain.services.finance import (
    compute_net_worth_summary,
    pending_invoices,
    sum_credit_card_balances,
    sum_flows,
)
from finboard.domain.services.periods import month_window
from finboard.infrastructure.logging.logger import get_app_logger


class GetDashboardStatsUseCase:
    """Compute net worth, monthly flows, and pending totals."""

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
    ) -> DashboardStats:
        """Return dashboard metrics in the viewer's display currency.

        Args:
            context: Display currency and business/personal scope.
            now: Reference time; defaults to the current local time.

        Returns:
            DashboardStats: Aggregated metrics. Amounts whose currency has no
            available rate are left out and listed in
            ``unconverted_currencies``.
        """
        now = now or datetime.now()
        convert = CurrencyConverter(
            self._rate_cache,
            context.display_currency,
            self._logger,
        )
        currency = convert.target_currency

        accounts = [
            account
            for account in self._ledger_repository.fetch_accounts()
            if context.scope.includes(account.is_business)
        ]
        net_worth = compute_net_worth_summary(
            accounts,
            convert,
            target_currency=currency,
            logger=self._logger,
        )
        pending_cc_balance = sum_credit_card_balances(accounts, convert)

        start, end = month_window(now)
        transactions = [
            transaction
            for transaction in self._ledger_repository.fetch_transactions(
                start=start,
                end=end,
            )
            if context.scope.includes(transaction.is_business)
        ]
        flows = sum_flows(transactions, convert)

        invoices = pending_invoices(self._ledger_repository.fetch_invoices())
        invoice_amount = Decimal("0")
        for invoice in invoices:
            converted = convert(invoice.total, invoice.currency)
            if converted is not None:
                invoice_amount += converted

        stats = DashboardStats(
            currency_code=currency,
            net_worth=net_worth.net_worth,
            asset_total=net_worth.asset_total,
            liability_total=net_worth.liability_total,
            monthly_income=flows.income,
            monthly_expenses=flows.expenses,
            pending_cc_balance=pending_cc_balance,
            pending_invoices=len(invoices),
            pending_invoice_amount=invoice_amount,
            total_accounts=len(accounts),
            unconverted_currencies=convert.unconverted,
        )
        self._logger.info(
            f"Dashboard stats computed: net_worth={stats.net_worth}, "
            f"income={stats.monthly_income}, "
            f"expenses={stats.monthly_expenses}, currency={currency}"
        )
        return stats


__all__ = ["GetDashboardStatsUseCase", "DashboardStats"]
