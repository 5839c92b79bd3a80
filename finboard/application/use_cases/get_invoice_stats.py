"""Use case to summarize invoices by status."""

from datetime import datetime
from decimal import Decimal

from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.fx_utils import (
    CurrencyConverter,
    RateProvider,
)
from finboard.domain.models import Invoice, InvoiceStats, InvoiceStatus
from finboard.infrastructure.logging.logger import get_app_logger


def effective_status(invoice: Invoice, now: datetime) -> InvoiceStatus:
    """Treat sent invoices past their due date as overdue."""
    if (
        invoice.status is InvoiceStatus.SENT
        and invoice.due_date is not None
        and invoice.due_date < now
    ):
        return InvoiceStatus.OVERDUE
    return invoice.status


class GetInvoiceStatsUseCase:
    """Count invoices per status and total their amounts."""

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
        now: datetime | None = None,
    ) -> InvoiceStats:
        """Return invoice counts and converted amounts.

        Paid invoices count toward ``paid_amount``; void invoices count toward
        neither paid nor pending.

        Args:
            display_currency: Currency the amounts are expressed in.
            now: Reference time for overdue detection.

        Returns:
            InvoiceStats: Counts per effective status and totals.
        """
        now = now or datetime.now()
        invoices = self._ledger_repository.fetch_invoices()
        convert = CurrencyConverter(
            self._rate_cache,
            display_currency,
            self._logger,
        )
        counts = {status: 0 for status in InvoiceStatus}
        total_amount = Decimal("0")
        paid_amount = Decimal("0")
        pending_amount = Decimal("0")
        for invoice in invoices:
            status = effective_status(invoice, now)
            counts[status] += 1
            amount = convert(invoice.total, invoice.currency)
            if amount is None:
                continue
            total_amount += amount
            if status is InvoiceStatus.PAID:
                paid_amount += amount
            elif not status.is_terminal:
                pending_amount += amount

        stats = InvoiceStats(
            currency_code=convert.target_currency,
            total=len(invoices),
            counts=counts,
            total_amount=total_amount,
            paid_amount=paid_amount,
            pending_amount=pending_amount,
            unconverted_currencies=convert.unconverted,
        )
        self._logger.info(
            f"Invoice stats computed: invoices={stats.total}, "
            f"pending={stats.pending_amount} {stats.currency_code}"
        )
        return stats


__all__ = ["GetInvoiceStatsUseCase", "InvoiceStats", "effective_status"]
