"""Calendar window helpers for monthly and budget periods.

All windows are half-open: ``start <= occurred_at < end``.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from finboard.domain.models.ledger import BudgetPeriod

WEEKS_PER_MONTH = Decimal("4.33")
MONTHS_PER_YEAR = Decimal("12")


def month_start(moment: datetime) -> datetime:
    """Return midnight on the first day of ``moment``'s month."""
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift a month start by a signed number of months.

    Args:
        moment: Datetime on the first day of a month.
        months: Number of months to move, negative for the past.

    Returns:
        datetime: First day of the shifted month.
    """
    index = moment.year * 12 + (moment.month - 1) + months
    return moment.replace(year=index // 12, month=index % 12 + 1, day=1)


def month_window(moment: datetime) -> tuple[datetime, datetime]:
    """Return the calendar month containing ``moment``."""
    start = month_start(moment)
    return start, add_months(start, 1)


def budget_period_window(
    period: BudgetPeriod,
    now: datetime,
    start_date: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Return the current window of a budget period.

    Args:
        period: Budget recurrence.
        now: Reference time.
        start_date: Budget creation date; its month anchors yearly budgets.

    Returns:
        tuple[datetime, datetime]: Inclusive start and exclusive end.
    """
    period = BudgetPeriod(period)
    if period is BudgetPeriod.WEEKLY:
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        monday = midnight - timedelta(days=now.weekday())
        return monday, monday + timedelta(days=7)
    if period is BudgetPeriod.YEARLY:
        fiscal_month = start_date.month if start_date else 1
        year = now.year if now.month >= fiscal_month else now.year - 1
        start = month_start(now).replace(year=year, month=fiscal_month)
        return start, add_months(start, 12)
    return month_window(now)


def normalize_to_monthly(amount: Decimal, period: BudgetPeriod) -> Decimal:
    """Express a period limit as a monthly figure."""
    period = BudgetPeriod(period)
    if period is BudgetPeriod.WEEKLY:
        return amount * WEEKS_PER_MONTH
    if period is BudgetPeriod.YEARLY:
        return amount / MONTHS_PER_YEAR
    return amount


__all__ = [
    "month_start",
    "add_months",
    "month_window",
    "budget_period_window",
    "normalize_to_monthly",
]
