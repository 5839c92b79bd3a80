"""Domain services for finance aggregates.

The reductions here are pure: amounts are normalized through a ``convert``
callable supplied by the application layer, which returns None when an
amount cannot be expressed in the target currency. Unconvertible amounts
are skipped.
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from decimal import Decimal
from logging import Logger
from typing import TypeVar

from finboard.domain.models import (
    Account,
    AccountSide,
    AccountType,
    BudgetStatus,
    FlowTotals,
    Invoice,
    NetWorthSummary,
    TopSelection,
    Transaction,
    TransactionType,
)
from finboard.domain.services.validation import validate_balance_sign

T = TypeVar("T")

Converter = Callable[[Decimal, str], Decimal | None]

HUNDRED = Decimal("100")
NEAR_LIMIT_THRESHOLD = Decimal("80")
DEFAULT_TOP_LIMIT = 3


def compute_net_worth_summary(
    accounts: Iterable[Account],
    convert: Converter,
    *,
    target_currency: str,
    logger: Logger,
) -> NetWorthSummary:
    """Compute net worth totals from account balances.

    Args:
        accounts: Accounts to aggregate.
        convert: Converts an amount from a currency to ``target_currency``.
        target_currency: Currency the totals are expressed in.
        logger: Logger used for warnings.

    Returns:
        NetWorthSummary: Computed asset, liability, and net worth totals.
    """
    asset_total = Decimal("0")
    liability_total = Decimal("0")
    for account in accounts:
        validate_balance_sign(account, logger)
        if account.side is AccountSide.LIABILITY:
            converted = convert(abs(account.balance), account.currency)
            if converted is None:
                continue
            liability_total += converted
        else:
            converted = convert(account.balance, account.currency)
            if converted is None:
                continue
            asset_total += converted

    return NetWorthSummary(
        asset_total=asset_total,
        liability_total=liability_total,
        net_worth=asset_total - liability_total,
        currency_code=target_currency,
    )


def sum_credit_card_balances(
    accounts: Iterable[Account],
    convert: Converter,
) -> Decimal:
    """Return the converted amount owed across credit card accounts."""
    total = Decimal("0")
    for account in accounts:
        if account.account_type is not AccountType.CREDIT_CARD:
            continue
        converted = convert(abs(account.balance), account.currency)
        if converted is not None:
            total += converted
    return total


def is_in_window(
    transaction: Transaction,
    start: datetime | None,
    end: datetime | None,
) -> bool:
    if start is not None and transaction.occurred_at < start:
        return False
    if end is not None and transaction.occurred_at >= end:
        return False
    return True


def sum_flows(
    transactions: Iterable[Transaction],
    convert: Converter,
) -> FlowTotals:
    """Sum income and expense magnitudes, ignoring transfers.

    Args:
        transactions: Transactions already scoped to the window.
        convert: Converts an amount into the display currency.

    Returns:
        FlowTotals: Converted income and expense totals.
    """
    income = Decimal("0")
    expenses = Decimal("0")
    for transaction in transactions:
        if transaction.transaction_type is TransactionType.TRANSFER:
            continue
        converted = convert(abs(transaction.amount), transaction.currency)
        if converted is None:
            continue
        if transaction.transaction_type is TransactionType.INCOME:
            income += converted
        elif transaction.transaction_type is TransactionType.EXPENSE:
            expenses += converted
    return FlowTotals(income=income, expenses=expenses)


def pending_invoices(invoices: Iterable[Invoice]) -> list[Invoice]:
    """Return invoices whose status is not terminal."""
    return [invoice for invoice in invoices if not invoice.status.is_terminal]


def percent_used(spent: Decimal, limit: Decimal) -> Decimal:
    """Return spend as a percent of the limit, unbounded above 100.

    A non-positive limit yields 0.
    """
    if limit <= 0:
        return Decimal("0")
    return spent / limit * HUNDRED


def classify_budget(percent: Decimal) -> BudgetStatus:
    """Map a percent used onto the three budget status bands."""
    if percent > HUNDRED:
        return BudgetStatus.OVER_BUDGET
    if percent >= NEAR_LIMIT_THRESHOLD:
        return BudgetStatus.NEAR_LIMIT
    return BudgetStatus.ON_TRACK


def percent_complete(current: Decimal, target: Decimal) -> Decimal | None:
    """Return progress toward a target, or None for a non-positive target."""
    if target <= 0:
        return None
    return current / target * HUNDRED


def select_top(
    items: Sequence[T],
    key: Callable[[T], Decimal],
    limit: int = DEFAULT_TOP_LIMIT,
) -> TopSelection[T]:
    """Return the highest-ranked items and how many were left out.

    The sort is stable, so ties keep their input order.

    Args:
        items: Items in store order.
        key: Ranking value, higher first.
        limit: Maximum number of items to keep.

    Returns:
        TopSelection: Leading items and the remainder count.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    ranked = sorted(items, key=key, reverse=True)
    kept = ranked[:limit]
    return TopSelection(items=kept, remainder=len(ranked) - len(kept))


__all__ = [
    "Converter",
    "compute_net_worth_summary",
    "sum_credit_card_balances",
    "is_in_window",
    "sum_flows",
    "pending_invoices",
    "percent_used",
    "classify_budget",
    "percent_complete",
    "select_top",
]
