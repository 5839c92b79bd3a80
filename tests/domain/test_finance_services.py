"""Tests for finance domain services."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finboard.domain.models import (
    Account,
    AccountType,
    BudgetStatus,
    DashboardStats,
    Invoice,
    InvoiceStatus,
    Transaction,
    TransactionType,
)
from finboard.domain.services.finance import (
    classify_budget,
    compute_net_worth_summary,
    is_in_window,
    pending_invoices,
    percent_complete,
    percent_used,
    select_top,
    sum_credit_card_balances,
    sum_flows,
)


def _identity(amount: Decimal, currency: str) -> Decimal:
    return amount


def _account(account_id, account_type, balance, currency="USD") -> Account:
    return Account(
        id=account_id,
        name=account_id,
        account_type=account_type,
        balance=Decimal(balance),
        currency=currency,
    )


def _transaction(transaction_type, amount, currency="USD") -> Transaction:
    return Transaction(
        id="t",
        account_id="a",
        category_id=None,
        amount=Decimal(amount),
        currency=currency,
        transaction_type=transaction_type,
        occurred_at=datetime(2026, 10, 5),
    )


def _stats(income: str, expenses: str) -> DashboardStats:
    zero = Decimal("0")
    return DashboardStats(
        currency_code="USD",
        net_worth=zero,
        asset_total=zero,
        liability_total=zero,
        monthly_income=Decimal(income),
        monthly_expenses=Decimal(expenses),
        pending_cc_balance=zero,
        pending_invoices=0,
        pending_invoice_amount=zero,
        total_accounts=0,
    )


def test_net_worth_subtracts_amount_owed_on_credit_cards() -> None:
    """A bank of 1000 and a card owing 300 should net to 700."""
    accounts = [
        _account("bank", AccountType.BANK, "1000"),
        _account("card", AccountType.CREDIT_CARD, "300"),
    ]

    summary = compute_net_worth_summary(
        accounts,
        _identity,
        target_currency="USD",
        logger=MagicMock(),
    )

    assert summary.asset_total == Decimal("1000")
    assert summary.liability_total == Decimal("300")
    assert summary.net_worth == Decimal("700")


def test_net_worth_uses_magnitude_for_loans_and_warns() -> None:
    """Negative loan balances should still count as owed."""
    logger = MagicMock()
    accounts = [
        _account("cash", AccountType.CASH, "50"),
        _account("loan", AccountType.LOAN, "-200"),
    ]

    summary = compute_net_worth_summary(
        accounts,
        _identity,
        target_currency="USD",
        logger=logger,
    )

    assert summary.net_worth == Decimal("-150")
    logger.warning.assert_called_once()


def test_net_worth_skips_unconvertible_accounts() -> None:
    """Accounts whose conversion fails should not contribute."""
    accounts = [
        _account("bank", AccountType.BANK, "100"),
        _account("eur", AccountType.BANK, "500", currency="EUR"),
    ]

    def convert(amount, currency):
        return None if currency == "EUR" else amount

    summary = compute_net_worth_summary(
        accounts,
        convert,
        target_currency="USD",
        logger=MagicMock(),
    )

    assert summary.net_worth == Decimal("100")


def test_net_worth_of_no_accounts_is_zero() -> None:
    """Empty ledgers should produce zero totals."""
    summary = compute_net_worth_summary(
        [],
        _identity,
        target_currency="USD",
        logger=MagicMock(),
    )

    assert summary.net_worth == Decimal("0")


def test_credit_card_balances_ignore_loans() -> None:
    """Only credit card balances should be summed."""
    accounts = [
        _account("card", AccountType.CREDIT_CARD, "120.50"),
        _account("loan", AccountType.LOAN, "1000"),
    ]

    assert sum_credit_card_balances(accounts, _identity) == Decimal("120.50")


def test_transfers_never_affect_flows() -> None:
    """Transfers of any amount should be excluded from income and expenses."""
    transactions = [
        _transaction(TransactionType.INCOME, "100"),
        _transaction(TransactionType.EXPENSE, "-40"),
        _transaction(TransactionType.TRANSFER, "99999"),
        _transaction(TransactionType.TRANSFER, "-99999"),
    ]

    flows = sum_flows(transactions, _identity)

    assert flows.income == Decimal("100")
    assert flows.expenses == Decimal("40")
    assert flows.net == Decimal("60")


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (datetime(2026, 10, 5), datetime(2026, 10, 6), True),
        (datetime(2026, 10, 1), datetime(2026, 10, 5), False),
        (datetime(2026, 10, 6), None, False),
        (None, datetime(2026, 10, 6), True),
        (None, None, True),
    ],
)
def test_window_includes_start_and_excludes_end(start, end, expected) -> None:
    """Windows should be half-open with optional bounds."""
    transaction = _transaction(TransactionType.EXPENSE, "1")

    assert is_in_window(transaction, start, end) is expected


def test_pending_invoices_exclude_terminal_statuses() -> None:
    """Paid and void invoices should not be pending."""
    invoices = [
        Invoice("1", "c", "INV-1", InvoiceStatus.SENT, Decimal("10"), "USD"),
        Invoice("2", "c", "INV-2", InvoiceStatus.PAID, Decimal("20"), "USD"),
        Invoice("3", "c", "INV-3", InvoiceStatus.OVERDUE, Decimal("30"), "USD"),
        Invoice("4", "c", "INV-4", InvoiceStatus.VOID, Decimal("40"), "USD"),
    ]

    assert [invoice.id for invoice in pending_invoices(invoices)] == ["1", "3"]


def test_percent_used_is_unbounded_and_guards_zero_limit() -> None:
    """Overspending should exceed 100 and a zero limit should yield 0."""
    assert percent_used(Decimal("150"), Decimal("100")) == Decimal("150")
    assert percent_used(Decimal("10"), Decimal("0")) == Decimal("0")


@pytest.mark.parametrize(
    ("percent", "expected"),
    [
        ("0", BudgetStatus.ON_TRACK),
        ("79.99", BudgetStatus.ON_TRACK),
        ("80", BudgetStatus.NEAR_LIMIT),
        ("100", BudgetStatus.NEAR_LIMIT),
        ("100.01", BudgetStatus.OVER_BUDGET),
        ("150", BudgetStatus.OVER_BUDGET),
    ],
)
def test_classify_budget_bands(percent: str, expected: BudgetStatus) -> None:
    """Status bands should change at 80 and above 100."""
    assert classify_budget(Decimal(percent)) is expected


def test_percent_complete_guards_zero_target() -> None:
    """50 of 200 is 25 percent; a zero target is not computed."""
    assert percent_complete(Decimal("50"), Decimal("200")) == Decimal("25")
    assert percent_complete(Decimal("50"), Decimal("0")) is None


def test_select_top_keeps_three_and_reports_remainder() -> None:
    """Five items should yield the three highest and a remainder of two."""
    items = [("a", 10), ("b", 95), ("c", 40), ("d", 120), ("e", 5)]

    selection = select_top(items, key=lambda item: item[1])

    assert [item[0] for item in selection.items] == ["d", "b", "c"]
    assert selection.remainder == 2


def test_select_top_breaks_ties_by_input_order() -> None:
    """Equal keys should keep their input order."""
    items = [("first", 50), ("second", 50), ("third", 50), ("fourth", 50)]

    selection = select_top(items, key=lambda item: item[1])

    assert [item[0] for item in selection.items] == [
        "first",
        "second",
        "third",
    ]
    assert selection.remainder == 1


def test_select_top_with_fewer_items_than_limit() -> None:
    """Short lists should be returned whole with no remainder."""
    selection = select_top([1, 2], key=Decimal)

    assert selection.items == [2, 1]
    assert selection.remainder == 0


def test_savings_rate_not_computed_without_income() -> None:
    """Zero income should leave the savings rate undefined."""
    assert _stats("0", "0").savings_rate is None
    assert _stats("0", "25").savings_rate is None


def test_savings_rate_rounds_half_up() -> None:
    """Savings rate should round to the nearest whole percent."""
    assert _stats("200", "150").savings_rate == 25
    assert _stats("1000", "994.5").savings_rate == 1
    assert _stats("100", "150").savings_rate == -50
