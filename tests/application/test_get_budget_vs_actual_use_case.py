"""Tests for the GetBudgetVsActualUseCase."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finboard.application.use_cases.get_budget_vs_actual import (
    GetBudgetVsActualUseCase,
)
from finboard.domain.models import (
    Budget,
    BudgetStatus,
    Category,
    CategoryType,
    Transaction,
    TransactionType,
)

START = datetime(2026, 9, 1)
END = datetime(2026, 10, 1)


def _category(category_id: str) -> Category:
    return Category(
        id=category_id,
        name=category_id.title(),
        category_type=CategoryType.EXPENSE,
        color="#8b7355",
    )


def _expense(category_id: str, amount: str, currency: str = "USD") -> Transaction:
    return Transaction(
        id=f"{category_id}-{amount}-{currency}",
        account_id="bank",
        category_id=category_id,
        amount=Decimal(amount),
        currency=currency,
        transaction_type=TransactionType.EXPENSE,
        occurred_at=datetime(2026, 9, 12),
    )


def _build_repository(budgets, transactions, categories=None) -> MagicMock:
    repository = MagicMock()
    repository.fetch_budgets.return_value = list(budgets)
    repository.fetch_transactions.return_value = list(transactions)
    repository.fetch_categories.return_value = (
        categories
        if categories is not None
        else [_category(budget.category_id) for budget in budgets]
    )
    return repository


def _build_rates(rates: dict[tuple[str, str], Decimal] | None = None) -> MagicMock:
    rates = rates or {}
    rate_cache = MagicMock()
    rate_cache.get_rate.side_effect = lambda source, target: rates.get(
        (source, target)
    )
    return rate_cache


def test_execute_sorts_by_percent_used_and_totals_in_display_currency() -> None:
    """Rows should be ordered by usage and totals converted for display."""
    repository = _build_repository(
        budgets=[
            Budget("b1", "food", Decimal("100"), "USD"),
            Budget("b2", "rent", Decimal("1000"), "USD"),
            Budget("b3", "travel", Decimal("200"), "EUR"),
        ],
        transactions=[
            _expense("food", "90"),
            _expense("rent", "1100"),
            _expense("travel", "50", currency="EUR"),
        ],
    )
    use_case = GetBudgetVsActualUseCase(
        repository,
        _build_rates({("EUR", "USD"): Decimal("1.1")}),
        logger=MagicMock(),
    )

    result = use_case.execute("usd", START, END)

    assert [item.budget.id for item in result.comparisons] == ["b2", "b1", "b3"]
    assert [item.status for item in result.comparisons] == [
        BudgetStatus.OVER_BUDGET,
        BudgetStatus.NEAR_LIMIT,
        BudgetStatus.ON_TRACK,
    ]
    assert result.comparisons[0].percent_used == Decimal("110")
    assert result.comparisons[0].difference == Decimal("-100")
    assert result.comparisons[2].actual == Decimal("50")
    assert result.currency_code == "USD"
    assert result.total_budgeted == Decimal("1320.00")
    assert result.total_actual == Decimal("1245.00")
    assert result.total_difference == Decimal("75.00")
    assert result.over_budget_count == 1
    assert result.near_limit_count == 1
    assert result.unconverted_currencies == ()
    repository.fetch_transactions.assert_called_once_with(
        start=START,
        end=END,
        transaction_type=TransactionType.EXPENSE,
    )


def test_execute_keeps_input_order_for_equal_usage() -> None:
    """Budgets with the same usage should keep their stored order."""
    repository = _build_repository(
        budgets=[
            Budget("b1", "food", Decimal("100"), "USD"),
            Budget("b2", "fun", Decimal("0"), "USD"),
            Budget("b3", "gym", Decimal("50"), "USD"),
        ],
        transactions=[_expense("fun", "20")],
    )
    use_case = GetBudgetVsActualUseCase(
        repository,
        _build_rates(),
        logger=MagicMock(),
    )

    result = use_case.execute("USD", START, END)

    assert [item.budget.id for item in result.comparisons] == ["b1", "b2", "b3"]
    assert all(item.percent_used == 0 for item in result.comparisons)


def test_execute_reports_missing_categories_and_rates() -> None:
    """Unknown categories stay None and unconvertible spending is flagged."""
    repository = _build_repository(
        budgets=[
            Budget("b1", "food", Decimal("100"), "USD"),
            Budget("b2", "ski", Decimal("300"), "CHF"),
        ],
        transactions=[
            _expense("food", "40"),
            _expense("food", "500", currency="JPY"),
            _expense("ski", "30", currency="CHF"),
        ],
        categories=[_category("food")],
    )
    use_case = GetBudgetVsActualUseCase(
        repository,
        _build_rates(),
        logger=MagicMock(),
    )

    result = use_case.execute("USD", START, END)

    by_id = {item.budget.id: item for item in result.comparisons}
    assert by_id["b1"].actual == Decimal("40")
    assert by_id["b1"].unconverted_currencies == ("JPY",)
    assert by_id["b2"].category is None
    assert by_id["b2"].actual == Decimal("30")
    assert result.total_budgeted == Decimal("100")
    assert result.total_actual == Decimal("40")
    assert result.unconverted_currencies == ("CHF", "JPY")


def test_execute_rejects_inverted_window() -> None:
    """An end before the start should be refused."""
    use_case = GetBudgetVsActualUseCase(
        _build_repository([], []),
        _build_rates(),
        logger=MagicMock(),
    )

    with pytest.raises(ValueError):
        use_case.execute("USD", END, START)
