"""Tests for the SqlAlchemyLedgerRepository."""

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from finboard.domain.models import (
    AccountType,
    BudgetPeriod,
    Category,
    CategoryType,
    InvoiceStatus,
    TransactionType,
)
from finboard.infrastructure.ledger_repository import SqlAlchemyLedgerRepository


class _FakeResult:
    def __init__(self, rows: list[SimpleNamespace]) -> None:
        self._rows = rows

    def all(self):
        return self._rows


def _build_db_port(results: list[list[SimpleNamespace]]) -> tuple[MagicMock, MagicMock]:
    engine = MagicMock()
    conn = MagicMock()
    context = MagicMock()
    context.__enter__.return_value = conn
    engine.connect.return_value = context
    engine.begin.return_value = context
    conn.execute.side_effect = [_FakeResult(rows) for rows in results]

    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    return db_port, conn


def test_fetch_accounts_maps_rows_and_skips_unknown_types() -> None:
    """Account rows should map to domain objects; bad types are skipped."""
    rows = [
        SimpleNamespace(
            id=1,
            name="Checking",
            account_type="bank",
            balance=1000.5,
            currency="USD",
            is_business=0,
        ),
        SimpleNamespace(
            id=2,
            name="Mystery",
            account_type="crypto",
            balance=1,
            currency="USD",
            is_business=0,
        ),
    ]
    db_port, _ = _build_db_port([rows])
    logger = MagicMock()
    repository = SqlAlchemyLedgerRepository(db_port, logger=logger)

    accounts = repository.fetch_accounts()

    assert len(accounts) == 1
    assert accounts[0].id == "1"
    assert accounts[0].account_type is AccountType.BANK
    assert accounts[0].balance == Decimal("1000.5")
    assert accounts[0].is_business is False
    logger.warning.assert_called_once()


def test_fetch_transactions_builds_filters_and_params() -> None:
    """Optional filters should add clauses and bound parameters."""
    rows = [
        SimpleNamespace(
            id="t1",
            account_id="a1",
            to_account_id=None,
            category_id="c1",
            amount="12.30",
            currency="EUR",
            transaction_type="expense",
            occurred_at="2026-10-05T10:00:00",
            is_business=1,
            description=None,
        )
    ]
    db_port, conn = _build_db_port([rows])
    repository = SqlAlchemyLedgerRepository(db_port, logger=MagicMock())
    start = datetime(2026, 10, 1)
    end = datetime(2026, 11, 1)

    transactions = repository.fetch_transactions(
        start=start,
        end=end,
        category_id="c1",
        transaction_type=TransactionType.EXPENSE,
    )

    query, params = conn.execute.call_args.args
    sql = str(query)
    assert "occurred_at >= :start" in sql
    assert "occurred_at < :end" in sql
    assert "category_id = :category_id" in sql
    assert params == {
        "start": start,
        "end": end,
        "category_id": "c1",
        "transaction_type": "expense",
    }
    assert transactions[0].occurred_at == datetime(2026, 10, 5, 10, 0)
    assert transactions[0].amount == Decimal("12.30")
    assert transactions[0].is_business is True
    assert transactions[0].description == ""


def test_build_transactions_query_without_filters() -> None:
    """No filters should produce an unbounded ordered query."""
    query, params = SqlAlchemyLedgerRepository._build_transactions_query(
        None,
        None,
        None,
        None,
    )

    assert params == {}
    assert ":start" not in str(query)
    assert "ORDER BY occurred_at, id" in str(query)


def test_fetch_budgets_filters_active_and_parses_dates() -> None:
    """Active budgets should be requested with the is_active flag."""
    rows = [
        SimpleNamespace(
            id="b1",
            category_id="c1",
            amount=Decimal("300"),
            currency="USD",
            period="yearly",
            start_date=date(2026, 4, 1),
            is_active=True,
        )
    ]
    db_port, conn = _build_db_port([rows])
    repository = SqlAlchemyLedgerRepository(db_port, logger=MagicMock())

    budgets = repository.fetch_budgets()

    _, params = conn.execute.call_args.args
    assert params == {"is_active": True}
    assert budgets[0].period is BudgetPeriod.YEARLY
    assert budgets[0].start_date == datetime(2026, 4, 1)


def test_fetch_goals_and_invoices_map_rows() -> None:
    """Goal and invoice rows should map to domain objects."""
    goal_rows = [
        SimpleNamespace(
            id="g1",
            name="Emergency fund",
            target_amount=10000,
            current_amount=2500,
            currency="USD",
            color=None,
            is_completed=False,
            target_date=None,
        )
    ]
    invoice_rows = [
        SimpleNamespace(
            id="i1",
            client_id="c1",
            invoice_number="INV-001",
            status="overdue",
            total="450.00",
            currency="USD",
            due_date="2026-11-01",
        )
    ]
    db_port, conn = _build_db_port([goal_rows, invoice_rows])
    repository = SqlAlchemyLedgerRepository(db_port, logger=MagicMock())

    goals = repository.fetch_goals(include_completed=False)
    invoices = repository.fetch_invoices()

    assert goals[0].color == "#6366f1"
    assert goals[0].target_amount == Decimal("10000")
    assert invoices[0].status is InvoiceStatus.OVERDUE
    assert invoices[0].total == Decimal("450.00")
    assert invoices[0].due_date == datetime(2026, 11, 1)
    assert conn.execute.call_args_list[0].args[1] == {"is_completed": False}


def test_insert_categories_runs_in_one_transaction() -> None:
    """Inserts should share a single begin() block."""
    db_port, conn = _build_db_port([[]])
    repository = SqlAlchemyLedgerRepository(db_port, logger=MagicMock())
    categories = [
        Category("c1", "Salary", CategoryType.INCOME, "#6366f1", "Wallet", True),
        Category("c2", "Rent", CategoryType.EXPENSE, "#705845"),
    ]

    inserted = repository.insert_categories(categories)

    assert inserted == 2
    db_port.get_ledger_engine.return_value.begin.assert_called_once()
    _, params = conn.execute.call_args.args
    assert [row["category_type"] for row in params] == ["income", "expense"]
    assert params[0]["is_default"] is True


def test_insert_categories_with_nothing_to_insert() -> None:
    """An empty list should not open a connection."""
    db_port, _ = _build_db_port([])
    repository = SqlAlchemyLedgerRepository(db_port, logger=MagicMock())

    assert repository.insert_categories([]) == 0
    db_port.get_ledger_engine.assert_not_called()
