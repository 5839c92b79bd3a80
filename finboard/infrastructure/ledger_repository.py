"""SQLAlchemy-backed repository for ledger records."""

from datetime import date, datetime

from sqlalchemy import DateTime, bindparam, text

from finboard.application.ports.database import DatabaseEnginePort
from finboard.application.ports.ledger_repository import (
    CategoriesStorePort,
    LedgerRepositoryPort,
)
from finboard.domain.models import (
    Account,
    AccountType,
    Budget,
    BudgetPeriod,
    Category,
    CategoryType,
    Goal,
    Invoice,
    InvoiceStatus,
    Transaction,
    TransactionType,
)
from finboard.infrastructure.logging.logger import get_app_logger
from finboard.utils.decimal_utils import coerce_decimal


def _coerce_datetime(value) -> datetime | None:
    """Normalize timestamps returned by different drivers."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


class SqlAlchemyLedgerRepository(LedgerRepositoryPort, CategoriesStorePort):
    """Repository backed by the ledger database.

    Rows with an unknown enumerated value are skipped with a warning so a
    single bad record does not break the dashboard.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_accounts(self) -> list[Account]:
        query = text(
            """
            SELECT id, name, account_type, balance, currency, is_business
            FROM accounts
            ORDER BY created_at, id
            """
        )
        accounts = []
        for row in self._fetch_all(query, {}):
            account_type = self._parse(AccountType, row.account_type, row.id)
            if account_type is None:
                continue
            accounts.append(
                Account(
                    id=str(row.id),
                    name=row.name,
                    account_type=account_type,
                    balance=coerce_decimal(row.balance),
                    currency=row.currency,
                    is_business=bool(row.is_business),
                )
            )
        return accounts

    def fetch_transactions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        category_id: str | None = None,
        transaction_type: TransactionType | None = None,
    ) -> list[Transaction]:
        query, params = self._build_transactions_query(
            start,
            end,
            category_id,
            transaction_type,
        )
        transactions = []
        for row in self._fetch_all(query, params):
            parsed_type = self._parse(
                TransactionType,
                row.transaction_type,
                row.id,
            )
            if parsed_type is None:
                continue
            transactions.append(
                Transaction(
                    id=str(row.id),
                    account_id=str(row.account_id),
                    category_id=(
                        str(row.category_id) if row.category_id else None
                    ),
                    amount=coerce_decimal(row.amount),
                    currency=row.currency,
                    transaction_type=parsed_type,
                    occurred_at=_coerce_datetime(row.occurred_at),
                    is_business=bool(row.is_business),
                    to_account_id=(
                        str(row.to_account_id) if row.to_account_id else None
                    ),
                    description=row.description or "",
                )
            )
        return transactions

    def fetch_categories(self) -> list[Category]:
        query = text(
            """
            SELECT id, name, category_type, color, icon, is_default
            FROM categories
            ORDER BY created_at, id
            """
        )
        categories = []
        for row in self._fetch_all(query, {}):
            category_type = self._parse(CategoryType, row.category_type, row.id)
            if category_type is None:
                continue
            categories.append(
                Category(
                    id=str(row.id),
                    name=row.name,
                    category_type=category_type,
                    color=row.color,
                    icon=row.icon or "",
                    is_default=bool(row.is_default),
                )
            )
        return categories

    def fetch_budgets(self, active_only: bool = True) -> list[Budget]:
        sql = """
            SELECT id, category_id, amount, currency, period, start_date,
                   is_active
            FROM budgets
        """
        if active_only:
            sql += " WHERE is_active = :is_active"
        sql += " ORDER BY created_at, id"
        params = {"is_active": True} if active_only else {}
        budgets = []
        for row in self._fetch_all(text(sql), params):
            period = self._parse(BudgetPeriod, row.period, row.id)
            if period is None:
                continue
            budgets.append(
                Budget(
                    id=str(row.id),
                    category_id=str(row.category_id),
                    amount=coerce_decimal(row.amount),
                    currency=row.currency,
                    period=period,
                    start_date=_coerce_datetime(row.start_date),
                    is_active=bool(row.is_active),
                )
            )
        return budgets

    def fetch_goals(self, include_completed: bool = True) -> list[Goal]:
        sql = """
            SELECT id, name, target_amount, current_amount, currency, color,
                   is_completed, target_date
            FROM goals
        """
        if not include_completed:
            sql += " WHERE is_completed = :is_completed"
        sql += " ORDER BY created_at, id"
        params = {} if include_completed else {"is_completed": False}
        return [
            Goal(
                id=str(row.id),
                name=row.name,
                target_amount=coerce_decimal(row.target_amount),
                current_amount=coerce_decimal(row.current_amount),
                currency=row.currency,
                color=row.color or "#6366f1",
                is_completed=bool(row.is_completed),
                target_date=_coerce_datetime(row.target_date),
            )
            for row in self._fetch_all(text(sql), params)
        ]

    def fetch_invoices(self) -> list[Invoice]:
        query = text(
            """
            SELECT id, client_id, invoice_number, status, total, currency,
                   due_date
            FROM invoices
            ORDER BY created_at, id
            """
        )
        invoices = []
        for row in self._fetch_all(query, {}):
            status = self._parse(InvoiceStatus, row.status, row.id)
            if status is None:
                continue
            invoices.append(
                Invoice(
                    id=str(row.id),
                    client_id=str(row.client_id),
                    invoice_number=row.invoice_number,
                    status=status,
                    total=coerce_decimal(row.total),
                    currency=row.currency,
                    due_date=_coerce_datetime(row.due_date),
                )
            )
        return invoices

    def insert_categories(self, categories: list[Category]) -> int:
        """Insert categories in a single transaction.

        Args:
            categories: Categories to insert.

        Returns:
            int: Number of inserted rows.
        """
        if not categories:
            return 0
        query = text(
            """
            INSERT INTO categories
                (id, name, category_type, color, icon, is_default, created_at)
            VALUES
                (:id, :name, :category_type, :color, :icon, :is_default,
                 :created_at)
            """
        ).bindparams(bindparam("created_at", type_=DateTime()))
        created_at = datetime.now()
        params = [
            {
                "id": category.id,
                "name": category.name,
                "category_type": category.category_type.value,
                "color": category.color,
                "icon": category.icon,
                "is_default": category.is_default,
                "created_at": created_at,
            }
            for category in categories
        ]
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(query, params)
        return len(params)

    def _fetch_all(self, query, params: dict):
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            return conn.execute(query, params).all()

    def _parse(self, enum_cls, raw, record_id):
        try:
            return enum_cls(raw)
        except ValueError:
            self._logger.warning(
                f"Skipping record {record_id} with unknown "
                f"{enum_cls.__name__} '{raw}'"
            )
            return None

    @staticmethod
    def _build_transactions_query(
        start: datetime | None,
        end: datetime | None,
        category_id: str | None,
        transaction_type: TransactionType | None,
    ):
        sql = """
        SELECT id, account_id, to_account_id, category_id, amount, currency,
               transaction_type, occurred_at, is_business, description
        FROM transactions
        WHERE 1=1
        """
        params: dict[str, object] = {}
        datetime_params = []
        if start is not None:
            sql += " AND occurred_at >= :start"
            params["start"] = start
            datetime_params.append(bindparam("start", type_=DateTime()))
        if end is not None:
            sql += " AND occurred_at < :end"
            params["end"] = end
            datetime_params.append(bindparam("end", type_=DateTime()))
        if category_id is not None:
            sql += " AND category_id = :category_id"
            params["category_id"] = category_id
        if transaction_type is not None:
            sql += " AND transaction_type = :transaction_type"
            params["transaction_type"] = TransactionType(transaction_type).value
        sql += " ORDER BY occurred_at, id"
        query = text(sql)
        if datetime_params:
            query = query.bindparams(*datetime_params)
        return query, params


__all__ = ["SqlAlchemyLedgerRepository"]
