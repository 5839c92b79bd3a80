"""Application ports for ledger data access."""

from datetime import datetime
from typing import Protocol

from finboard.domain.models import (
    Account,
    Budget,
    Category,
    Goal,
    Invoice,
    Transaction,
    TransactionType,
)


class LedgerRepositoryPort(Protocol):
    """Port exposing read access to ledger records."""

    def fetch_accounts(self) -> list[Account]:
        """Return all accounts."""

    def fetch_transactions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        category_id: str | None = None,
        transaction_type: TransactionType | None = None,
    ) -> list[Transaction]:
        """Return transactions with ``start <= occurred_at < end``."""

    def fetch_categories(self) -> list[Category]:
        """Return all categories."""

    def fetch_budgets(self, active_only: bool = True) -> list[Budget]:
        """Return budgets, only active ones by default."""

    def fetch_goals(self, include_completed: bool = True) -> list[Goal]:
        """Return goals, including completed ones by default."""

    def fetch_invoices(self) -> list[Invoice]:
        """Return all invoices."""


class CategoriesStorePort(Protocol):
    """Port exposing the category writes needed for default seeding."""

    def fetch_categories(self) -> list[Category]:
        """Return all categories."""

    def insert_categories(self, categories: list[Category]) -> int:
        """Insert categories and return how many were written."""


__all__ = ["LedgerRepositoryPort", "CategoriesStorePort"]
