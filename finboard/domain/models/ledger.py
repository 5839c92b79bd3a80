"""Domain models for ledger records read from the document store."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class AccountType(str, Enum):
    """Kinds of accounts a user can hold."""

    BANK = "bank"
    CREDIT_CARD = "credit_card"
    CASH = "cash"
    INVESTMENT = "investment"
    LOAN = "loan"
    ASSET = "asset"


class AccountSide(str, Enum):
    """Balance sheet side an account type contributes to."""

    ASSET = "asset"
    LIABILITY = "liability"


_ACCOUNT_SIDES: dict[AccountType, AccountSide] = {
    AccountType.BANK: AccountSide.ASSET,
    AccountType.CREDIT_CARD: AccountSide.LIABILITY,
    AccountType.CASH: AccountSide.ASSET,
    AccountType.INVESTMENT: AccountSide.ASSET,
    AccountType.LOAN: AccountSide.LIABILITY,
    AccountType.ASSET: AccountSide.ASSET,
}


def account_side(account_type: AccountType) -> AccountSide:
    """Return the balance sheet side for an account type.

    Args:
        account_type: Account type to classify.

    Returns:
        AccountSide: LIABILITY for credit cards and loans, ASSET otherwise.

    Raises:
        ValueError: If the account type has no side mapping.
    """
    try:
        return _ACCOUNT_SIDES[AccountType(account_type)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unmapped account type: {account_type}") from exc


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class BudgetPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states; PAID and VOID are terminal."""

    DRAFT = "draft"
    SENT = "sent"
    PENDING = "pending"
    OVERDUE = "overdue"
    PAID = "paid"
    VOID = "void"

    @property
    def is_terminal(self) -> bool:
        return self in (InvoiceStatus.PAID, InvoiceStatus.VOID)


@dataclass(frozen=True)
class Account:
    """Account with its current balance.

    Attributes:
        id: Store identifier.
        name: Display name.
        account_type: Kind of account.
        balance: Signed balance for assets, amount owed for liabilities.
        currency: ISO currency code of the balance.
        is_business: True for business accounts.
    """

    id: str
    name: str
    account_type: AccountType
    balance: Decimal
    currency: str
    is_business: bool = False

    @property
    def side(self) -> AccountSide:
        return account_side(self.account_type)


@dataclass(frozen=True)
class Transaction:
    """Ledger movement on an account.

    Attributes:
        id: Store identifier.
        account_id: Account the amount is booked on.
        category_id: Optional category reference.
        amount: Amount in ``currency``; aggregates use its magnitude.
        currency: ISO currency code of the amount.
        transaction_type: Income, expense, or transfer.
        occurred_at: When the movement happened.
        is_business: True for business movements.
        to_account_id: Destination account for transfers.
        description: Free-form label.
    """

    id: str
    account_id: str
    category_id: str | None
    amount: Decimal
    currency: str
    transaction_type: TransactionType
    occurred_at: datetime
    is_business: bool = False
    to_account_id: str | None = None
    description: str = ""


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    category_type: CategoryType
    color: str
    icon: str = ""
    is_default: bool = False


@dataclass(frozen=True)
class Budget:
    """Spending limit for a category over a recurring period."""

    id: str
    category_id: str
    amount: Decimal
    currency: str
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: datetime | None = None
    is_active: bool = True


@dataclass(frozen=True)
class Goal:
    """Savings target tracked against an accumulated amount."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    currency: str
    color: str = "#6366f1"
    is_completed: bool = False
    target_date: datetime | None = None


@dataclass(frozen=True)
class Invoice:
    id: str
    client_id: str
    invoice_number: str
    status: InvoiceStatus
    total: Decimal
    currency: str
    due_date: datetime | None = None


__all__ = [
    "AccountType",
    "AccountSide",
    "account_side",
    "TransactionType",
    "CategoryType",
    "BudgetPeriod",
    "InvoiceStatus",
    "Account",
    "Transaction",
    "Category",
    "Budget",
    "Goal",
    "Invoice",
]
