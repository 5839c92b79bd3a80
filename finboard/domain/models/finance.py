"""Domain models for derived dashboard views."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from finboard.domain.models.ledger import Budget, Category, Goal, InvoiceStatus
from finboard.utils.decimal_utils import round_half_up

T = TypeVar("T")


class LedgerScope(str, Enum):
    """Which side of the ledger a viewer is looking at."""

    ALL = "all"
    BUSINESS = "business"
    PERSONAL = "personal"

    def includes(self, is_business: bool) -> bool:
        if self is LedgerScope.BUSINESS:
            return is_business
        if self is LedgerScope.PERSONAL:
            return not is_business
        return True


@dataclass(frozen=True)
class ViewerContext:
    """Per-request viewer preferences passed into aggregations.

    Attributes:
        display_currency: Currency every figure is normalized into.
        scope: Business/personal filter applied to accounts and transactions.
    """

    display_currency: str
    scope: LedgerScope = LedgerScope.ALL


@dataclass(frozen=True)
class FlowTotals:
    """Income and expense totals for a window."""

    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expenses."""
        return self.income - self.expenses


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures.

    Attributes:
        asset_total: Sum of asset balances.
        liability_total: Sum of amounts owed on liability accounts.
        net_worth: Assets minus liabilities.
        currency_code: Currency the totals are expressed in.
    """

    asset_total: Decimal
    liability_total: Decimal
    net_worth: Decimal
    currency_code: str


@dataclass(frozen=True)
class DashboardStats:
    """Point-in-time dashboard metrics in the display currency.

    ``pending_cc_balance`` is already part of ``net_worth`` and must not be
    added to it again.
    """

    currency_code: str
    net_worth: Decimal
    asset_total: Decimal
    liability_total: Decimal
    monthly_income: Decimal
    monthly_expenses: Decimal
    pending_cc_balance: Decimal
    pending_invoices: int
    pending_invoice_amount: Decimal
    total_accounts: int
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def monthly_savings(self) -> Decimal:
        return self.monthly_income - self.monthly_expenses

    @property
    def savings_rate(self) -> int | None:
        """Return savings as a rounded percent of income, or None."""
        if self.monthly_income <= 0:
            return None
        return round_half_up(
            self.monthly_savings / self.monthly_income * Decimal("100")
        )

    @property
    def is_partial(self) -> bool:
        return bool(self.unconverted_currencies)


@dataclass(frozen=True)
class MonthlyTrend:
    """Income and expenses for one calendar month."""

    month: str
    year: int
    month_start: datetime
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class BudgetStatus(str, Enum):
    ON_TRACK = "on_track"
    NEAR_LIMIT = "near_limit"
    OVER_BUDGET = "over_budget"


@dataclass(frozen=True)
class BudgetProgress:
    """Active budget enriched with spending for its current period.

    ``unconverted_currencies`` lists expense currencies that had no rate
    into the budget currency; their amounts are missing from ``spent``.
    """

    budget: Budget
    category: Category | None
    spent: Decimal
    percent_used: Decimal
    status: BudgetStatus
    period_start: datetime
    period_end: datetime
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def remaining(self) -> Decimal:
        return self.budget.amount - self.spent

    @property
    def is_partial(self) -> bool:
        return bool(self.unconverted_currencies)


@dataclass(frozen=True)
class BudgetComparison:
    """Budget limit against actual spending over an arbitrary window."""

    budget: Budget
    category: Category | None
    actual: Decimal
    percent_used: Decimal
    status: BudgetStatus
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def budgeted(self) -> Decimal:
        return self.budget.amount

    @property
    def difference(self) -> Decimal:
        return self.budget.amount - self.actual


@dataclass(frozen=True)
class BudgetVsActual:
    """Comparisons sorted by percent used, with display-currency totals."""

    currency_code: str
    comparisons: list[BudgetComparison]
    total_budgeted: Decimal
    total_actual: Decimal
    over_budget_count: int
    near_limit_count: int
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def total_difference(self) -> Decimal:
        return self.total_budgeted - self.total_actual


@dataclass(frozen=True)
class BudgetSummary:
    """Portfolio totals across active budgets."""

    currency_code: str
    total_budgets: int
    total_budgeted: Decimal
    monthly_budgeted: Decimal
    total_spent: Decimal
    percent_used: Decimal
    on_track: int
    near_limit: int
    over_budget: int
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def remaining(self) -> Decimal:
        return self.total_budgeted - self.total_spent


@dataclass(frozen=True)
class GoalProgress:
    """Savings goal enriched with progress figures.

    Attributes:
        goal: Underlying goal record.
        percent_complete: Unclamped progress, None when the target is not
            positive.
        days_remaining: Whole days until the target date, if any.
        is_overdue: True when the target date has passed.
        monthly_needed: Contribution per 30 days needed to hit the target.
    """

    goal: Goal
    percent_complete: Decimal | None
    days_remaining: int | None = None
    is_overdue: bool = False
    monthly_needed: Decimal | None = None

    @property
    def remaining(self) -> Decimal:
        return self.goal.target_amount - self.goal.current_amount

    @property
    def display_percent(self) -> Decimal:
        """Return progress clamped to [0, 100] for progress bars."""
        if self.percent_complete is None:
            return Decimal("0")
        return min(max(self.percent_complete, Decimal("0")), Decimal("100"))

    @property
    def is_reached(self) -> bool:
        return (
            self.goal.target_amount > 0
            and self.goal.current_amount >= self.goal.target_amount
        )


@dataclass(frozen=True)
class GoalSummary:
    """Pooled progress across all goals."""

    currency_code: str
    total_goals: int
    active_goals: int
    completed_goals: int
    total_target: Decimal
    total_saved: Decimal
    percent_complete: Decimal | None
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def total_remaining(self) -> Decimal:
        return self.total_target - self.total_saved


@dataclass(frozen=True)
class TopSelection(Generic[T]):
    """Leading items of a ranked list and the count left out."""

    items: list[T] = field(default_factory=list)
    remainder: int = 0


@dataclass(frozen=True)
class CategoryAmount:
    """Total for one category within a window."""

    category_id: str | None
    name: str
    color: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class BusinessPersonalSplit:
    business: FlowTotals
    personal: FlowTotals
    currency_code: str


class InsightKind(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class HealthInsight:
    kind: InsightKind
    message: str


@dataclass(frozen=True)
class FinancialHealth:
    """Health score and 30-day comparisons for the dashboard.

    Attributes:
        currency_code: Currency amounts are expressed in.
        health_score: Score clamped to [0, 100].
        savings_rate: Savings percent of the last 30 days, 0 without income.
        previous_savings_rate: Same figure for the 30 days before.
        net_worth: Converted net worth of the scoped accounts.
        recent: Flows of the last 30 days.
        previous: Flows of the 30 days before.
        income_change: Percent change in income, 0 without prior income.
        expense_change: Percent change in expenses, 0 without prior expenses.
        insights: Messages derived from the figures above.
        active_goals: Number of goals not completed.
        active_budgets: Number of active budgets.
        unconverted_currencies: Currencies left out for lack of a rate.
    """

    currency_code: str
    health_score: int
    savings_rate: Decimal
    previous_savings_rate: Decimal
    net_worth: Decimal
    recent: FlowTotals
    previous: FlowTotals
    income_change: Decimal
    expense_change: Decimal
    insights: list[HealthInsight] = field(default_factory=list)
    active_goals: int = 0
    active_budgets: int = 0
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def savings_rate_change(self) -> Decimal:
        return self.savings_rate - self.previous_savings_rate


@dataclass(frozen=True)
class InvoiceStats:
    """Invoice counts per effective status and converted amounts."""

    currency_code: str
    total: int
    counts: dict[InvoiceStatus, int]
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    unconverted_currencies: tuple[str, ...] = ()


__all__ = [
    "LedgerScope",
    "ViewerContext",
    "FlowTotals",
    "NetWorthSummary",
    "DashboardStats",
    "MonthlyTrend",
    "BudgetStatus",
    "BudgetProgress",
    "BudgetComparison",
    "BudgetVsActual",
    "BudgetSummary",
    "GoalProgress",
    "GoalSummary",
    "TopSelection",
    "CategoryAmount",
    "BusinessPersonalSplit",
    "InsightKind",
    "HealthInsight",
    "FinancialHealth",
    "InvoiceStats",
]
