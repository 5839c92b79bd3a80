"""Composition root for wiring infrastructure adapters."""

from finboard.application.ports.database import DatabaseEnginePort
from finboard.application.ports.exchange_rates import RateCacheStorePort
from finboard.application.ports.ledger_repository import LedgerRepositoryPort
from finboard.application.use_cases.exchange_rates import ExchangeRateCache
from finboard.application.use_cases.get_budget_progress import (
    GetBudgetSummaryUseCase,
    ListActiveBudgetsUseCase,
)
from finboard.application.use_cases.get_budget_vs_actual import (
    GetBudgetVsActualUseCase,
)
from finboard.application.use_cases.get_business_personal_split import (
    GetBusinessPersonalSplitUseCase,
)
from finboard.application.use_cases.get_category_breakdown import (
    GetCategoryBreakdownUseCase,
)
from finboard.application.use_cases.get_dashboard_stats import (
    GetDashboardStatsUseCase,
)
from finboard.application.use_cases.get_financial_health import (
    GetFinancialHealthUseCase,
)
from finboard.application.use_cases.get_goal_progress import (
    GetGoalSummaryUseCase,
    ListActiveGoalsUseCase,
)
from finboard.application.use_cases.get_invoice_stats import (
    GetInvoiceStatsUseCase,
)
from finboard.application.use_cases.get_monthly_trends import (
    GetMonthlyTrendsUseCase,
)
from finboard.application.use_cases.seed_default_categories import (
    SeedDefaultCategoriesUseCase,
)
from finboard.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finboard.infrastructure.exchange_rate_client import (
    RequestsExchangeRateClient,
)
from finboard.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from finboard.infrastructure.logging.logger import get_app_logger
from finboard.infrastructure.rate_cache_store import (
    InMemoryRateCacheStore,
    JsonFileRateCacheStore,
)
from finboard.infrastructure.settings import FinboardSettings

_memory_rate_store: InMemoryRateCacheStore | None = None


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyLedgerRepository:
    """Return the ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db, logger=get_app_logger())


def build_rate_cache_store(
    settings: FinboardSettings | None = None,
) -> RateCacheStorePort:
    """Return the configured rate cache store.

    The in-memory store is shared for the lifetime of the process.
    """
    global _memory_rate_store
    resolved = settings or FinboardSettings.from_env()
    if resolved.rates_cache_dir is not None:
        return JsonFileRateCacheStore(
            resolved.rates_cache_dir,
            logger=get_app_logger(),
        )
    if _memory_rate_store is None:
        _memory_rate_store = InMemoryRateCacheStore()
    return _memory_rate_store


def build_exchange_rate_cache(
    settings: FinboardSettings | None = None,
) -> ExchangeRateCache:
    """Return the exchange-rate cache backed by the HTTP provider."""
    resolved = settings or FinboardSettings.from_env()
    return ExchangeRateCache(
        rate_source=RequestsExchangeRateClient(
            resolved.rates_api_url,
            timeout=resolved.rates_timeout,
        ),
        cache_store=build_rate_cache_store(resolved),
        ttl_ms=resolved.rates_ttl_ms,
        logger=get_app_logger(),
    )


def build_dashboard_stats_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetDashboardStatsUseCase:
    return GetDashboardStatsUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_monthly_trends_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetMonthlyTrendsUseCase:
    return GetMonthlyTrendsUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_list_active_budgets_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> ListActiveBudgetsUseCase:
    return ListActiveBudgetsUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_budget_summary_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetBudgetSummaryUseCase:
    return GetBudgetSummaryUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_list_active_goals_use_case(
    repository: LedgerRepositoryPort | None = None,
) -> ListActiveGoalsUseCase:
    return ListActiveGoalsUseCase(
        repository or build_ledger_repository(),
        logger=get_app_logger(),
    )


def build_goal_summary_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetGoalSummaryUseCase:
    return GetGoalSummaryUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_category_breakdown_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetCategoryBreakdownUseCase:
    return GetCategoryBreakdownUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_business_personal_split_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetBusinessPersonalSplitUseCase:
    return GetBusinessPersonalSplitUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_budget_vs_actual_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetBudgetVsActualUseCase:
    return GetBudgetVsActualUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_financial_health_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetFinancialHealthUseCase:
    return GetFinancialHealthUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_invoice_stats_use_case(
    repository: LedgerRepositoryPort | None = None,
    rate_cache: ExchangeRateCache | None = None,
) -> GetInvoiceStatsUseCase:
    return GetInvoiceStatsUseCase(
        repository or build_ledger_repository(),
        rate_cache or build_exchange_rate_cache(),
        logger=get_app_logger(),
    )


def build_seed_categories_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> SeedDefaultCategoriesUseCase:
    return SeedDefaultCategoriesUseCase(
        build_ledger_repository(db_port),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_rate_cache_store",
    "build_exchange_rate_cache",
    "build_dashboard_stats_use_case",
    "build_monthly_trends_use_case",
    "build_list_active_budgets_use_case",
    "build_budget_summary_use_case",
    "build_list_active_goals_use_case",
    "build_goal_summary_use_case",
    "build_category_breakdown_use_case",
    "build_business_personal_split_use_case",
    "build_budget_vs_actual_use_case",
    "build_financial_health_use_case",
    "build_invoice_stats_use_case",
    "build_seed_categories_use_case",
]
