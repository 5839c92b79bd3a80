"""Application ports package."""

from .database import DatabaseEnginePort
from .exchange_rates import (
    ExchangeRateSourcePort,
    RateCacheStorePort,
    RateFetchError,
)
from .ledger_repository import CategoriesStorePort, LedgerRepositoryPort

__all__ = [
    "CategoriesStorePort",
    "DatabaseEnginePort",
    "ExchangeRateSourcePort",
    "LedgerRepositoryPort",
    "RateCacheStorePort",
    "RateFetchError",
]
