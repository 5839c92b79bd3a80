"""Ports for fetching and caching exchange rates."""

from decimal import Decimal
from typing import Protocol

from finboard.domain.models import ExchangeRateCacheEntry


class RateFetchError(RuntimeError):
    """Raised when the external rate source cannot provide rates."""


class ExchangeRateSourcePort(Protocol):
    """Port for the external exchange-rate provider."""

    def fetch_latest(self, base: str) -> dict[str, Decimal]:
        """Return the latest rates relative to ``base``.

        Raises:
            RateFetchError: On transport errors, timeouts, non-success
                responses, or malformed bodies.
        """


class RateCacheStorePort(Protocol):
    """Port for the keyed store holding cached rate entries.

    Implementations return None for absent or unreadable entries.
    """

    def get(self, key: str) -> ExchangeRateCacheEntry | None:
        """Return the entry stored under ``key``."""

    def set(self, key: str, entry: ExchangeRateCacheEntry) -> None:
        """Store ``entry`` under ``key``, replacing any previous value."""


__all__ = [
    "RateFetchError",
    "ExchangeRateSourcePort",
    "RateCacheStorePort",
]
