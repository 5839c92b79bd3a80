"""Time-bounded cache of externally fetched exchange rates."""

from decimal import Decimal
import time
from typing import Callable

from finboard.application.ports.exchange_rates import (
    ExchangeRateSourcePort,
    RateCacheStorePort,
    RateFetchError,
)
from finboard.domain.models import ExchangeRateCacheEntry
from finboard.domain.services.normalization import normalize_currency
from finboard.infrastructure.logging.logger import get_app_logger
from finboard.utils.decimal_utils import coerce_decimal, quantize_cents

CACHE_KEY_PREFIX = "exchange_rates_cache"
DEFAULT_TTL_MS = 60 * 60 * 1000


def cache_key(base: str) -> str:
    """Return the store key for a base currency."""
    return f"{CACHE_KEY_PREFIX}_{base}"


def _now_ms() -> int:
    return int(time.time() * 1000)


def convert_amount(amount, rate) -> Decimal:
    """Convert an amount with a multiplicative rate, rounded to cents.

    Rounding is half away from zero, so ``convert_amount(10.005, 1)`` is
    ``10.01`` and ``convert_amount(-10.005, 1)`` is ``-10.01``.

    Args:
        amount: Amount in the source currency.
        rate: Multiplicative rate from source to target currency.

    Returns:
        Decimal: Converted amount with exactly two decimal places.
    """
    return quantize_cents(coerce_decimal(amount) * coerce_decimal(rate))


class ExchangeRateCache:
    """Serve exchange rates from a keyed store, refreshing after a TTL.

    Entries older than the TTL are never served. They are left in place
    until the next successful fetch overwrites them, so a failed refresh
    neither removes nor revives a stale entry. Concurrent misses may fetch
    twice; the last write wins.
    """

    def __init__(
        self,
        rate_source: ExchangeRateSourcePort,
        cache_store: RateCacheStorePort,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] | None = None,
        logger=None,
    ) -> None:
        """Initialize the cache.

        Args:
            rate_source: External provider of latest rates.
            cache_store: Keyed store for cached entries.
            ttl_ms: Maximum entry age in milliseconds.
            clock: Returns the current time in epoch milliseconds.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rate_source = rate_source
        self._cache_store = cache_store
        self._ttl_ms = ttl_ms
        self._clock = clock or _now_ms
        self._logger = logger or get_app_logger()

    def get_rates(self, base: str) -> dict[str, Decimal] | None:
        """Return rates relative to ``base``, or None when unavailable.

        Args:
            base: Base currency code.

        Returns:
            dict[str, Decimal] | None: Rate per target currency.
        """
        base = normalize_currency(base)
        if base is None:
            return None
        key = cache_key(base)
        now = self._clock()
        entry = self._cache_store.get(key)
        if entry is not None and entry.is_fresh(now, self._ttl_ms):
            return entry.rates

        try:
            rates = self._rate_source.fetch_latest(base)
        except RateFetchError as exc:
            self._logger.warning(
                f"Failed to fetch exchange rates for {base}: {exc}"
            )
            return None

        self._cache_store.set(
            key,
            ExchangeRateCacheEntry(base=base, rates=rates, timestamp=now),
        )
        self._logger.info(f"Cached {len(rates)} exchange rates for {base}")
        return rates

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        """Return the rate converting ``from_currency`` into ``to_currency``.

        Args:
            from_currency: Source currency code.
            to_currency: Target currency code.

        Returns:
            Decimal | None: Multiplicative rate, 1 for identical codes, or
            None when no usable rate is available.
        """
        source = normalize_currency(from_currency)
        target = normalize_currency(to_currency)
        if source == target:
            return Decimal("1")
        if source is None or target is None:
            return None
        rates = self.get_rates(source)
        if not rates:
            return None
        rate = rates.get(target)
        if not rate:
            return None
        return rate

    @staticmethod
    def convert(amount, rate) -> Decimal:
        """Convert an amount with a rate; see ``convert_amount``."""
        return convert_amount(amount, rate)


__all__ = [
    "CACHE_KEY_PREFIX",
    "DEFAULT_TTL_MS",
    "ExchangeRateCache",
    "cache_key",
    "convert_amount",
]
