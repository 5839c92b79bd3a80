"""Tests for the ExchangeRateCache and currency conversion helpers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finboard.application.ports.exchange_rates import RateFetchError
from finboard.application.use_cases.exchange_rates import (
    DEFAULT_TTL_MS,
    ExchangeRateCache,
    cache_key,
    convert_amount,
)
from finboard.application.use_cases.fx_utils import CurrencyConverter
from finboard.domain.models import ExchangeRateCacheEntry
from finboard.infrastructure.rate_cache_store import InMemoryRateCacheStore


class _Clock:
    def __init__(self, now_ms: int) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


def _build_cache(source=None, store=None, clock=None):
    source = source or MagicMock()
    store = store if store is not None else InMemoryRateCacheStore()
    clock = clock or _Clock(1_000_000)
    cache = ExchangeRateCache(
        rate_source=source,
        cache_store=store,
        clock=clock,
        logger=MagicMock(),
    )
    return cache, source, store, clock


def test_same_currency_rate_is_one_without_store_access() -> None:
    """Identical codes should short-circuit before touching the store."""
    store = MagicMock()
    cache, source, _, _ = _build_cache(store=store)

    assert cache.get_rate("usd", " USD ") == Decimal("1")
    store.get.assert_not_called()
    source.fetch_latest.assert_not_called()


def test_get_rates_fetches_and_stores_on_miss() -> None:
    """A miss should fetch once and store the entry under the base key."""
    cache, source, store, clock = _build_cache()
    source.fetch_latest.return_value = {"EUR": Decimal("0.9")}

    rates = cache.get_rates("usd")

    assert rates == {"EUR": Decimal("0.9")}
    source.fetch_latest.assert_called_once_with("USD")
    entry = store.get(cache_key("USD"))
    assert entry.base == "USD"
    assert entry.timestamp == clock.now_ms


def test_fresh_entry_is_served_until_ttl_then_refetched_once() -> None:
    """Entries should be reused inside the TTL and refreshed at expiry."""
    cache, source, _, clock = _build_cache()
    source.fetch_latest.return_value = {"EUR": Decimal("0.9")}
    start = clock.now_ms

    cache.get_rates("USD")
    clock.now_ms = start + DEFAULT_TTL_MS - 1
    cache.get_rates("USD")
    assert source.fetch_latest.call_count == 1

    source.fetch_latest.return_value = {"EUR": Decimal("0.95")}
    clock.now_ms = start + DEFAULT_TTL_MS
    assert cache.get_rates("USD") == {"EUR": Decimal("0.95")}
    assert source.fetch_latest.call_count == 2


def test_failed_fetch_returns_none_and_leaves_entry_untouched() -> None:
    """A failed refresh should not remove, rewrite, or serve a stale entry."""
    store = InMemoryRateCacheStore()
    stale = ExchangeRateCacheEntry(
        base="USD",
        rates={"EUR": Decimal("0.8")},
        timestamp=0,
    )
    store.set(cache_key("USD"), stale)
    source = MagicMock()
    source.fetch_latest.side_effect = RateFetchError("offline")
    cache, _, _, _ = _build_cache(
        source=source,
        store=store,
        clock=_Clock(DEFAULT_TTL_MS * 2),
    )

    assert cache.get_rates("USD") is None
    assert cache.get_rate("USD", "EUR") is None
    assert store.get(cache_key("USD")) is stale


def test_get_rate_is_none_for_missing_or_zero_rates() -> None:
    """Unknown targets and zero rates should not be usable."""
    cache, source, _, _ = _build_cache()
    source.fetch_latest.return_value = {"EUR": Decimal("0"), "GBP": Decimal("0.8")}

    assert cache.get_rate("USD", "EUR") is None
    assert cache.get_rate("USD", "JPY") is None
    assert cache.get_rate("USD", "GBP") == Decimal("0.8")
    assert cache.get_rate("", "GBP") is None


@pytest.mark.parametrize(
    ("amount", "rate", "expected"),
    [
        ("10.005", "1", "10.01"),
        ("-10.005", "1", "-10.01"),
        ("100", "0.9", "90.00"),
        ("12.344", "1", "12.34"),
    ],
)
def test_convert_rounds_half_away_from_zero(amount, rate, expected) -> None:
    """Conversion should round to cents, half away from zero."""
    result = convert_amount(Decimal(amount), Decimal(rate))

    assert result == Decimal(expected)
    assert result.as_tuple().exponent == -2
    assert ExchangeRateCache.convert(Decimal(amount), Decimal(rate)) == result


@pytest.mark.parametrize(
    ("amount", "rate", "expected"),
    [
        (10.005, 1, "10.01"),
        (-10.005, 1, "-10.01"),
        (19.99, 0.5, "10.00"),
    ],
)
def test_convert_accepts_plain_numbers(amount, rate, expected) -> None:
    """Float and int inputs should round from their shortest repr."""
    assert convert_amount(amount, rate) == Decimal(expected)
    assert ExchangeRateCache.convert(amount, rate) == Decimal(expected)


def test_converter_returns_same_currency_amount_unchanged() -> None:
    """Amounts already in the target currency should not be rounded."""
    provider = MagicMock()
    convert = CurrencyConverter(provider, "usd", MagicMock())

    assert convert(Decimal("1.005"), "USD") == Decimal("1.005")
    provider.get_rate.assert_not_called()


def test_converter_looks_up_each_rate_once_and_records_misses() -> None:
    """Rates should be memoized and missing currencies reported."""
    provider = MagicMock()
    provider.get_rate.side_effect = lambda source, target: (
        Decimal("1.1") if source == "EUR" else None
    )
    logger = MagicMock()
    convert = CurrencyConverter(provider, "USD", logger)

    assert convert(Decimal("10"), "EUR") == Decimal("11.00")
    assert convert(Decimal("20"), "eur") == Decimal("22.00")
    assert convert(Decimal("5"), "INR") is None
    assert convert(Decimal("6"), "INR") is None

    assert provider.get_rate.call_count == 2
    assert convert.unconverted == ("INR",)
    logger.warning.assert_called_once()
