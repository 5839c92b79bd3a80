"""Shared helpers for currency conversion in application use cases."""

from decimal import Decimal
from logging import Logger
from typing import Protocol

from finboard.application.use_cases.exchange_rates import convert_amount
from finboard.domain.services.normalization import normalize_currency


class RateProvider(Protocol):
    """Anything able to answer ``get_rate(from, to)``."""

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        """Return a multiplicative rate or None."""


class CurrencyConverter:
    """Convert amounts into one target currency for a single computation.

    Rates are looked up once per source currency. Amounts whose rate is
    unavailable convert to None and their currency is recorded in
    ``unconverted`` so the caller can flag the result as partial.
    """

    def __init__(
        self,
        rate_provider: RateProvider,
        target_currency: str,
        logger: Logger,
    ) -> None:
        """Initialize the converter.

        Args:
            rate_provider: Source of exchange rates.
            target_currency: Currency amounts are converted into.
            logger: Logger used for warnings.
        """
        self._rate_provider = rate_provider
        self._target = normalize_currency(target_currency) or target_currency
        self._logger = logger
        self._rates: dict[str, Decimal | None] = {}
        self._unconverted: set[str] = set()

    @property
    def target_currency(self) -> str:
        return self._target

    @property
    def unconverted(self) -> tuple[str, ...]:
        """Return sorted currency codes that could not be converted."""
        return tuple(sorted(self._unconverted))

    def __call__(self, amount: Decimal, currency: str) -> Decimal | None:
        source = normalize_currency(currency) or self._target
        if source == self._target:
            return amount
        if source not in self._rates:
            rate = self._rate_provider.get_rate(source, self._target)
            self._rates[source] = rate
            if rate is None:
                self._unconverted.add(source)
                self._logger.warning(
                    f"Missing FX rate for {source} to {self._target}; "
                    "skipping affected amounts"
                )
        rate = self._rates[source]
        if rate is None:
            return None
        return convert_amount(amount, rate)


__all__ = ["CurrencyConverter", "RateProvider"]
