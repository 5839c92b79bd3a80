"""Domain models for cached exchange rates."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import json


@dataclass(frozen=True)
class ExchangeRateCacheEntry:
    """Exchange rates for one base currency captured at a point in time.

    Attributes:
        base: Base currency code the rates are relative to.
        rates: Multiplicative rate per target currency code.
        timestamp: Fetch time in epoch milliseconds.
    """

    base: str
    rates: dict[str, Decimal] = field(default_factory=dict)
    timestamp: int = 0

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Return True while the entry is younger than the TTL."""
        return now_ms - self.timestamp < ttl_ms

    def to_json(self) -> str:
        """Serialize to the ``{base, rates, timestamp}`` JSON document.

        Rates are written as decimal strings so they survive a round trip
        exactly.
        """
        return json.dumps(
            {
                "base": self.base,
                "rates": {code: str(rate) for code, rate in self.rates.items()},
                "timestamp": self.timestamp,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "ExchangeRateCacheEntry":
        """Parse a serialized entry.

        Args:
            raw: JSON document produced by ``to_json``.

        Returns:
            ExchangeRateCacheEntry: Parsed entry with Decimal rates.

        Raises:
            ValueError: If the document is malformed or holds non-finite
                numbers.
        """
        try:
            payload = json.loads(
                raw,
                parse_float=Decimal,
                parse_int=Decimal,
                parse_constant=_reject_constant,
            )
            base = payload["base"]
            rates = payload["rates"]
            timestamp = int(payload["timestamp"])
            if not isinstance(base, str) or not isinstance(rates, dict):
                raise TypeError("base must be a string and rates a mapping")
            parsed = {
                str(code): Decimal(str(rate)) for code, rate in rates.items()
            }
        except (
            KeyError,
            TypeError,
            InvalidOperation,
            OverflowError,
            RecursionError,
        ) as exc:
            raise ValueError(f"Malformed exchange rate cache entry: {exc}") from exc
        if not all(rate.is_finite() for rate in parsed.values()):
            raise ValueError("Exchange rate cache entry holds non-finite rates")
        return cls(base=base, rates=parsed, timestamp=timestamp)


def _reject_constant(name: str):
    raise ValueError(f"Non-finite number {name} in exchange rate cache entry")


__all__ = ["ExchangeRateCacheEntry"]
