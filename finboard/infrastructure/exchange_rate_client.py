"""HTTP client for the external exchange-rate provider."""

from decimal import Decimal, InvalidOperation

import requests

from finboard.application.ports.exchange_rates import (
    ExchangeRateSourcePort,
    RateFetchError,
)
from finboard.utils.decimal_utils import coerce_decimal


class RequestsExchangeRateClient(ExchangeRateSourcePort):
    """Fetch latest rates with ``GET {base_url}/latest/{base}``."""

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        """Initialize the client.

        Args:
            base_url: Provider root, e.g. https://api.exchangerate-api.com/v4.
            timeout: Request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def fetch_latest(self, base: str) -> dict[str, Decimal]:
        """Return the latest rates relative to ``base``.

        Args:
            base: Base currency code.

        Returns:
            dict[str, Decimal]: Multiplicative rate per currency code.

        Raises:
            RateFetchError: On transport errors, timeouts, non-2xx responses,
                or a body without a usable ``rates`` mapping.
        """
        url = f"{self._base_url}/latest/{base.upper()}"
        try:
            response = requests.get(url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise RateFetchError(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise RateFetchError(f"Invalid JSON from {url}") from exc

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            raise RateFetchError(f"Missing rates mapping in response from {url}")
        try:
            return {
                str(code).upper(): coerce_decimal(rate)
                for code, rate in rates.items()
            }
        except (InvalidOperation, TypeError) as exc:
            raise RateFetchError(f"Invalid rate value from {url}") from exc


__all__ = ["RequestsExchangeRateClient"]
