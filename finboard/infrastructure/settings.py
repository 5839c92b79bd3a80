"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

import dotenv

from finboard.application.use_cases.exchange_rates import DEFAULT_TTL_MS
from finboard.domain.models import LedgerScope
from finboard.domain.services.normalization import normalize_currency
from finboard.infrastructure.logging.logger import get_app_logger

DEFAULT_RATES_API_URL = "https://api.exchangerate-api.com/v4"
DEFAULT_RATES_TIMEOUT = 10.0


@dataclass(frozen=True)
class FinboardSettings:
    """Settings for the dashboard core.

    Attributes:
        display_currency: Currency dashboard figures are normalized into.
        scope: Default business/personal scope.
        rates_api_url: Base URL of the exchange-rate provider.
        rates_timeout: Request timeout in seconds for rate fetches.
        rates_ttl_ms: Maximum age of cached rates in milliseconds.
        rates_cache_dir: Directory of the durable rate cache, or None to keep
            rates in memory.
    """

    display_currency: str = "USD"
    scope: LedgerScope = LedgerScope.ALL
    rates_api_url: str = DEFAULT_RATES_API_URL
    rates_timeout: float = DEFAULT_RATES_TIMEOUT
    rates_ttl_ms: int = DEFAULT_TTL_MS
    rates_cache_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "FinboardSettings":
        """Build settings from environment variables.

        Returns:
            FinboardSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        display_currency = (
            normalize_currency(os.getenv("FINBOARD_DISPLAY_CURRENCY"))
            or cls.display_currency
        )
        raw_scope = os.getenv("FINBOARD_SCOPE", "all").strip().lower()
        try:
            scope = LedgerScope(raw_scope)
        except ValueError:
            logger.warning(f"Unknown FINBOARD_SCOPE '{raw_scope}'; using all")
            scope = LedgerScope.ALL
        rates_api_url = os.getenv(
            "EXCHANGE_RATE_API_URL",
            DEFAULT_RATES_API_URL,
        ).rstrip("/")
        rates_timeout = cls._parse_number(
            "EXCHANGE_RATE_TIMEOUT",
            DEFAULT_RATES_TIMEOUT,
            float,
            logger,
        )
        rates_ttl_ms = cls._parse_number(
            "EXCHANGE_RATE_TTL_MS",
            DEFAULT_TTL_MS,
            int,
            logger,
        )
        raw_cache_dir = os.getenv("EXCHANGE_RATE_CACHE_DIR")
        rates_cache_dir = None
        if raw_cache_dir:
            rates_cache_dir = Path(raw_cache_dir).expanduser().resolve()
        return cls(
            display_currency=display_currency,
            scope=scope,
            rates_api_url=rates_api_url,
            rates_timeout=rates_timeout,
            rates_ttl_ms=rates_ttl_ms,
            rates_cache_dir=rates_cache_dir,
        )

    @staticmethod
    def _parse_number(name: str, default, cast, logger):
        """Parse a positive numeric environment variable.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            cast: Numeric type to convert to.
            logger: Logger used for warnings.

        Returns:
            The parsed value or ``default``.
        """
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            value = cast(raw)
        except ValueError:
            logger.warning(f"Invalid {name} '{raw}'; using {default}")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive; using {default}")
            return default
        return value


__all__ = ["FinboardSettings"]
