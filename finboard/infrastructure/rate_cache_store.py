"""Keyed stores for cached exchange-rate entries."""

from pathlib import Path

from finboard.application.ports.exchange_rates import RateCacheStorePort
from finboard.domain.models import ExchangeRateCacheEntry
from finboard.infrastructure.logging.logger import get_app_logger


class InMemoryRateCacheStore(RateCacheStorePort):
    """Process-local store; discarded with the process."""

    def __init__(self) -> None:
        self._entries: dict[str, ExchangeRateCacheEntry] = {}

    def get(self, key: str) -> ExchangeRateCacheEntry | None:
        return self._entries.get(key)

    def set(self, key: str, entry: ExchangeRateCacheEntry) -> None:
        self._entries[key] = entry


class JsonFileRateCacheStore(RateCacheStorePort):
    """Durable store writing one ``{key}.json`` document per key.

    Unreadable or malformed documents are reported as misses.
    """

    def __init__(self, directory: Path, logger=None) -> None:
        """Initialize the store.

        Args:
            directory: Directory holding the cache documents.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._directory = Path(directory)
        self._logger = logger or get_app_logger()

    def get(self, key: str) -> ExchangeRateCacheEntry | None:
        path = self._path(key)
        try:
            raw = path.read_text(encoding="utf-8")
            return ExchangeRateCacheEntry.from_json(raw)
        except FileNotFoundError:
            return None
        except OSError as exc:
            self._logger.warning(f"Cannot read rate cache {path}: {exc}")
            return None
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError.
            self._logger.warning(f"Ignoring corrupted rate cache {path}: {exc}")
            return None

    def set(self, key: str, entry: ExchangeRateCacheEntry) -> None:
        path = self._path(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".tmp")
            tmp_path.write_text(entry.to_json(), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            self._logger.warning(f"Cannot write rate cache {path}: {exc}")

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"


__all__ = ["InMemoryRateCacheStore", "JsonFileRateCacheStore"]
