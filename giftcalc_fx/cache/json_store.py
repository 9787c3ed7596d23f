"""JSON file backed rate cache."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from giftcalc_fx.cache.base_store import CacheReadError, RateCacheStore
from giftcalc_fx.config import cache_file_path
from giftcalc_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)


class JsonFileRateStore(RateCacheStore):
    """Stores every base currency snapshot in a single JSON document.

    The file is rewritten in full on each write. There is no cross-process
    locking, so concurrent writers race and the last one wins.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else cache_file_path()

    def load_entries(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CacheReadError(f"Unable to read cache file {self.path}: {exc}") from exc
        except ValueError as exc:
            raise CacheReadError(f"Cache file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise CacheReadError(f"Cache file {self.path} does not contain a JSON object")
        return payload

    def save_entries(self, entries: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("Could not remove rate cache %s: %s", self.path, exc)
            return
        LOGGER.info("Cleared rate cache at %s", self.path)


__all__ = ["JsonFileRateStore"]
