"""Rate cache store interface shared by every persistence backend."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

from giftcalc_fx.models import MS_PER_HOUR, CacheStatus, RateSnapshot, iso_timestamp
from giftcalc_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)


class CacheReadError(Exception):
    """Raised by ``load_entries`` when stored data cannot be decoded."""


def now_ms() -> int:
    return int(time.time() * 1000)


class RateCacheStore(ABC):
    """Mapping of base currency -> :class:`RateSnapshot` with corruption tolerance.

    Subclasses only move raw entries in and out of storage. Snapshot decoding,
    the merge-on-write rule and status reporting live here so every backend
    degrades the same way.
    """

    @abstractmethod
    def load_entries(self) -> dict[str, Any]:
        """Return every stored entry keyed by base currency.

        Missing storage yields ``{}``; undecodable storage raises
        :class:`CacheReadError`.
        """

    @abstractmethod
    def save_entries(self, entries: dict[str, Any]) -> None:
        """Replace the stored entries. May raise ``OSError``."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every stored entry; an already empty store is not an error."""

    def read_snapshot(self, base_currency: str) -> RateSnapshot | None:
        try:
            entries = self.load_entries()
        except CacheReadError as exc:
            LOGGER.warning("Ignoring unreadable rate cache: %s", exc)
            return None
        return RateSnapshot.from_payload(entries.get(base_currency))

    def write_snapshot(self, base_currency: str, snapshot: RateSnapshot) -> None:
        """Store ``snapshot`` for ``base_currency`` keeping other bases intact.

        Failures are logged and swallowed; callers already hold the rates in
        memory and must not fail because the cache could not be written.
        """

        try:
            entries = self.load_entries()
        except CacheReadError as exc:
            LOGGER.warning("Rate cache is corrupted, starting fresh: %s", exc)
            entries = {}
        entries[base_currency] = snapshot.to_payload()
        try:
            self.save_entries(entries)
        except (OSError, TypeError, ValueError) as exc:
            LOGGER.warning("Could not write rate cache for %s: %s", base_currency, exc)
            return
        LOGGER.debug("Cached %s rates for %s", len(snapshot.rates), base_currency)

    def status(
        self, base_currency: str, ttl_hours: int, *, now: int | None = None
    ) -> CacheStatus:
        try:
            entries = self.load_entries()
        except CacheReadError as exc:
            return CacheStatus(exists=False, expired=True, age=None, ttl=ttl_hours, error=str(exc))

        snapshot = RateSnapshot.from_payload(entries.get(base_currency))
        if snapshot is None:
            return CacheStatus(exists=False, expired=True, age=None, ttl=ttl_hours)

        try:
            fetched_at = iso_timestamp(snapshot.timestamp)
        except (OverflowError, OSError, ValueError) as exc:
            LOGGER.warning("Ignoring %s cache entry with unusable timestamp: %s", base_currency, exc)
            return CacheStatus(
                exists=False,
                expired=True,
                age=None,
                ttl=ttl_hours,
                error=f"Cache entry for {base_currency} has an invalid timestamp: {snapshot.timestamp}",
            )

        elapsed = snapshot.age_ms(now if now is not None else now_ms())
        return CacheStatus(
            exists=True,
            expired=elapsed >= ttl_hours * MS_PER_HOUR,
            age=elapsed // MS_PER_HOUR,
            ttl=ttl_hours,
            timestamp=fetched_at,
        )


__all__ = ["CacheReadError", "RateCacheStore", "now_ms"]
