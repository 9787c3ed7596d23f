"""In-process rate cache, useful for long-lived embedding and tests."""

from __future__ import annotations

import copy
from typing import Any

from giftcalc_fx.cache.base_store import RateCacheStore


class MemoryRateStore(RateCacheStore):
    """Keeps entries in a dict; nothing survives the process."""

    def __init__(self, entries: dict[str, Any] | None = None) -> None:
        self._entries: dict[str, Any] = copy.deepcopy(entries) if entries else {}

    def load_entries(self) -> dict[str, Any]:
        return copy.deepcopy(self._entries)

    def save_entries(self, entries: dict[str, Any]) -> None:
        self._entries = copy.deepcopy(entries)

    def clear(self) -> None:
        self._entries = {}


__all__ = ["MemoryRateStore"]
