"""Persistent storage for provider rate snapshots."""

from __future__ import annotations

from giftcalc_fx.cache.base_store import CacheReadError, RateCacheStore
from giftcalc_fx.cache.json_store import JsonFileRateStore
from giftcalc_fx.cache.memory_store import MemoryRateStore

__all__ = ["CacheReadError", "JsonFileRateStore", "MemoryRateStore", "RateCacheStore"]
