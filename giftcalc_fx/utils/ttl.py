"""Cache time-to-live resolution."""

from __future__ import annotations

import math
import os
import re
from pathlib import Path
from typing import Final

from giftcalc_fx.config import CONFIG_TTL_FIELD, TTL_ENV_VAR, load_user_config

DEFAULT_TTL_HOURS: Final[int] = 24
MIN_TTL_HOURS: Final[int] = 1
MAX_TTL_HOURS: Final[int] = 168

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_env_hours(value: str | None) -> int | None:
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def _parse_config_hours(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def _in_range(hours: int | None) -> int | None:
    if hours is None or not MIN_TTL_HOURS <= hours <= MAX_TTL_HOURS:
        return None
    return hours


def resolve_ttl_hours(env_override: str | None, config_field: object) -> int:
    """Return the cache TTL in hours.

    Each source is tried in turn: the environment override, then the config
    field, then :data:`DEFAULT_TTL_HOURS`. A source is used only when it holds a
    number within ``[MIN_TTL_HOURS, MAX_TTL_HOURS]``; anything else is skipped
    rather than clamped, so ``200`` with no usable config becomes ``24``.
    """

    hours = _in_range(_parse_env_hours(env_override))
    if hours is None:
        hours = _in_range(_parse_config_hours(config_field))
    if hours is None:
        return DEFAULT_TTL_HOURS
    return hours


def current_ttl_hours(config_path: str | Path | None = None) -> int:
    """Resolve the TTL from the live environment and user config file."""

    config = load_user_config(config_path)
    return resolve_ttl_hours(os.environ.get(TTL_ENV_VAR), config.get(CONFIG_TTL_FIELD))


__all__ = [
    "DEFAULT_TTL_HOURS",
    "MAX_TTL_HOURS",
    "MIN_TTL_HOURS",
    "current_ttl_hours",
    "resolve_ttl_hours",
]
