"""Logging utilities for the giftcalc_fx package."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV_VAR = "GIFT_CALC_LOG_LEVEL"

_CONFIGURED: Optional[logging.Logger] = None


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str = "giftcalc_fx") -> logging.Logger:
    """Return a logger, configuring the root handler on first use.

    ``GIFT_CALC_LOG_LEVEL`` picks the level for the first call (``INFO`` when
    unset or unrecognised); later calls reuse that configuration.
    """
    global _CONFIGURED
    if _CONFIGURED is None:
        logging.basicConfig(
            level=_level_from_env(),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _CONFIGURED = logging.getLogger("giftcalc_fx")
    return logging.getLogger(name)
