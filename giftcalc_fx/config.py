"""Filesystem locations and user configuration for gift-calc currency data."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Final

from giftcalc_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

APP_DIR_NAME: Final[str] = "gift-calc"
CONFIG_FILE_NAME: Final[str] = ".config.json"
CACHE_FILE_NAME: Final[str] = ".currency-cache.json"

TTL_ENV_VAR: Final[str] = "GIFT_CALC_CACHE_TTL_HOURS"
CONFIG_TTL_FIELD: Final[str] = "cacheTTLHours"

__all__ = [
    "APP_DIR_NAME",
    "CACHE_FILE_NAME",
    "CONFIG_FILE_NAME",
    "CONFIG_TTL_FIELD",
    "TTL_ENV_VAR",
    "cache_file_path",
    "config_dir",
    "config_path",
    "load_user_config",
]


def config_dir() -> Path:
    """Return ``~/.config/gift-calc``.

    ``HOME`` is consulted first so tests and sandboxed runs can redirect the
    directory without touching the real home folder.
    """

    home = os.environ.get("HOME") or str(Path.home())
    return Path(home) / ".config" / APP_DIR_NAME


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def cache_file_path() -> Path:
    return config_dir() / CACHE_FILE_NAME


def load_user_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load the user config file, returning ``{}`` when it is missing or unusable."""

    target = Path(path) if path is not None else config_path()
    if not target.exists():
        return {}
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        LOGGER.warning("Could not parse config file at %s: %s. Using defaults.", target, exc)
        return {}
    if not isinstance(payload, dict):
        LOGGER.warning("Config file at %s is not a JSON object. Using defaults.", target)
        return {}
    return payload
