"""Global configuration and constants for the HIMS GUI shell."""

from __future__ import annotations

import os
from typing import Final

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


APP_NAME: Final = os.environ.get("HIMS_APP_NAME", "Scanbo HIMS")
DATA_DIR: Final = os.environ.get("HIMS_DATA_DIR", "data")
STORAGE_FILENAME: Final = "local_storage.json"
LOG_LEVEL: Final = os.environ.get("HIMS_LOG_LEVEL", "INFO")
# Runs the shell without durable storage (preferences stay in memory)
DISABLE_STORAGE: Final = env_flag("HIMS_DISABLE_STORAGE")

MAX_RECENT_ITEMS: Final = 10
SUPPORTED_LOCALES: Final = ("en", "es", "fr", "de", "ja", "zh")
DEFAULT_LOCALE: Final = "en"
