"""Persisted UI locale (an enum-valued preference)."""

from __future__ import annotations

from typing import Optional

from hims_config import settings

from .event_bus import EventBus
from .local_storage import KeyValueStorage
from .preference_persistence import PreferencePersistence
from .preference_store import PreferenceStore

__all__ = ["LOCALE_KEY", "LocalePreferenceStore", "create_locale_store", "is_supported_locale"]

LOCALE_KEY = "hims_locale"


def is_supported_locale(value: object) -> bool:
    return isinstance(value, str) and value in settings.SUPPORTED_LOCALES


class LocalePreferenceStore(PreferenceStore[str]):
    def set_value(self, new_value: str) -> None:
        if not is_supported_locale(new_value):
            raise ValueError(f"Unsupported locale: {new_value!r}")
        super().set_value(new_value)


def create_locale_store(
    storage: Optional[KeyValueStorage], event_bus: EventBus | None = None
) -> LocalePreferenceStore:
    persistence = PreferencePersistence(
        storage,
        LOCALE_KEY,
        settings.DEFAULT_LOCALE,
        validate=is_supported_locale,
        event_bus=event_bus,
    )
    return LocalePreferenceStore(
        settings.DEFAULT_LOCALE, persistence, name="locale", event_bus=event_bus
    )
