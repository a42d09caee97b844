"""Favorite and recently visited navigation items.

Both lists are persisted preferences built on `PreferenceStore`, so every
sidebar section showing favorites or recents stays in sync the same way the
expand/collapse flag does.

Recent items are kept in MRU order: re-visiting an item moves it to the
front and the list is trimmed to `max_items`.
"""

from __future__ import annotations

from typing import List, Optional

from hims_config import settings

from .event_bus import EventBus
from .local_storage import KeyValueStorage
from .preference_persistence import PreferencePersistence
from .preference_store import PreferenceStore

__all__ = [
    "FAVORITES_STORAGE_KEY",
    "RECENT_STORAGE_KEY",
    "NavigationFavorites",
    "RecentNavigation",
    "create_favorites_store",
    "create_recent_store",
]

FAVORITES_STORAGE_KEY = "hims_favorites"
RECENT_STORAGE_KEY = "hims_recent"


def _is_id_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _list_store(
    storage: Optional[KeyValueStorage], key: str, name: str, event_bus: EventBus | None
) -> PreferenceStore[List[str]]:
    persistence: PreferencePersistence[List[str]] = PreferencePersistence(
        storage, key, [], validate=_is_id_list, event_bus=event_bus
    )
    return PreferenceStore([], persistence, name=name, event_bus=event_bus)


def create_favorites_store(
    storage: Optional[KeyValueStorage], event_bus: EventBus | None = None
) -> PreferenceStore[List[str]]:
    return _list_store(storage, FAVORITES_STORAGE_KEY, "navigation_favorites", event_bus)


def create_recent_store(
    storage: Optional[KeyValueStorage], event_bus: EventBus | None = None
) -> PreferenceStore[List[str]]:
    return _list_store(storage, RECENT_STORAGE_KEY, "recent_navigation", event_bus)


class NavigationFavorites:
    def __init__(self, store: PreferenceStore[List[str]]):
        self.store = store

    def items(self) -> List[str]:
        return list(self.store.get_value())

    def is_favorite(self, item_id: str) -> bool:
        return item_id in self.store.get_value()

    def toggle_favorite(self, item_id: str) -> None:
        current = self.items()
        if item_id in current:
            current.remove(item_id)
        else:
            current.append(item_id)
        self.store.set_value(current)


class RecentNavigation:
    def __init__(
        self, store: PreferenceStore[List[str]], max_items: int = settings.MAX_RECENT_ITEMS
    ):
        self.store = store
        self.max_items = max_items

    def items(self) -> List[str]:
        return list(self.store.get_value())

    def add(self, item_id: str) -> None:
        if not item_id:
            return
        recent = [i for i in self.store.get_value() if i != item_id]
        recent.insert(0, item_id)
        self.store.set_value(recent[: self.max_items])

    def clear(self) -> None:
        self.store.set_value([])
