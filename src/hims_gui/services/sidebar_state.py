"""Navigation sidebar expand/collapse state.

`create_sidebar_store` builds the process-wide boolean store (persisted
under `SIDEBAR_STATE_KEY`, default expanded). Every widget that cares about
the sidebar owns a `SidebarStateAccessor` over that one store, so the header
toggle, the sidebar itself and the content area always agree.
"""

from __future__ import annotations

from typing import Callable, Optional

from .event_bus import EventBus
from .local_storage import KeyValueStorage
from .preference_accessor import PreferenceAccessor
from .preference_persistence import PreferencePersistence
from .preference_store import BooleanPreferenceStore

__all__ = [
    "SIDEBAR_STATE_KEY",
    "SIDEBAR_DEFAULT_EXPANDED",
    "SidebarStateAccessor",
    "create_sidebar_store",
]

SIDEBAR_STATE_KEY = "hims_sidebar_expanded"
SIDEBAR_DEFAULT_EXPANDED = True


def _is_bool(value: object) -> bool:
    return isinstance(value, bool)


def create_sidebar_store(
    storage: Optional[KeyValueStorage], event_bus: EventBus | None = None
) -> BooleanPreferenceStore:
    persistence = PreferencePersistence(
        storage,
        SIDEBAR_STATE_KEY,
        SIDEBAR_DEFAULT_EXPANDED,
        validate=_is_bool,
        event_bus=event_bus,
    )
    return BooleanPreferenceStore(
        SIDEBAR_DEFAULT_EXPANDED, persistence, name="sidebar_expanded", event_bus=event_bus
    )


class SidebarStateAccessor(PreferenceAccessor[bool]):
    """Sidebar view of the store: `is_expanded`, `toggle`, `expand`, `collapse`."""

    store: BooleanPreferenceStore

    def __init__(
        self, store: BooleanPreferenceStore, *, on_change: Callable[[], None] | None = None
    ) -> None:
        super().__init__(
            store,
            store.persistence,
            placeholder=SIDEBAR_DEFAULT_EXPANDED,
            on_change=on_change,
        )

    @property
    def is_expanded(self) -> bool:
        return self.value

    def toggle(self) -> None:
        self.store.toggle()

    def expand(self) -> None:
        self.store.set_true()

    def collapse(self) -> None:
        self.store.set_false()
