"""Per-consumer bridge between a PreferenceStore and one rendering context.

Each widget (or other consumer) owns one accessor. The accessor moves
through four phases:

    UNINITIALIZED -> HYDRATING -> LIVE -> TORN_DOWN

Before `mount()` the accessor reports a fixed placeholder, whatever the
store holds, so anything rendered before the widget is interactive matches
across runs. `mount()` loads the persisted value once, applies it to the
store, subscribes and goes LIVE; from then on every store write triggers
`on_change`. `teardown()` releases the subscription exactly once.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from .preference_persistence import PreferencePersistence
from .preference_store import PreferenceStore, Unsubscribe

__all__ = ["ConsumerPhase", "PreferenceAccessor"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConsumerPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    HYDRATING = "hydrating"
    LIVE = "live"
    TORN_DOWN = "torn_down"


class PreferenceAccessor(Generic[T]):
    def __init__(
        self,
        store: PreferenceStore[T],
        persistence: Optional[PreferencePersistence[T]],
        *,
        placeholder: T,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.store = store
        self.persistence = persistence
        self.placeholder = placeholder
        self.on_change = on_change
        self._phase = ConsumerPhase.UNINITIALIZED
        self._unsubscribe: Unsubscribe | None = None
        self._final_value: T = placeholder

    @property
    def phase(self) -> ConsumerPhase:
        return self._phase

    @property
    def value(self) -> T:
        if self._phase is ConsumerPhase.UNINITIALIZED:
            return self.placeholder
        if self._phase is ConsumerPhase.TORN_DOWN:
            return self._final_value
        return self.store.get_value()

    def mount(self) -> None:
        """Hydrate from storage and start tracking the store (first call only)."""
        if self._phase is not ConsumerPhase.UNINITIALIZED:
            return
        self._phase = ConsumerPhase.HYDRATING
        if self.persistence is not None:
            stored = self.persistence.load()
            # A fallback default must not clobber a value another consumer set
            if self.persistence.last_load_hit:
                self.store.set_value(stored)
        self._unsubscribe = self.store.subscribe(self._handle_store_change)
        self._phase = ConsumerPhase.LIVE
        logger.debug("Consumer of %r is live", self.store.name)
        self._emit_change()

    def teardown(self) -> None:
        if self._phase is ConsumerPhase.TORN_DOWN:
            return
        self._final_value = self.value
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._phase = ConsumerPhase.TORN_DOWN

    def _handle_store_change(self) -> None:
        if self._phase is ConsumerPhase.LIVE:
            self._emit_change()

    def _emit_change(self) -> None:
        if self.on_change is not None:
            self.on_change()
