"""Process-wide preference store with synchronous observer fan-out.

One `PreferenceStore` holds the authoritative value of one preference for
the lifetime of the process. The bootstrap constructs it once and hands it
to consumers by reference.

Writes are synchronous: `set_value` updates the in-memory value, persists it
through the attached `PreferencePersistence`, then calls every registered
observer (with no arguments) before returning. Observers re-read the value
with `get_value`.

An observer that raises does not stop the others from being notified; the
failure is logged, summarised in `errors` (most recent `ERROR_CAPACITY`
entries) and published on the EventBus.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from collections import deque
from typing import Callable, Deque, Dict, Generic, List, Optional, TypeVar

from .event_bus import EventBus, GUIEvent
from .preference_persistence import PreferencePersistence

__all__ = [
    "BooleanPreferenceStore",
    "Observer",
    "ObserverError",
    "PreferenceStore",
    "Unsubscribe",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class ObserverError:
    observer: str
    error_type: str
    message: str


class PreferenceStore(Generic[T]):
    ERROR_CAPACITY = 50

    def __init__(
        self,
        default: T,
        persistence: Optional[PreferencePersistence[T]] = None,
        *,
        name: str = "preference",
        event_bus: EventBus | None = None,
    ) -> None:
        self.name = name
        self.persistence = persistence
        self._value = default
        self._event_bus = event_bus
        # Keyed by a per-registration token so the same callable may be
        # registered several times independently.
        self._observers: Dict[object, Observer] = {}
        self._errors: Deque[ObserverError] = deque(maxlen=self.ERROR_CAPACITY)

    def get_value(self) -> T:
        return self._value

    def subscribe(self, callback: Observer) -> Unsubscribe:
        token = object()
        self._observers[token] = callback

        def unsubscribe() -> None:
            self._observers.pop(token, None)

        return unsubscribe

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def errors(self) -> List[ObserverError]:
        return list(self._errors)

    def set_value(self, new_value: T) -> None:
        self._value = new_value
        if self.persistence is not None:
            self.persistence.save(new_value)
        self._notify()
        if self._event_bus is not None:
            self._event_bus.publish(
                GUIEvent.PREFERENCE_CHANGED, {"name": self.name, "value": new_value}
            )

    def _notify(self) -> None:
        for callback in list(self._observers.values()):
            try:
                callback()
            except Exception as exc:  # noqa: BLE001 - isolate observer failure
                self._errors.append(
                    ObserverError(repr(callback), type(exc).__name__, str(exc))
                )
                logger.exception("Observer of preference %r failed", self.name)
                if self._event_bus is not None:
                    self._event_bus.publish(
                        GUIEvent.PREFERENCE_OBSERVER_FAILED,
                        {"name": self.name, "error": repr(exc)},
                    )


class BooleanPreferenceStore(PreferenceStore[bool]):
    """Boolean preference with the set/clear/toggle conveniences."""

    def set_true(self) -> None:
        self.set_value(True)

    def set_false(self) -> None:
        self.set_value(False)

    def toggle(self) -> None:
        self.set_value(not self.get_value())
