"""Synchronous publish/subscribe bus for GUI-wide notifications.

Preference stores publish change and failure notifications here so that
diagnostics panels, the logging service and tests can observe them without
coupling to a particular store. Handler failures are isolated: one failing
handler never prevents the remaining handlers from running.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "GUIEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class GUIEvent(str, Enum):
    STARTUP_COMPLETE = "startup_complete"
    PREFERENCE_CHANGED = "preference_changed"
    PREFERENCE_STORAGE_FAILED = "preference_storage_failed"
    PREFERENCE_OBSERVER_FAILED = "preference_observer_failed"
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked outside the lock (copy-first) so a handler may
    subscribe or unsubscribe while an event is being delivered.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    @staticmethod
    def _key(name: str | GUIEvent) -> str:
        return name.value if isinstance(name, GUIEvent) else name

    def subscribe(
        self, name: str | GUIEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = self._key(name)
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | GUIEvent, payload: Any = None) -> Event:
        key = self._key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failure
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | GUIEvent) -> int:
        with self._lock:
            return len(self._subs.get(self._key(name), ()))

    def list_events(self) -> list[str]:
        with self._lock:
            return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
