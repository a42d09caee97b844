"""Persistence adapter for a single JSON-serialized preference.

`load` and `save` never raise. Missing storage (a context without durable
storage), unreadable files, malformed or invalid stored values all degrade
to the adapter's default. Each absorbed failure is logged, counted in
`failure_count` and published on the EventBus as
`GUIEvent.PREFERENCE_STORAGE_FAILED` so operators can still see it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from .event_bus import EventBus, GUIEvent
from .local_storage import KeyValueStorage

__all__ = ["PreferencePersistence"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PreferencePersistence(Generic[T]):
    def __init__(
        self,
        storage: Optional[KeyValueStorage],
        key: str,
        default: T,
        *,
        validate: Callable[[Any], bool] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self.default = default
        self._validate = validate
        self._event_bus = event_bus
        self.failure_count = 0
        # True when the last load() returned a value read from storage
        self.last_load_hit = False

    @property
    def available(self) -> bool:
        return self.storage is not None

    def _report(self, operation: str, error: object) -> None:
        self.failure_count += 1
        logger.warning("Preference %r %s failed: %s", self.key, operation, error)
        if self._event_bus is not None:
            self._event_bus.publish(
                GUIEvent.PREFERENCE_STORAGE_FAILED,
                {"key": self.key, "operation": operation, "error": str(error)},
            )

    def load(self) -> T:
        self.last_load_hit = False
        if self.storage is None:
            logger.debug("No durable storage; %r uses default", self.key)
            return self.default
        try:
            raw = self.storage.get_item(self.key)
        except Exception as exc:  # noqa: BLE001 - storage faults degrade to default
            self._report("load", exc)
            return self.default
        if raw is None:
            return self.default
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            self._report("parse", exc)
            return self.default
        if self._validate is not None and not self._validate(value):
            self._report("validate", f"rejected stored value {raw!r}")
            return self.default
        self.last_load_hit = True
        return value

    def save(self, value: T) -> bool:
        if self.storage is None:
            return False
        try:
            self.storage.set_item(self.key, json.dumps(value))
        except Exception as exc:  # noqa: BLE001 - in-memory value still updates
            self._report("save", exc)
            return False
        return True

    def clear(self) -> bool:
        if self.storage is None:
            return False
        try:
            self.storage.remove_item(self.key)
        except Exception as exc:  # noqa: BLE001
            self._report("clear", exc)
            return False
        return True
