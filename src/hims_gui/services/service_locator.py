"""Service locator for the HIMS GUI shell.

The bootstrap (`hims_gui.app.bootstrap.create_app`) is the composition root:
it constructs the event bus, durable storage and the preference stores once
per process and registers them here. Widgets and tests resolve them by key
instead of importing module-level singletons.

Usage:
    from hims_gui.services.service_locator import services, SIDEBAR_STORE
    store = services.get(SIDEBAR_STORE)
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T")

__all__ = [
    "ServiceLocator",
    "services",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EVENT_BUS",
    "LOGGING_SERVICE",
    "LOCAL_STORAGE",
    "SIDEBAR_STORE",
    "LOCALE_STORE",
    "NAVIGATION_FAVORITES",
    "RECENT_NAVIGATION",
]

# Well-known keys registered by the bootstrap
EVENT_BUS = "event_bus"
LOGGING_SERVICE = "logging_service"
LOCAL_STORAGE = "local_storage"
SIDEBAR_STORE = "sidebar_store"
LOCALE_STORE = "locale_store"
NAVIGATION_FAVORITES = "navigation_favorites"
RECENT_NAVIGATION = "recent_navigation"


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when a key is registered twice without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested service key is not present."""


class ServiceLocator:
    """String-keyed registry of process-wide services (RLock guarded)."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._services: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        """Register `value` under `key`.

        Raises ServiceAlreadyRegisteredError if the key exists and
        `allow_override` is False.
        """
        with self._lock:
            if key in self._services and not allow_override:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._services[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._services:
                raise ServiceNotFoundError(key)
            return self._services[key]

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"Service '{key}' expected type {expected_type!r} but got {type(value)!r}"
            )
        return value

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._services.get(key, default)

    def clear(self) -> None:
        with self._lock:
            self._services.clear()


services = ServiceLocator()
