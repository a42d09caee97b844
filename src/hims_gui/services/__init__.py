"""Service layer exports (Qt-free, unit-testable headless).

Responsibilities:
 - Service locator (`services`) used by the bootstrap composition root
 - EventBus publish/subscribe core
 - Durable key/value storage and the preference stores built on it
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, GUIEvent  # noqa: F401
from .local_storage import LocalStorage, StorageUnavailableError  # noqa: F401
from .preference_persistence import PreferencePersistence  # noqa: F401
from .preference_store import BooleanPreferenceStore, PreferenceStore  # noqa: F401
from .preference_accessor import ConsumerPhase, PreferenceAccessor  # noqa: F401
from .sidebar_state import SidebarStateAccessor, create_sidebar_store  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "GUIEvent",
    "LocalStorage",
    "StorageUnavailableError",
    "PreferencePersistence",
    "PreferenceStore",
    "BooleanPreferenceStore",
    "ConsumerPhase",
    "PreferenceAccessor",
    "SidebarStateAccessor",
    "create_sidebar_store",
]
