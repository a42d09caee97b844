"""Application bootstrap for the HIMS GUI shell.

Responsibilities:
 - Optional headless bootstrap (tests / environments without PyQt6)
 - Logging configuration and the diagnostics ring buffer
 - Durable storage setup (absent when no data directory is given or storage
   is disabled; preferences then live in memory only)
 - Constructing the process-wide preference stores exactly once and
   registering them in the service locator

PyQt6 is imported lazily so the headless services stay importable without a
GUI stack.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from hims_config import settings
from hims_gui.services import service_locator as keys
from hims_gui.services.event_bus import EventBus, GUIEvent
from hims_gui.services.local_storage import LocalStorage
from hims_gui.services.locale_preference import create_locale_store
from hims_gui.services.logging_service import LoggingService, configure_logging
from hims_gui.services.navigation_history import (
    NavigationFavorites,
    RecentNavigation,
    create_favorites_store,
    create_recent_store,
)
from hims_gui.services.preference_store import BooleanPreferenceStore
from hims_gui.services.service_locator import ServiceLocator, services
from hims_gui.services.sidebar_state import create_sidebar_store

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["AppContext", "create_app", "qt_available"]

logger = logging.getLogger(__name__)


def qt_available() -> bool:
    return _QT_AVAILABLE


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None when headless)
    headless: Whether headless bootstrap was used
    services: Service locator holding the registered services
    storage: Durable storage, or None when running without one
    sidebar_store: The process-wide sidebar expansion store
    started_at: perf_counter timestamp when bootstrap started
    duration_s: Elapsed seconds for bootstrap
    metadata: Free-form diagnostics
    """

    qt_app: Optional[Any]
    headless: bool
    services: ServiceLocator
    storage: Optional[LocalStorage]
    sidebar_store: BooleanPreferenceStore
    started_at: float
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    *,
    headless: bool | None = None,
    data_dir: str | None = None,
    enable_storage: bool | None = None,
    log_level: str | None = None,
) -> AppContext:
    """Create the application context and register core services.

    Each call registers a fresh event bus and fresh stores (override allowed)
    so repeated bootstraps in tests stay isolated.
    """
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE
    if enable_storage is None:
        enable_storage = not settings.DISABLE_STORAGE

    configure_logging(log_level or settings.LOG_LEVEL)
    bus = EventBus()
    previous_logging = services.try_get(keys.LOGGING_SERVICE)
    if isinstance(previous_logging, LoggingService):
        previous_logging.detach_root()
    logging_service = LoggingService(event_bus=bus)
    logging_service.attach_root()

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])
        qt_app.setApplicationName(settings.APP_NAME)

    storage: Optional[LocalStorage] = None
    if enable_storage and data_dir:
        storage = LocalStorage(data_dir)
    else:
        logger.info("Running without durable storage; preferences are not persisted")

    sidebar_store = create_sidebar_store(storage, bus)
    locale_store = create_locale_store(storage, bus)
    favorites = NavigationFavorites(create_favorites_store(storage, bus))
    recent = RecentNavigation(create_recent_store(storage, bus))

    for key, value in [
        (keys.EVENT_BUS, bus),
        (keys.LOGGING_SERVICE, logging_service),
        (keys.LOCAL_STORAGE, storage),
        (keys.SIDEBAR_STORE, sidebar_store),
        (keys.LOCALE_STORE, locale_store),
        (keys.NAVIGATION_FAVORITES, favorites),
        (keys.RECENT_NAVIGATION, recent),
    ]:
        services.register(key, value, allow_override=True)

    duration = time.perf_counter() - started
    ctx = AppContext(
        qt_app=qt_app,
        headless=headless,
        services=services,
        storage=storage,
        sidebar_store=sidebar_store,
        started_at=started,
        duration_s=duration,
        metadata={
            "qt_available": _QT_AVAILABLE,
            "storage_path": str(storage.path) if storage is not None else None,
        },
    )
    logger.debug("Bootstrap finished in %.4fs", duration)
    bus.publish(GUIEvent.STARTUP_COMPLETE, {"headless": headless})
    return ctx
