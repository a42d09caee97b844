"""In-process log capture for diagnostics.

A ring buffer handler attached to the root logger keeps the most recent
records (storage fallbacks, observer failures, bootstrap messages) so a
diagnostics panel or a test can inspect them. Each captured record is also
re-published on the EventBus as `GUIEvent.LOG_RECORD_ADDED`.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from .event_bus import EventBus, GUIEvent
from .service_locator import EVENT_BUS, LOGGING_SERVICE, services

__all__ = [
    "LogEntry",
    "LoggingService",
    "configure_logging",
    "get_logging_service",
]

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float
    pathname: str
    lineno: int


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 500, event_bus: EventBus | None = None) -> None:
        self._capacity = capacity
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._event_bus = event_bus
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach_root(self) -> None:
        if self._attached:
            return
        root = logging.getLogger()
        root.addHandler(self._handler)
        if root.level > logging.DEBUG:
            root.setLevel(logging.DEBUG)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    def _resolve_bus(self) -> EventBus | None:
        if self._event_bus is not None:
            return self._event_bus
        bus = services.try_get(EVENT_BUS)
        return bus if isinstance(bus, EventBus) else None

    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
            pathname=record.pathname,
            lineno=record.lineno,
        )
        with self._lock:
            self._entries.append(entry)
        bus = self._resolve_bus()
        if bus is not None:
            bus.publish(
                GUIEvent.LOG_RECORD_ADDED,
                {
                    "level": entry.level,
                    "name": entry.name,
                    "message": entry.message[:120],
                    "created": entry.created,
                },
            )

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Set the package logger level and add a console handler once."""
    logger = logging.getLogger("hims_gui")
    try:
        logger.setLevel(level if isinstance(level, int) else level.strip().upper())
    except (TypeError, ValueError):
        logger.setLevel(logging.INFO)
        logger.warning("Unknown log level %r; using INFO", level)
    if not any(getattr(h, "_hims_console", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._hims_console = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def get_logging_service() -> LoggingService:
    return services.get_typed(LOGGING_SERVICE, LoggingService)
