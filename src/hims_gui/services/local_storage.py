"""Durable key/value storage backed by a single JSON file.

Plays the role browser `localStorage` plays for a web client: string keys
mapped to string values (callers store JSON-serialized payloads). The file
lives in the application data directory and is read once, then cached;
every write is flushed through atomically (temp file + replace).

A corrupt file is moved aside (`<name>.corrupt.<timestamp>`) and the storage
starts empty. Genuine I/O failures raise `StorageUnavailableError`; callers
that must never fail (see `preference_persistence`) absorb it.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

from hims_config import settings

__all__ = ["KeyValueStorage", "LocalStorage", "StorageUnavailableError"]

logger = logging.getLogger(__name__)


class StorageUnavailableError(OSError):
    """Raised when the backing file cannot be read or written."""


@runtime_checkable
class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class LocalStorage:
    FILENAME = settings.STORAGE_FILENAME

    def __init__(self, base_dir: str | Path, filename: str | None = None):
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / (filename or self.FILENAME)
        self._items: Dict[str, str] | None = None

    def _backup_corrupt(self) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        backup = self.path.with_name(f"{self.path.name}.corrupt.{stamp}")
        try:
            os.replace(self.path, backup)
            logger.warning("Corrupt storage file moved to %s", backup)
        except OSError:
            logger.warning("Corrupt storage file %s could not be moved aside", self.path)

    def _load(self) -> Dict[str, str]:
        if self._items is not None:
            return self._items
        items: Dict[str, str] = {}
        if self.path.exists():
            try:
                data = self.path.read_bytes()
            except OSError as exc:
                raise StorageUnavailableError(f"Cannot read {self.path}: {exc}") from exc
            try:
                raw = json.loads(data.decode("utf-8"))
            except (ValueError, RecursionError):
                # Undecodable bytes, invalid or too deeply nested JSON
                raw = None
            if isinstance(raw, dict):
                items = {str(k): v for k, v in raw.items() if isinstance(v, str)}
            else:
                self._backup_corrupt()
        self._items = items
        return items

    def _flush(self, items: Dict[str, str]) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(items, indent=2, sort_keys=True), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = dict(self._load())
        items[key] = value
        self._flush(items)
        self._items = items

    def remove_item(self, key: str) -> None:
        items = dict(self._load())
        if items.pop(key, None) is None:
            return
        self._flush(items)
        self._items = items

    def keys(self) -> List[str]:
        return sorted(self._load().keys())

    def clear(self) -> None:
        self._flush({})
        self._items = {}

    def reload(self) -> None:
        """Drop the in-memory cache so the next read goes to disk."""
        self._items = None
