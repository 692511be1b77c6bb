# geosense/feed/storage.py
"""
Best-effort key-value storage with browser localStorage semantics:
string values, `None` for missing keys, and no exceptions on I/O failure.
"""
from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore"]

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """In-process store; state is lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    All keys live in one JSON object on disk, read once and then served from
    memory. Every write updates memory first and then replaces the file
    atomically. A missing, unreadable or corrupt file reads as empty; a failed
    write is logged and only costs persistence across restarts.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("[Store] unreadable %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("[Store] ignoring non-object state in %s", self.path)
            return {}
        return data

    def _save(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            logger.warning("[Store] could not write %s: %s", self.path, e)

    def _state(self) -> Dict[str, str]:
        if self._data is None:
            self._data = self._load()
        return self._data

    def get_item(self, key: str) -> Optional[str]:
        val = self._state().get(key)
        return val if isinstance(val, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._state()
        data[key] = str(value)
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._state()
        if key in data:
            del data[key]
            self._save(data)
