"""
Durable key-value stores for the history ledger.

A store behaves like browser localStorage: string keys, string values,
set() overwrites. JsonFileStore keeps all keys in one JSON object on disk
and replaces the file atomically on every write.
"""

import json
import os
import platform
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from .errors import PersistenceError

APP_NAME = "bazi-cipher"
STORE_FILE = "store.json"
STORE_ENV = "BAZI_CIPHER_STORE"


def user_data_dir() -> Path:
    """Return a platform-appropriate per-user data directory."""
    system = platform.system()
    home = Path.home()
    if system == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / APP_NAME
        return home / f".{APP_NAME}"
    if system == "Darwin":
        return home / "Library" / "Application Support" / APP_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return home / ".local" / "share" / APP_NAME


def default_store_path() -> Path:
    override = os.getenv(STORE_ENV)
    if override:
        return Path(override)
    return user_data_dir() / STORE_FILE


class KeyValueStore(ABC):
    """String key-value store. Implementations raise PersistenceError on I/O failure."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value for `key`, or None if the key does not exist."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set `key` to `value` (overwrites any existing value)."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove `key` and its value; no-op if the key does not exist."""
        ...


class MemoryStore(KeyValueStore):
    def __init__(self, data: Dict[str, str] = None):
        self.data = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All keys live in a single JSON object file at `path`."""

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Store {self.path} does not hold a JSON object")
        return data

    def _save(self, data: Dict[str, str]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write store {self.path}: {e}") from e
        finally:
            if tmp.exists():
                try:
                    tmp.unlink()
                except OSError:
                    pass

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
