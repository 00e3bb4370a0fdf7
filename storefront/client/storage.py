"""
Local persistent storage for the guest cart

Synchronous string key-value storage with an optional byte quota, mirroring
what a browser offers through localStorage.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

class StorageError(Exception):
    """Storage could not be read or written"""

class StorageQuotaExceeded(StorageError):
    """Write would exceed the storage quota"""

class LocalStorage(ABC):
    """Key-value string storage"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...

def _size_of(data: Dict[str, str]) -> int:
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in data.items())

class MemoryStorage(LocalStorage):
    """In-process storage, shared by every store given the same instance"""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        updated = dict(self._data)
        updated[key] = value
        if self.quota_bytes is not None and _size_of(updated) > self.quota_bytes:
            raise StorageQuotaExceeded(f"Storage quota of {self.quota_bytes} bytes exceeded")
        self._data = updated

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

class FileStorage(LocalStorage):
    """
    JSON file backed storage

    The file holds one JSON object mapping keys to string values. It is read
    on every access and replaced atomically on every write, so separate
    instances pointed at the same path observe each other's writes.
    """

    def __init__(self, path: str, quota_bytes: Optional[int] = None):
        self.path = path
        self.quota_bytes = quota_bytes

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read storage file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} is not a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        if self.quota_bytes is not None and _size_of(data) > self.quota_bytes:
            raise StorageQuotaExceeded(f"Storage quota of {self.quota_bytes} bytes exceeded")

        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Could not write storage file {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def _read_for_write(self) -> Dict[str, str]:
        # A corrupt file is replaced on the next write, not kept forever
        try:
            return self._read()
        except StorageError as e:
            logger.warning(f"{e}; starting from empty storage")
            return {}

    def set_item(self, key: str, value: str) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        try:
            data = self._read()
        except StorageError as e:
            logger.warning(f"{e}; resetting storage")
            self._write({})
            return
        if key in data:
            del data[key]
            self._write(data)
