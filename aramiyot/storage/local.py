"""
File-backed key/value storage with browser localStorage semantics

Values are strings; callers serialize JSON themselves. Writes are
last-write-wins under a process-local lock.
"""
import json
import os
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional

from ..errors import StorageError
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class LocalStorage:
    """Persistent string key/value store in a single JSON file"""

    def __init__(self, path: str, quota_bytes: Optional[int] = None):
        self.path = Path(path)
        self.quota_bytes = quota_bytes
        self._lock = RLock()
        self._items: Dict[str, str] = self._read_file()

    def _read_file(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Local storage file {self.path} is unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Local storage file {self.path} does not hold an object, starting empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self, items: Dict[str, str]):
        payload = json.dumps(items, ensure_ascii=False)
        if self.quota_bytes is not None and len(payload.encode("utf-8")) > self.quota_bytes:
            raise StorageError(f"Local storage quota of {self.quota_bytes} bytes exceeded")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write local storage: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str):
        """Store a string value; raises StorageError on quota or I/O failure"""
        with self._lock:
            updated = dict(self._items)
            updated[key] = value
            self._flush(updated)
            self._items = updated

    def remove_item(self, key: str):
        with self._lock:
            if key not in self._items:
                return
            updated = dict(self._items)
            del updated[key]
            self._flush(updated)
            self._items = updated

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def clear(self):
        with self._lock:
            self._flush({})
            self._items = {}

    def get_json(self, key: str, default=None):
        """
        Read and decode a JSON value

        Raises:
            StorageError: If the stored value is not valid JSON
        """
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Stored value for '{key}' is corrupt: {e}") from e

    def set_json(self, key: str, value):
        self.set_item(key, json.dumps(value, ensure_ascii=False))
