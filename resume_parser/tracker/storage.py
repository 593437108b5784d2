"""
Storage backends for tracked records.

Records are plain dicts keyed by (collection, id). Repositories receive a
backend instance; nothing is kept in module globals.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import copy
import json
import logging
import threading
import urllib.parse


class StorageBackend(ABC):
    """Key-value storage for JSON-serializable records."""

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[dict]:
        """Return a record, or None if missing."""
        pass

    @abstractmethod
    def put(self, collection: str, key: str, record: dict) -> None:
        """Insert or replace a record."""
        pass

    @abstractmethod
    def delete(self, collection: str, key: str) -> bool:
        """Remove a record. Returns False if it did not exist."""
        pass

    @abstractmethod
    def list(self, collection: str) -> list[dict]:
        """Return all records in a collection."""
        pass


class InMemoryStorage(StorageBackend):
    """Dict-backed storage for tests and short-lived processes."""

    def __init__(self):
        self._data: dict[str, dict[str, dict]] = {}
        self._lock = threading.Lock()

    def get(self, collection: str, key: str) -> Optional[dict]:
        with self._lock:
            record = self._data.get(collection, {}).get(key)
            return copy.deepcopy(record) if record is not None else None

    def put(self, collection: str, key: str, record: dict) -> None:
        with self._lock:
            self._data.setdefault(collection, {})[key] = copy.deepcopy(record)

    def delete(self, collection: str, key: str) -> bool:
        with self._lock:
            return self._data.get(collection, {}).pop(key, None) is not None

    def list(self, collection: str) -> list[dict]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._data.get(collection, {}).values()]


class JsonFileStorage(StorageBackend):
    """One JSON file per record under <root>/<collection>/<key>.json."""

    def __init__(self, root: str = "./resume_data"):
        """
        Initialize file storage.

        Args:
            root: Directory that holds one subdirectory per collection
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger(self.__class__.__name__)

    def _path(self, collection: str, key: str) -> Path:
        # Percent-encoding keeps distinct keys in distinct files
        safe_key = urllib.parse.quote(key, safe="")
        return self.root / collection / f"{safe_key}.json"

    def get(self, collection: str, key: str) -> Optional[dict]:
        path = self._path(collection, key)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def put(self, collection: str, key: str, record: dict) -> None:
        path = self._path(collection, key)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(record, f, indent=2, default=str)

    def delete(self, collection: str, key: str) -> bool:
        path = self._path(collection, key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list(self, collection: str) -> list[dict]:
        records = []
        for path in sorted((self.root / collection).glob("*.json")):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    records.append(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Error loading {path}: {e}")
        return records
