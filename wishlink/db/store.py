"""
wishlink/db/store.py

Purpose: Key-value store adapter

- get/set of a named slot of JSON-serializable data
- Missing or corrupt values fall back to the caller's default
- set overwrites the whole slot
- Backends: in-memory (tests/dev), JSON files on disk, MongoDB
"""

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pymongo import MongoClient
from pymongo.collection import Collection

from wishlink.core.config import Settings
from wishlink.core.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore:
    """
    Base class for the storage backends.

    Values cross the boundary as JSON text so every backend has the same
    failure mode: text that does not parse is treated as absent.
    """

    backend = "abstract"

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def get(self, key: str, default: Any = None) -> Any:
        """
        Returns the stored value, or `default` if absent or corrupt.

        Args:
            key: Slot name
            default: Value returned when nothing usable is stored

        Returns:
            Decoded value or default
        """
        raw = self._read(key)
        if raw is None:
            return copy.deepcopy(default)

        try:
            return json.loads(raw)
        except (ValueError, TypeError):
            logger.warning(f"Corrupt value for key '{key}' in {self.backend} store, using default")
            return copy.deepcopy(default)

    def set(self, key: str, value: Any) -> None:
        """
        Serializes `value` and overwrites the slot.

        Args:
            key: Slot name
            value: JSON-serializable value
        """
        self._write(key, json.dumps(value))

    def ping(self) -> bool:
        """Checks that the backend is reachable."""
        return True

    def close(self) -> None:
        pass


class MemoryStore(KeyValueStore):
    """In-process store for tests and development."""

    backend = "memory"

    def __init__(self):
        self.data: Dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self.data[key] = raw

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    One `<key>.json` file per slot under a directory.

    Writes go to a temp file first and are moved into place, so a reader
    never sees a half-written slot.
    """

    backend = "file"

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning(f"Undecodable file for key '{key}': {path}")
            return ""

    def _write(self, key: str, raw: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(raw)
            os.replace(tmp_path, self._path(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def ping(self) -> bool:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Storage directory unavailable: {e}")
            return False
        return os.access(self.directory, os.W_OK)


class MongoStore(KeyValueStore):
    """
    One document per slot: {"_id": key, "value": "<json text>"}.
    """

    backend = "mongo"

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None):
        self.collection = collection
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "MongoStore":
        # Fix URL encoding for special characters
        mongodb_url = config.MONGODB_URL.replace("%%", "%25")

        client = MongoClient(
            mongodb_url,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
        )
        collection = client[config.MONGODB_DB_NAME][config.MONGODB_COLLECTION]
        logger.info(f"MongoDB store ready: {config.MONGODB_DB_NAME}.{config.MONGODB_COLLECTION}")
        return cls(collection, client=client)

    def _read(self, key: str) -> Optional[str]:
        doc = self.collection.find_one({"_id": key})
        if doc is None:
            return None
        return doc.get("value")

    def _write(self, key: str, raw: str) -> None:
        self.collection.replace_one({"_id": key}, {"_id": key, "value": raw}, upsert=True)

    def delete(self, key: str) -> None:
        self.collection.delete_one({"_id": key})

    def ping(self) -> bool:
        if self.client is None:
            return True
        try:
            self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    def close(self) -> None:
        if self.client is not None:
            logger.info("Closing MongoDB connection")
            self.client.close()
            self.client = None


def create_store(config: Settings) -> KeyValueStore:
    """
    Builds the store selected by STORAGE_BACKEND.

    Args:
        config: Application settings

    Returns:
        KeyValueStore instance
    """
    if config.STORAGE_BACKEND == "memory":
        return MemoryStore()
    if config.STORAGE_BACKEND == "mongo":
        return MongoStore.from_settings(config)
    return JsonFileStore(config.STORAGE_DIR)
