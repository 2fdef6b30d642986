"""
Session Store

Shared key-value store with per-entry expiry. Holds serialized game
sessions, per-owner active session pointers and the cached word corpus.
The store has no game logic; the engine builds its guarantees on the
atomic operations below.
"""

import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from pymongo import ASCENDING, MongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.server_api import ServerApi

from ..errors import ServiceUnavailableError
from ..utils.game_logger import game_logger


class SessionStore(ABC):
    """
    Key-value store contract shared by all backends.

    Values are strings, every write carries a time-to-live in seconds,
    and every write bumps the entry's version. Entries past their expiry
    are treated as absent even if the backend has not evicted them yet.
    """

    @abstractmethod
    def get_versioned(self, key: str) -> Optional[Tuple[str, int]]:
        """Return (value, version) or None if the key is absent or expired."""

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> None:
        """Unconditionally write a value."""

    @abstractmethod
    def set_if_absent(self, key: str, value: str, ttl: int) -> bool:
        """Atomically create the key. Returns False if a live entry exists."""

    @abstractmethod
    def compare_and_set(self, key: str, value: str, ttl: int, expected_version: int) -> bool:
        """Atomically replace the value only if the stored version matches."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete the key. Returns True if something was removed."""

    @abstractmethod
    def delete_if_equals(self, key: str, expected: str) -> bool:
        """Delete the key only if its current value equals expected."""

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the backend is reachable."""

    def get(self, key: str) -> Optional[str]:
        entry = self.get_versioned(key)
        return entry[0] if entry else None


@dataclass
class _MemoryEntry:
    value: str
    version: int
    expires_at: float


class MemorySessionStore(SessionStore):
    """
    Single-process store for development and tests.

    Not shared between processes, so it must not back more than one
    server instance.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: Dict[str, _MemoryEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _live_entry(self, key: str) -> Optional[_MemoryEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def get_versioned(self, key: str) -> Optional[Tuple[str, int]]:
        with self._lock:
            entry = self._live_entry(key)
            return (entry.value, entry.version) if entry else None

    def set(self, key: str, value: str, ttl: int) -> None:
        with self._lock:
            entry = self._live_entry(key)
            version = entry.version + 1 if entry else 1
            self._entries[key] = _MemoryEntry(value, version, self._clock() + ttl)

    def set_if_absent(self, key: str, value: str, ttl: int) -> bool:
        with self._lock:
            if self._live_entry(key) is not None:
                return False
            self._entries[key] = _MemoryEntry(value, 1, self._clock() + ttl)
            return True

    def compare_and_set(self, key: str, value: str, ttl: int, expected_version: int) -> bool:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None or entry.version != expected_version:
                return False
            self._entries[key] = _MemoryEntry(value, expected_version + 1, self._clock() + ttl)
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_if_equals(self, key: str, expected: str) -> bool:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None or entry.value != expected:
                return False
            del self._entries[key]
            return True

    def ping(self) -> bool:
        return True


@contextmanager
def _store_operation(operation: str):
    """Translate MongoDB failures into ServiceUnavailableError."""
    try:
        yield
    except PyMongoError as e:
        game_logger.logger.error(f"Session store {operation} failed: {e}")
        raise ServiceUnavailableError("Session store unavailable") from e


class MongoSessionStore(SessionStore):
    """
    MongoDB-backed store shared by every server instance.

    One document per key: {_id, value, version, expires_at}. A TTL index on
    expires_at lets MongoDB evict expired entries in the background.
    """

    def __init__(self, mongo_uri: Optional[str] = None, db_name: str = 'wordle_game', collection=None):
        """
        Initialize the store with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string
            db_name: Database holding the kv_store collection
            collection: Pre-built collection, used instead of connecting
        """
        self.client = None
        if collection is None:
            self.client = MongoClient(mongo_uri, server_api=ServerApi('1'))
            collection = self.client[db_name].kv_store
        self.collection = collection

        with _store_operation('index creation'):
            self.collection.create_index([('expires_at', ASCENDING)], expireAfterSeconds=0)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _expiry(self, ttl: int) -> datetime:
        return self._now() + timedelta(seconds=ttl)

    def get_versioned(self, key: str) -> Optional[Tuple[str, int]]:
        with _store_operation('read'):
            document = self.collection.find_one({'_id': key, 'expires_at': {'$gt': self._now()}})
        if not document:
            return None
        return document['value'], document['version']

    def set(self, key: str, value: str, ttl: int) -> None:
        with _store_operation('write'):
            self.collection.update_one(
                {'_id': key},
                {'$set': {'value': value, 'expires_at': self._expiry(ttl)}, '$inc': {'version': 1}},
                upsert=True
            )

    def set_if_absent(self, key: str, value: str, ttl: int) -> bool:
        with _store_operation('create'):
            # Clear an entry the TTL monitor has not evicted yet
            self.collection.delete_one({'_id': key, 'expires_at': {'$lte': self._now()}})
            try:
                self.collection.insert_one({
                    '_id': key,
                    'value': value,
                    'version': 1,
                    'expires_at': self._expiry(ttl)
                })
            except DuplicateKeyError:
                return False
        return True

    def compare_and_set(self, key: str, value: str, ttl: int, expected_version: int) -> bool:
        with _store_operation('compare-and-set'):
            result = self.collection.update_one(
                {'_id': key, 'version': expected_version, 'expires_at': {'$gt': self._now()}},
                {'$set': {'value': value, 'expires_at': self._expiry(ttl)}, '$inc': {'version': 1}}
            )
        return result.matched_count == 1

    def delete(self, key: str) -> bool:
        with _store_operation('delete'):
            result = self.collection.delete_one({'_id': key})
        return result.deleted_count == 1

    def delete_if_equals(self, key: str, expected: str) -> bool:
        with _store_operation('conditional delete'):
            result = self.collection.delete_one({'_id': key, 'value': expected})
        return result.deleted_count == 1

    def ping(self) -> bool:
        try:
            self.collection.database.command('ping')
            return True
        except PyMongoError as e:
            game_logger.logger.warning(f"Session store ping failed: {e}")
            return False

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


def create_session_store(config_class) -> SessionStore:
    """Build the store configured by MONGO_URI, or an in-memory store without it."""
    if config_class.MONGO_URI:
        store = MongoSessionStore(config_class.MONGO_URI, config_class.MONGO_DB_NAME)
        game_logger.logger.info(f"Using MongoDB session store (database '{config_class.MONGO_DB_NAME}')")
        return store

    game_logger.logger.warning("MONGO_URI not configured, using in-memory session store (single instance only)")
    return MemorySessionStore()
