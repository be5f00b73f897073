"""
Key-value stores that hold the serialized blob for the blob backend.

Supports the browser's localStorage (Pyodide), Redis, a JSON file on disk,
and an in-memory dict for tests. Every store raises ``StorageError`` on I/O
failure.
"""
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Dict, Optional

from moodjournal.core.exceptions import InitializationError, StorageError

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """
    Dict-backed store. Nothing survives the process; use for tests only.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._store: Dict[str, str] = dict(initial or {})
        logger.warning("Using in-memory key-value store; data will not be persisted.")

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def close(self) -> None:
        """Nothing to release."""


class FileKeyValueStore:
    """
    One file per key under ``directory``. Writes go to a temporary file that
    is then renamed over the old one, so a crash never leaves half a blob.
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create storage directory {self.directory}: {exc}") from exc
        logger.info(f"Using file key-value store at {self.directory}")

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeError) as exc:
            raise StorageError(f"Failed to read {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, UnicodeError) as exc:
            raise StorageError(f"Failed to write {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete {key}: {exc}") from exc

    def close(self) -> None:
        """Files are opened per call; nothing to release."""


class RedisKeyValueStore:
    """
    Redis-backed store for hosts that already run Redis.
    """

    def __init__(self, redis_client):
        import redis

        self._redis = redis_client
        self._errors = (redis.RedisError,)
        logger.info("Using Redis key-value store")

    def get(self, key: str) -> Optional[str]:
        try:
            value = self._redis.get(key)
        except self._errors as exc:
            raise StorageError(f"Failed to read {key} from Redis: {exc}") from exc
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(key, value)
        except self._errors as exc:
            raise StorageError(f"Failed to write {key} to Redis: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except self._errors as exc:
            raise StorageError(f"Failed to delete {key} from Redis: {exc}") from exc

    def close(self) -> None:
        self._redis.close()


class BrowserLocalStorage:
    """
    ``window.localStorage`` when running under Pyodide in a browser.
    """

    def __init__(self):
        try:
            from js import localStorage
            from pyodide.ffi import JsException
        except ImportError as exc:
            raise InitializationError("Browser localStorage is only available under Pyodide") from exc

        self._storage = localStorage
        self._errors = (JsException,)
        logger.info("Using browser localStorage")

    def get(self, key: str) -> Optional[str]:
        try:
            return self._storage.getItem(key)
        except self._errors as exc:
            raise StorageError(f"Failed to read {key} from localStorage: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._storage.setItem(key, value)
        except self._errors as exc:
            # Typically QuotaExceededError
            raise StorageError(f"Failed to write {key} to localStorage: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._storage.removeItem(key)
        except self._errors as exc:
            raise StorageError(f"Failed to delete {key} from localStorage: {exc}") from exc

    def close(self) -> None:
        """The browser owns localStorage."""


def create_kv_store(kind: str = "auto", blob_path: str = "./moodjournal_data", redis_url: Optional[str] = None):
    """
    Create a key-value store.

    Args:
        kind: ``memory``, ``file``, ``redis``, ``browser`` or ``auto``. ``auto``
              picks localStorage under Pyodide, Redis when ``redis_url`` is
              set, and the file store otherwise.
        blob_path: Directory for the file store
        redis_url: Redis connection URL (e.g., "redis://localhost:6379/0")

    Returns:
        Key-value store instance

    Raises:
        InitializationError: If the requested store cannot be reached
    """
    if kind == "auto":
        if sys.platform == "emscripten":
            kind = "browser"
        elif redis_url:
            kind = "redis"
        else:
            kind = "file"

    if kind == "memory":
        return InMemoryKeyValueStore()
    if kind == "browser":
        return BrowserLocalStorage()
    if kind == "file":
        try:
            return FileKeyValueStore(blob_path)
        except StorageError as exc:
            raise InitializationError(str(exc)) from exc
    if kind == "redis":
        if not redis_url:
            raise InitializationError("blob_store=redis requires redis_url")

        import redis

        try:
            redis_client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            # Test connection
            redis_client.ping()
        except redis.RedisError as exc:
            logger.error(f"Failed to connect to Redis at {redis_url}: {exc}")
            raise InitializationError(f"Redis unavailable at {redis_url}") from exc
        return RedisKeyValueStore(redis_client)

    raise InitializationError(f"Unknown key-value store: {kind}")
