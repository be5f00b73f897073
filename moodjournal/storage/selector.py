"""
Storage backend selection.

Chosen once per process: the embedded SQLite backend wherever the
``sqlite3`` module exists, the blob backend in a browser (Pyodide) or on
interpreters built without SQLite.
"""
import importlib.util
import sys
from typing import Optional

from moodjournal.core.config import Settings, settings as default_settings
from moodjournal.core.exceptions import InitializationError
from moodjournal.core.logging_config import log_info, log_warning
from moodjournal.storage.base import MoodStore
from moodjournal.storage.blob_store import BlobMoodStore
from moodjournal.storage.kv import create_kv_store
from moodjournal.storage.sql_store import SQLMoodStore


def is_browser_runtime() -> bool:
    """True when running under Pyodide/WebAssembly."""
    return sys.platform == "emscripten"


def sqlite_available() -> bool:
    return importlib.util.find_spec("sqlite3") is not None


def select_backend(config: Settings) -> str:
    """Resolve ``storage_backend`` to ``sql`` or ``blob``."""
    if config.storage_backend != "auto":
        return config.storage_backend
    if is_browser_runtime():
        return "blob"
    if not sqlite_available():
        log_warning("sqlite3 is not available; falling back to the blob backend")
        return "blob"
    return "sql"


def create_store(config: Optional[Settings] = None) -> MoodStore:
    """Build the store for this process. Call ``ensure_schema()`` on it next.

    Raises:
        InitializationError: If the chosen backend cannot be constructed
    """
    config = config or default_settings
    backend = select_backend(config)

    if backend == "sql":
        store = SQLMoodStore(config.database_url, echo=config.sql_echo)
    elif backend == "blob":
        kv_store = create_kv_store(config.blob_store, config.blob_path, config.redis_url)
        store = BlobMoodStore(kv_store, key=config.blob_key)
    else:
        raise InitializationError(f"Unknown storage backend: {backend}")

    log_info(f"Storage backend selected: {store.backend_name}")
    return store
