import pytest

from moodjournal.core.exceptions import StorageError
from moodjournal.storage.blob_store import BlobMoodStore
from moodjournal.storage.kv import InMemoryKeyValueStore
from moodjournal.storage.sql_store import SQLMoodStore


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no storage backend)")
    config.addinivalue_line("markers", "integration: Tests against a storage backend")


class FlakyKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose writes can be made to fail."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full")
        super().set(key, value)


@pytest.fixture()
def sql_store():
    store = SQLMoodStore("sqlite://")
    store.ensure_schema()
    yield store
    store.shutdown()


@pytest.fixture()
def kv_store():
    return FlakyKeyValueStore()


@pytest.fixture()
def blob_store(kv_store):
    store = BlobMoodStore(kv_store)
    store.ensure_schema()
    yield store
    store.shutdown()


@pytest.fixture(params=["sql", "blob"])
def store(request):
    """Each test using this fixture runs once per backend."""
    return request.getfixturevalue(f"{request.param}_store")
