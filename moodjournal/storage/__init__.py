"""
Storage backends behind the :class:`MoodStore` interface.
"""
from .base import MoodStore
from .blob_store import BlobMoodStore
from .selector import create_store
from .sql_store import SQLMoodStore

__all__ = ["BlobMoodStore", "MoodStore", "SQLMoodStore", "create_store"]
