"""
SQLModel table models. Importing this package registers every table on
``SQLModel.metadata``.
"""
from .configuration import Configuration
from .entry import MoodEntry
from .entry_mood_link import EntryMoodLink
from .entry_tag_link import EntryTagLink
from .enums import Theme
from .mood import Mood, MOOD_CATALOGUE
from .tag import Tag, DEFAULT_TAG_COLOR

__all__ = [
    "Configuration",
    "EntryMoodLink",
    "EntryTagLink",
    "Mood",
    "MOOD_CATALOGUE",
    "MoodEntry",
    "Tag",
    "DEFAULT_TAG_COLOR",
    "Theme",
]
