"""
The storage interface every backend implements.

The rest of the application talks only to :class:`MoodStore`; which
implementation it gets is decided once, in :mod:`moodjournal.storage.selector`.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from moodjournal.schemas.configuration import ConfigurationRead, ConfigurationUpdate
from moodjournal.schemas.entry import MoodEntryCreate, MoodEntryRead, MoodEntryUpdate
from moodjournal.schemas.mood import MoodRead
from moodjournal.schemas.stats import EntryFilters, MoodStats
from moodjournal.schemas.tag import TagRead
from moodjournal.services.filter_service import filter_entries

SchemaT = TypeVar("SchemaT", bound=BaseModel)
Day = Union[date, datetime, str]


def as_schema(data: Union[SchemaT, Mapping[str, Any]], schema: Type[SchemaT]) -> SchemaT:
    """Accept either a schema instance or a plain mapping of its fields."""
    if isinstance(data, schema):
        return data
    return schema.model_validate(data)


class MoodStore(ABC):
    """Schema, entries, tags, configuration and stats behind one interface.

    Not-found is never an error: lookups return ``None``, deletes ``False``.
    Backend failures raise :class:`~moodjournal.core.exceptions.StorageError`;
    :meth:`ensure_schema` raises
    :class:`~moodjournal.core.exceptions.InitializationError`.
    """

    backend_name: str = ""

    def __enter__(self) -> "MoodStore":
        self.ensure_schema()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # Schema / lifetime
    @abstractmethod
    def ensure_schema(self) -> None:
        """Open the backend and create/seed whatever is missing. Idempotent."""

    @abstractmethod
    def shutdown(self) -> None:
        """Release the backend handle. Safe to call more than once."""

    # Entries
    @abstractmethod
    def create_entry(self, entry_data: Union[MoodEntryCreate, Mapping[str, Any]]) -> MoodEntryRead:
        ...

    @abstractmethod
    def get_all_entries(self) -> List[MoodEntryRead]:
        ...

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[MoodEntryRead]:
        ...

    @abstractmethod
    def get_entries_by_date(self, day: Day) -> List[MoodEntryRead]:
        ...

    @abstractmethod
    def update_entry(self, entry_id: int, entry_data: Union[MoodEntryUpdate, Mapping[str, Any]]) -> bool:
        ...

    @abstractmethod
    def delete_entry(self, entry_id: int) -> bool:
        ...

    @abstractmethod
    def delete_all_entries(self) -> bool:
        ...

    def search_entries(self, filters: Union[EntryFilters, Mapping[str, Any]]) -> List[MoodEntryRead]:
        """Load every entry and filter in memory."""
        return filter_entries(self.get_all_entries(), as_schema(filters, EntryFilters))

    # Catalogues
    @abstractmethod
    def get_or_create_tag(self, name: str, color: Optional[str] = None) -> int:
        """Id of the tag named exactly ``name``, creating it if absent.

        Raises:
            ValueError: If ``name`` is empty or whitespace only
        """

    @abstractmethod
    def list_tags(self) -> List[TagRead]:
        ...

    @abstractmethod
    def list_moods(self) -> List[MoodRead]:
        ...

    # Configuration
    @abstractmethod
    def get_configuration(self) -> Optional[ConfigurationRead]:
        ...

    @abstractmethod
    def update_configuration(self, config_data: Union[ConfigurationUpdate, Mapping[str, Any]]) -> bool:
        ...

    # Stats
    @abstractmethod
    def get_stats(self) -> MoodStats:
        ...

    @abstractmethod
    def get_mood_distribution(self) -> Dict[str, int]:
        ...

    @abstractmethod
    def get_daily_counts(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Dict[str, int]:
        ...
