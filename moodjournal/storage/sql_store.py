"""
Embedded SQLite backend.
"""
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from moodjournal.core.database import create_db_engine
from moodjournal.core.exceptions import InitializationError, StorageError
from moodjournal.core.logging_config import log_error, log_info
from moodjournal.models import Mood
from moodjournal.schemas.configuration import ConfigurationRead, ConfigurationUpdate
from moodjournal.schemas.entry import MoodEntryCreate, MoodEntryRead, MoodEntryUpdate
from moodjournal.schemas.mood import MoodRead
from moodjournal.schemas.stats import MoodStats
from moodjournal.schemas.tag import TagRead, require_tag_name
from moodjournal.services.configuration_service import ConfigurationService
from moodjournal.services.entry_service import EntryService
from moodjournal.services.schema_service import SchemaService
from moodjournal.services.stats_service import StatsService
from moodjournal.services.tag_service import TagService
from moodjournal.storage.base import Day, MoodStore, as_schema


class SQLMoodStore(MoodStore):
    """Store backed by one SQLite connection held for the process lifetime."""

    backend_name = "sql"

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self.engine: Optional[Engine] = None

    def ensure_schema(self) -> None:
        try:
            if self.engine is None:
                self.engine = create_db_engine(self.database_url, echo=self.echo)
            with Session(self.engine) as session:
                SchemaService(session).ensure_schema()
        except SQLAlchemyError as exc:
            log_error(exc, database_url=self.database_url)
            self.shutdown()
            raise InitializationError(f"Failed to initialize database: {exc}") from exc
        log_info("SQL store ready", database_url=self.database_url)

    def shutdown(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            log_info("SQL store closed", database_url=self.database_url)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """One session per operation; SQLAlchemy errors surface as StorageError."""
        if self.engine is None:
            raise StorageError("Store not initialized; call ensure_schema() first")
        with Session(self.engine) as session:
            try:
                yield session
            except (SQLAlchemyError, UnicodeError) as exc:
                session.rollback()
                log_error(exc)
                raise StorageError(str(exc)) from exc

    # Entries
    def create_entry(self, entry_data: Union[MoodEntryCreate, Mapping[str, Any]]) -> MoodEntryRead:
        entry_data = as_schema(entry_data, MoodEntryCreate)
        with self._session() as session:
            return EntryService(session).create_entry(entry_data)

    def get_all_entries(self) -> List[MoodEntryRead]:
        with self._session() as session:
            return EntryService(session).get_all_entries()

    def get_entry(self, entry_id: int) -> Optional[MoodEntryRead]:
        with self._session() as session:
            return EntryService(session).get_entry_by_id(entry_id)

    def get_entries_by_date(self, day: Day) -> List[MoodEntryRead]:
        with self._session() as session:
            return EntryService(session).get_entries_by_date(day)

    def update_entry(self, entry_id: int, entry_data: Union[MoodEntryUpdate, Mapping[str, Any]]) -> bool:
        entry_data = as_schema(entry_data, MoodEntryUpdate)
        with self._session() as session:
            return EntryService(session).update_entry(entry_id, entry_data)

    def delete_entry(self, entry_id: int) -> bool:
        with self._session() as session:
            return EntryService(session).delete_entry(entry_id)

    def delete_all_entries(self) -> bool:
        with self._session() as session:
            return EntryService(session).delete_all_entries()

    # Catalogues
    def get_or_create_tag(self, name: str, color: Optional[str] = None) -> int:
        name = require_tag_name(name)
        with self._session() as session:
            return TagService(session).create_tag(name, color)

    def list_tags(self) -> List[TagRead]:
        with self._session() as session:
            return [TagRead.model_validate(tag) for tag in TagService(session).get_tags()]

    def list_moods(self) -> List[MoodRead]:
        with self._session() as session:
            moods = session.exec(select(Mood).order_by(Mood.id.asc()))
            return [MoodRead.model_validate(mood) for mood in moods]

    # Configuration
    def get_configuration(self) -> Optional[ConfigurationRead]:
        with self._session() as session:
            return ConfigurationService(session).get_configuration()

    def update_configuration(self, config_data: Union[ConfigurationUpdate, Mapping[str, Any]]) -> bool:
        config_data = as_schema(config_data, ConfigurationUpdate)
        with self._session() as session:
            return ConfigurationService(session).update_configuration(config_data)

    # Stats
    def get_stats(self) -> MoodStats:
        with self._session() as session:
            return StatsService(session).get_stats()

    def get_mood_distribution(self) -> Dict[str, int]:
        with self._session() as session:
            return StatsService(session).get_mood_distribution()

    def get_daily_counts(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Dict[str, int]:
        with self._session() as session:
            return StatsService(session).get_daily_counts(start_date, end_date)
