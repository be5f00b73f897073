"""
Entry service for managing mood entries and their mood/tag links.
"""
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from moodjournal.core.logging_config import log_error, log_info
from moodjournal.core.time_utils import day_bounds, to_storage, utc_now
from moodjournal.models import EntryMoodLink, EntryTagLink, Mood, MoodEntry, Tag
from moodjournal.schemas.entry import MoodEntryCreate, MoodEntryRead, MoodEntryUpdate
from moodjournal.services.tag_service import TagService


def collect_entries(rows: Iterable) -> List[MoodEntryRead]:
    """Fold joined (entry x mood x tag) rows back into one object per entry.

    An entry with m moods and t tags comes back as m*t rows, so every mood
    and tag name repeats; names are collected per entry by link position and
    deduplicated. Entry order is the order rows first mention each entry.
    """
    grouped: Dict[int, dict] = {}
    for row in rows:
        entry = grouped.get(row.id)
        if entry is None:
            entry = grouped[row.id] = {
                "id": row.id,
                "timestamp": row.timestamp,
                "notes": row.notes,
                "moods": {},
                "tags": {},
            }
        if row.mood_name is not None:
            entry["moods"].setdefault(row.mood_name, row.mood_position)
        if row.tag_name is not None:
            entry["tags"].setdefault(row.tag_name, row.tag_position)

    return [
        MoodEntryRead(
            id=entry["id"],
            timestamp=entry["timestamp"],
            notes=entry["notes"],
            mood_names=sorted(entry["moods"], key=entry["moods"].get),
            tag_names=sorted(entry["tags"], key=entry["tags"].get),
        )
        for entry in grouped.values()
    ]


class EntryService:
    """Service class for entry operations."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        """Commit database changes with proper error handling."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise

    @staticmethod
    def _entry_rows_statement():
        return (
            select(
                MoodEntry.id,
                MoodEntry.timestamp,
                MoodEntry.notes,
                Mood.name.label("mood_name"),
                EntryMoodLink.position.label("mood_position"),
                Tag.name.label("tag_name"),
                EntryTagLink.position.label("tag_position"),
            )
            .select_from(MoodEntry)
            .outerjoin(EntryMoodLink, EntryMoodLink.entry_id == MoodEntry.id)
            .outerjoin(Mood, Mood.id == EntryMoodLink.mood_id)
            .outerjoin(EntryTagLink, EntryTagLink.entry_id == MoodEntry.id)
            .outerjoin(Tag, Tag.id == EntryTagLink.tag_id)
            .order_by(MoodEntry.timestamp.desc(), MoodEntry.id.desc())
        )

    def _resolve_mood_ids(self, names: List[str]) -> List[int]:
        """Catalogue ids for ``names`` in input order; unknown names are dropped."""
        if not names:
            return []
        statement = select(Mood.id, Mood.name).where(Mood.name.in_(names))
        ids_by_name = {name: mood_id for mood_id, name in self.session.exec(statement)}
        return [ids_by_name[name] for name in names if name in ids_by_name]

    def _link_moods(self, entry_id: int, names: List[str]) -> None:
        for position, mood_id in enumerate(self._resolve_mood_ids(names)):
            self.session.add(EntryMoodLink(entry_id=entry_id, mood_id=mood_id, position=position))

    def _link_tags(self, entry_id: int, names: List[str]) -> None:
        tag_ids = TagService(self.session).get_or_create_ids(names)
        for position, name in enumerate(names):
            self.session.add(EntryTagLink(entry_id=entry_id, tag_id=tag_ids[name], position=position))

    def create_entry(self, entry_data: MoodEntryCreate) -> MoodEntryRead:
        """Create an entry with its mood and tag links in one transaction."""
        entry = MoodEntry(
            timestamp=to_storage(entry_data.timestamp or utc_now()),
            notes=entry_data.notes,
        )
        self.session.add(entry)
        self.session.flush()
        entry_id = entry.id

        self._link_moods(entry_id, entry_data.mood_names)
        self._link_tags(entry_id, entry_data.tag_names)
        self._commit()

        log_info(f"Entry created: {entry_id}")
        return self.get_entry_by_id(entry_id)

    def get_all_entries(self) -> List[MoodEntryRead]:
        """All entries, most recent first."""
        return collect_entries(self.session.exec(self._entry_rows_statement()))

    def get_entry_by_id(self, entry_id: int) -> Optional[MoodEntryRead]:
        statement = self._entry_rows_statement().where(MoodEntry.id == entry_id)
        entries = collect_entries(self.session.exec(statement))
        return entries[0] if entries else None

    def get_entries_by_date(self, day: Union[date, datetime, str]) -> List[MoodEntryRead]:
        """Entries whose UTC timestamp falls on ``day``."""
        start, end = day_bounds(day)
        statement = self._entry_rows_statement().where(
            MoodEntry.timestamp >= to_storage(start),
            MoodEntry.timestamp < to_storage(end),
        )
        return collect_entries(self.session.exec(statement))

    def update_entry(self, entry_id: int, entry_data: MoodEntryUpdate) -> bool:
        """Replace each supplied field. Returns False for an empty patch or unknown id."""
        changes = entry_data.provided()
        if not changes:
            return False

        entry = self.session.get(MoodEntry, entry_id)
        if entry is None:
            return False

        if "notes" in changes:
            entry.notes = changes["notes"]
            self.session.add(entry)

        if "mood_names" in changes:
            self.session.exec(delete(EntryMoodLink).where(EntryMoodLink.entry_id == entry_id))
            self._link_moods(entry_id, changes["mood_names"])

        if "tag_names" in changes:
            self.session.exec(delete(EntryTagLink).where(EntryTagLink.entry_id == entry_id))
            self._link_tags(entry_id, changes["tag_names"])

        self._commit()
        log_info(f"Entry updated: {entry_id} ({', '.join(sorted(changes))})")
        return True

    def delete_entry(self, entry_id: int) -> bool:
        """Hard delete an entry and its links. Catalogue rows are kept."""
        self.session.exec(delete(EntryMoodLink).where(EntryMoodLink.entry_id == entry_id))
        self.session.exec(delete(EntryTagLink).where(EntryTagLink.entry_id == entry_id))
        result = self.session.exec(delete(MoodEntry).where(MoodEntry.id == entry_id))
        self._commit()

        deleted = result.rowcount > 0
        if deleted:
            log_info(f"Entry hard-deleted: {entry_id}")
        return deleted

    def delete_all_entries(self) -> bool:
        """Delete every entry and link; tags stay as reusable vocabulary."""
        self.session.exec(delete(EntryMoodLink))
        self.session.exec(delete(EntryTagLink))
        result = self.session.exec(delete(MoodEntry))
        self._commit()

        log_info(f"All entries deleted: {result.rowcount}")
        return result.rowcount > 0
