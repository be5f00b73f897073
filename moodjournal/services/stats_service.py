"""
Stats service for dashboard aggregates.
"""
from datetime import date
from typing import Dict, Optional

from sqlalchemy import desc
from sqlmodel import Session, select, func

from moodjournal.core.time_utils import day_bounds, to_storage
from moodjournal.models import EntryMoodLink, Mood, MoodEntry
from moodjournal.schemas.stats import MoodStats, NO_MOOD


class StatsService:
    """Read-only aggregates over the entry tables."""

    def __init__(self, session: Session):
        self.session = session

    def get_stats(self) -> MoodStats:
        """Entry count and the most frequent primary mood.

        Only position 0 links vote. Ties go to the mood seeded first.
        """
        total = self.session.exec(select(func.count(MoodEntry.id))).one()

        most_common = self.session.exec(
            select(Mood.name, func.count(EntryMoodLink.entry_id).label("uses"))
            .join(EntryMoodLink, EntryMoodLink.mood_id == Mood.id)
            .where(EntryMoodLink.position == 0)
            .group_by(Mood.id, Mood.name)
            .order_by(desc("uses"), Mood.id.asc())
            .limit(1)
        ).first()

        return MoodStats(
            total=total or 0,
            most_common_mood=most_common.name if most_common else NO_MOOD,
        )

    def get_mood_distribution(self) -> Dict[str, int]:
        """How often each mood appears across all entries, any position."""
        rows = self.session.exec(
            select(Mood.name, func.count(EntryMoodLink.entry_id).label("uses"))
            .join(EntryMoodLink, EntryMoodLink.mood_id == Mood.id)
            .group_by(Mood.id, Mood.name)
            .order_by(desc("uses"), Mood.id.asc())
        )
        return {row.name: row.uses for row in rows}

    def get_daily_counts(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict[str, int]:
        """Entries per UTC calendar day, keyed 'YYYY-MM-DD', oldest first."""
        day = func.date(MoodEntry.timestamp).label("day")
        statement = select(day, func.count(MoodEntry.id).label("entries"))

        if start_date:
            statement = statement.where(MoodEntry.timestamp >= to_storage(day_bounds(start_date)[0]))
        if end_date:
            statement = statement.where(MoodEntry.timestamp < to_storage(day_bounds(end_date)[1]))

        rows = self.session.exec(statement.group_by(day).order_by(day))
        return {row.day: row.entries for row in rows}
