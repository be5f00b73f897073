"""
Entry-related models.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, Index

from moodjournal.core.time_utils import utc_now, to_storage

from .base import BaseModel


def _now_for_storage() -> datetime:
    return to_storage(utc_now())


class MoodEntry(BaseModel, table=True):
    """
    One journaling event.

    ``timestamp`` is stored as naive UTC in a plain ``DateTime`` column; every
    value bound to it (inserts and range bounds) goes through ``to_storage``.
    """
    __tablename__ = "mood_entry"

    timestamp: datetime = Field(
        default_factory=_now_for_storage,
        sa_column=Column(DateTime(timezone=False), nullable=False)
    )
    notes: Optional[str] = Field(None)

    __table_args__ = (
        Index('idx_mood_entry_timestamp', 'timestamp'),
        {"sqlite_autoincrement": True},
    )
