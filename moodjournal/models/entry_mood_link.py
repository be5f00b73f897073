"""
Entry-Mood link model.
"""
from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, Index, SQLModel


class EntryMoodLink(SQLModel, table=True):
    """
    Link table for many-to-many relationship between entries and moods.

    ``position`` keeps the order the moods were given in; position 0 is the
    entry's primary mood. Catalogue moods cannot be deleted while linked.
    """
    __tablename__ = "entry_mood_link"

    entry_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("mood_entry.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False
        )
    )
    mood_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("mood.id", ondelete="RESTRICT"),
            primary_key=True,
            nullable=False
        )
    )
    position: int = Field(default=0, ge=0, nullable=False)

    __table_args__ = (
        Index('idx_entry_mood_link_mood_id', 'mood_id'),
    )
