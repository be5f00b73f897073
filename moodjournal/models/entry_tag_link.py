"""
Entry-Tag link model.
"""
from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, Index, SQLModel


class EntryTagLink(SQLModel, table=True):
    """
    Link table for many-to-many relationship between entries and tags.
    """
    __tablename__ = "entry_tag_link"

    entry_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("mood_entry.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False
        )
    )
    tag_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("tag.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False
        )
    )
    position: int = Field(default=0, ge=0, nullable=False)

    __table_args__ = (
        # Only tag_id needs its own index; entry_id leads the primary key.
        Index('idx_entry_tag_link_tag_id', 'tag_id'),
    )
