"""
Base model classes and common functionality.

Entities use SQLite integer primary keys. ``sqlite_autoincrement`` keeps ids
from being reused after the highest row is deleted, so an id is stable for
the lifetime of its record and never handed to a later one.
"""
from typing import Optional

from sqlmodel import SQLModel, Field


class BaseModel(SQLModel):
    """
    Base model with an auto-incrementing integer primary key.
    """
    __abstract__ = True
    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Generated identifier for this record"
    )
