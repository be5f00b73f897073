"""
Tag-related models.
"""
from sqlmodel import Field, CheckConstraint

from .base import BaseModel

DEFAULT_TAG_COLOR = "#CCCCCC"


class Tag(BaseModel, table=True):
    """
    Freeform label attached to entries. Created on first use, never deleted.
    """
    __tablename__ = "tag"

    name: str = Field(..., unique=True, min_length=1, max_length=100)
    color: str = Field(default=DEFAULT_TAG_COLOR, max_length=20)

    __table_args__ = (
        CheckConstraint('length(name) > 0', name='check_tag_name_not_empty'),
        {"sqlite_autoincrement": True},
    )
