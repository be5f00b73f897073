"""
Tag service for handling tag-related operations.
"""
from typing import Dict, List, Optional

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from moodjournal.core.logging_config import log_error, log_info
from moodjournal.models import Tag, DEFAULT_TAG_COLOR


class TagService:
    """Service class for tag operations."""

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

    def get_tag_by_name(self, name: str) -> Optional[Tag]:
        """Get a tag by its exact name."""
        statement = select(Tag).where(Tag.name == name)
        return self.session.exec(statement).first()

    def get_or_create_id(self, name: str, color: Optional[str] = None) -> int:
        """Insert the tag if absent, then look up its id. Does not commit.

        ``color`` only applies to a newly created tag.
        """
        existing = self.get_tag_by_name(name)
        if existing is not None:
            return existing.id

        result = self.session.exec(
            sqlite_insert(Tag)
            .values(name=name, color=color or DEFAULT_TAG_COLOR)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        if result.rowcount:
            log_info(f"Tag created: {name}")
        return self.session.exec(select(Tag.id).where(Tag.name == name)).one()

    def get_or_create_ids(self, names: List[str]) -> Dict[str, int]:
        """Resolve every name to a tag id, creating missing tags. Does not commit."""
        return {name: self.get_or_create_id(name) for name in names}

    def create_tag(self, name: str, color: Optional[str] = None) -> int:
        """Get or create a tag and commit."""
        tag_id = self.get_or_create_id(name, color)
        self._commit()
        return tag_id

    def get_tags(self) -> List[Tag]:
        """All tags ordered by name."""
        statement = select(Tag).order_by(Tag.name.asc())
        return list(self.session.exec(statement))
