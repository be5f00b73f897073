"""
Schema service: creates tables and seed data idempotently.
"""
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from moodjournal.core.logging_config import log_error, log_info
from moodjournal.models import Configuration, Mood, MOOD_CATALOGUE
from moodjournal.models.configuration import CONFIGURATION_ID, DEFAULT_REMINDER_TIME, DEFAULT_THEME


class SchemaService:
    """Service class for schema creation and seeding."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise

    def ensure_schema(self) -> None:
        """Create missing tables, then seed the configuration row and mood catalogue.

        Safe on every startup: seeding is insert-if-absent per row, so a
        catalogue that was only partially written is completed.
        """
        SQLModel.metadata.create_all(self.session.connection())

        self.session.exec(
            sqlite_insert(Configuration)
            .values(
                id=CONFIGURATION_ID,
                reminder_enabled=True,
                reminder_time=DEFAULT_REMINDER_TIME,
                theme=DEFAULT_THEME.value,
            )
            .on_conflict_do_nothing(index_elements=["id"])
        )

        result = self.session.exec(
            sqlite_insert(Mood)
            .values([
                {"name": name, "color": color, "icon": icon}
                for name, color, icon in MOOD_CATALOGUE
            ])
            .on_conflict_do_nothing(index_elements=["name"])
        )
        self._commit()

        if result.rowcount:
            log_info("Mood catalogue seeded", inserted=result.rowcount)
        log_info("Database schema ready")
