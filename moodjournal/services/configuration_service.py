"""
Configuration service for the global settings singleton.
"""
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from moodjournal.core.logging_config import log_error, log_info
from moodjournal.models import Configuration
from moodjournal.models.configuration import CONFIGURATION_ID
from moodjournal.schemas.configuration import ConfigurationRead, ConfigurationUpdate


class ConfigurationService:
    """Service class for configuration operations."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise

    def get_configuration(self) -> Optional[ConfigurationRead]:
        """Return the singleton row, or None if it has never been seeded."""
        config = self.session.get(Configuration, CONFIGURATION_ID)
        if config is None:
            return None
        return ConfigurationRead.model_validate(config)

    def update_configuration(self, config_data: ConfigurationUpdate) -> bool:
        """Apply the supplied fields; report whether anything was written."""
        changes = config_data.provided()
        if not changes:
            return False

        config = self.session.get(Configuration, CONFIGURATION_ID)
        if config is None:
            return False

        for field, value in changes.items():
            setattr(config, field, getattr(value, "value", value))

        self.session.add(config)
        self._commit()
        log_info(f"Configuration updated: {', '.join(sorted(changes))}")
        return True
