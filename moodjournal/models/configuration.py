"""
Global configuration singleton.
"""
from sqlmodel import SQLModel, Field, CheckConstraint

from .enums import Theme

CONFIGURATION_ID = 1
DEFAULT_REMINDER_TIME = "08:00"
DEFAULT_THEME = Theme.DARK


class Configuration(SQLModel, table=True):
    """
    Application settings. Exactly one row exists, with ``id == CONFIGURATION_ID``.
    """
    __tablename__ = "configuration"

    id: int = Field(default=CONFIGURATION_ID, primary_key=True)
    reminder_enabled: bool = Field(default=True, nullable=False)
    reminder_time: str = Field(default=DEFAULT_REMINDER_TIME, max_length=5, nullable=False)
    theme: str = Field(default=DEFAULT_THEME.value, max_length=10, nullable=False)

    __table_args__ = (
        CheckConstraint("theme IN ('light', 'dark')", name='check_configuration_theme'),
        CheckConstraint(f"id = {CONFIGURATION_ID}", name='check_configuration_singleton'),
    )
