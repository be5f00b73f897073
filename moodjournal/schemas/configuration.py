"""
Configuration schemas.
"""
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from moodjournal.models.enums import Theme
from moodjournal.schemas.base import PatchModel

REMINDER_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _validate_reminder_time(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not REMINDER_TIME_PATTERN.match(v):
        raise ValueError('Reminder time must use HH:MM format')
    return v


class ConfigurationRead(BaseModel):
    """Configuration response schema."""
    model_config = ConfigDict(from_attributes=True)

    reminder_enabled: bool
    reminder_time: str
    theme: Theme


class ConfigurationUpdate(PatchModel):
    """Configuration update schema; only supplied fields are written."""
    reminder_enabled: Optional[bool] = None
    reminder_time: Optional[str] = None
    theme: Optional[Theme] = None

    @field_validator('reminder_time')
    @classmethod
    def validate_reminder_time(cls, v):
        return _validate_reminder_time(v)
