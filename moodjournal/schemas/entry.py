"""
Mood entry schemas.
"""
from datetime import datetime
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field, field_validator

from moodjournal.core.time_utils import ensure_utc
from moodjournal.schemas.base import PatchModel, TimestampMixin, unique_names


def _coerce_timestamp(v):
    # A bare calendar day means midnight UTC of that day.
    if isinstance(v, str) and len(v.strip()) == 10:
        return v.strip() + "T00:00:00"
    return v


class MoodEntryCreate(BaseModel):
    """Payload for creating an entry."""
    timestamp: Optional[datetime] = None
    mood_names: List[str] = Field(..., min_length=1)
    tag_names: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator('timestamp', mode='before')
    @classmethod
    def validate_timestamp(cls, v):
        return _coerce_timestamp(v)

    @field_validator('mood_names', 'tag_names')
    @classmethod
    def validate_names(cls, v):
        return unique_names(v)


class MoodEntryUpdate(PatchModel):
    """Partial entry update.

    ``notes=None`` clears the notes; omitting ``notes`` leaves them alone.
    ``mood_names``/``tag_names`` replace the whole set when supplied.
    ``mood`` is shorthand for ``mood_names=[mood]`` and is ignored when
    ``mood_names`` is also given.
    """
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"notes"})

    notes: Optional[str] = None
    mood: Optional[str] = None
    mood_names: Optional[List[str]] = None
    tag_names: Optional[List[str]] = None

    @field_validator('mood_names', 'tag_names')
    @classmethod
    def validate_names(cls, v):
        if v is None:
            return v
        return unique_names(v)

    def provided(self) -> Dict[str, Any]:
        data = super().provided()
        mood = data.pop("mood", None)
        if "mood_names" not in data and mood and mood.strip():
            data["mood_names"] = [mood]
        return data


class MoodEntryRead(TimestampMixin):
    """A stored entry with its moods and tags reconstructed in order."""
    id: int
    timestamp: datetime
    notes: Optional[str] = None
    mood_names: List[str] = Field(default_factory=list)
    tag_names: List[str] = Field(default_factory=list)

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def primary_mood(self) -> Optional[str]:
        return self.mood_names[0] if self.mood_names else None
