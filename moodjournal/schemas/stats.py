"""
Statistics and filtering schemas.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, model_validator

NO_MOOD = "N/A"


class MoodStats(BaseModel):
    """Dashboard summary."""
    total: int = 0
    most_common_mood: str = NO_MOOD


class EntryFilters(BaseModel):
    """In-memory filters applied to already-loaded entries."""
    mood_names: Optional[List[str]] = None
    tag_names: Optional[List[str]] = None
    search_text: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode='after')
    def validate_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError('start_date must not be after end_date')
        return self
