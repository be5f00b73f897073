"""
Mood schemas.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class MoodRead(BaseModel):
    """Catalogue mood."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
