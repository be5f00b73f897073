"""
Mood catalogue model and its seed data.
"""
from typing import Optional

from sqlmodel import Field, CheckConstraint

from .base import BaseModel

# (name, color, icon); the catalogue order is also the tie-break order for stats.
MOOD_CATALOGUE = (
    ("Calmo", "#87CEEB", "😌"),
    ("Feliz", "#FFD700", "😊"),
    ("Triste", "#6495ED", "😢"),
    ("Bravo", "#FF4500", "😡"),
    ("Desapontado", "#B0C4DE", "😞"),
    ("Preocupado", "#FFA07A", "😟"),
    ("Assustado", "#8A2BE2", "😨"),
    ("Frustrado", "#A52A2A", "😣"),
    ("Estressado", "#FF6347", "😫"),
)


class Mood(BaseModel, table=True):
    """
    Fixed mood definitions. Seeded by the schema manager, read-only afterwards.
    """
    __tablename__ = "mood"

    name: str = Field(..., unique=True, min_length=1, max_length=100)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=50)

    __table_args__ = (
        CheckConstraint('length(name) > 0', name='check_mood_name_not_empty'),
        {"sqlite_autoincrement": True},
    )
