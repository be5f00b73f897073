"""
Tag schemas.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


def require_tag_name(name: str) -> str:
    """Reject empty or whitespace-only tag names; return others unchanged."""
    if not name or not name.strip():
        raise ValueError('Tag name cannot be empty')
    return name


class TagRead(BaseModel):
    """Tag response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str


class TagCreate(BaseModel):
    """Tag creation schema. Surrounding whitespace is trimmed here, at the HTTP edge."""
    name: str
    color: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return require_tag_name(v).strip()
