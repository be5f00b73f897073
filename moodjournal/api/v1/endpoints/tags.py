"""
Tag and mood catalogue endpoints.
"""
from typing import Annotated, Dict, List

from fastapi import APIRouter, Depends, status

from moodjournal.api.dependencies import get_store
from moodjournal.schemas.mood import MoodRead
from moodjournal.schemas.tag import TagCreate, TagRead
from moodjournal.storage.base import MoodStore

router = APIRouter()


@router.get("/tags", response_model=List[TagRead])
async def get_tags(store: Annotated[MoodStore, Depends(get_store)]):
    """All tags, ordered by name."""
    return store.list_tags()


@router.post(
    "/tags",
    response_model=Dict[str, int],
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"description": "Invalid tag data"},
        503: {"description": "Storage failure"},
    }
)
async def create_tag(
    tag_data: TagCreate,
    store: Annotated[MoodStore, Depends(get_store)]
):
    """Get or create a tag by exact name and return its id."""
    return {"id": store.get_or_create_tag(tag_data.name, tag_data.color)}


@router.get("/moods", response_model=List[MoodRead])
async def get_moods(store: Annotated[MoodStore, Depends(get_store)]):
    """The fixed mood catalogue in seed order."""
    return store.list_moods()
