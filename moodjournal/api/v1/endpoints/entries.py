"""
Mood entry endpoints.
"""
from datetime import date
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from moodjournal.api.dependencies import get_store
from moodjournal.schemas.entry import MoodEntryCreate, MoodEntryRead, MoodEntryUpdate
from moodjournal.schemas.stats import EntryFilters
from moodjournal.services.filter_service import filter_entries
from moodjournal.storage.base import MoodStore

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Entry not found"
    )


@router.post(
    "/",
    response_model=MoodEntryRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"description": "Invalid entry data"},
        503: {"description": "Storage failure"},
    }
)
async def create_entry(
    entry_data: MoodEntryCreate,
    store: Annotated[MoodStore, Depends(get_store)]
):
    """Create an entry. Unknown mood names are dropped; unknown tags are created."""
    return store.create_entry(entry_data)


@router.get(
    "/",
    response_model=List[MoodEntryRead],
    responses={
        503: {"description": "Storage failure"},
    }
)
async def get_entries(
    store: Annotated[MoodStore, Depends(get_store)],
    day: Optional[date] = Query(None, alias="date"),
    mood: Optional[List[str]] = Query(None),
    tag: Optional[List[str]] = Query(None),
    q: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None)
):
    """
    List entries, most recent first.

    ``date`` restricts to one calendar day. ``mood`` matches any of the
    given moods, ``tag`` requires all given tags, ``q`` searches notes,
    moods and tags ignoring accents and case.
    """
    try:
        filters = EntryFilters(
            mood_names=mood,
            tag_names=tag,
            search_text=q,
            start_date=start_date,
            end_date=end_date,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if day is not None:
        return filter_entries(store.get_entries_by_date(day), filters)
    return store.search_entries(filters)


@router.get(
    "/{entry_id}",
    response_model=MoodEntryRead,
    responses={
        404: {"description": "Entry not found"},
        503: {"description": "Storage failure"},
    }
)
async def get_entry(
    entry_id: int,
    store: Annotated[MoodStore, Depends(get_store)]
):
    """Get a specific entry by ID."""
    entry = store.get_entry(entry_id)
    if entry is None:
        raise _not_found()
    return entry


@router.patch(
    "/{entry_id}",
    response_model=Dict[str, bool],
    responses={
        404: {"description": "Entry not found"},
        503: {"description": "Storage failure"},
    }
)
async def update_entry(
    entry_id: int,
    entry_data: MoodEntryUpdate,
    store: Annotated[MoodStore, Depends(get_store)]
):
    """
    Update an entry.

    Each supplied field replaces the stored value; send ``"notes": null`` to
    clear the notes.
    """
    if store.get_entry(entry_id) is None:
        raise _not_found()
    return {"changed": store.update_entry(entry_id, entry_data)}


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Entry not found"},
        503: {"description": "Storage failure"},
    }
)
async def delete_entry(
    entry_id: int,
    store: Annotated[MoodStore, Depends(get_store)]
):
    """Delete an entry with its mood and tag links."""
    if not store.delete_entry(entry_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/",
    response_model=Dict[str, bool],
    responses={
        503: {"description": "Storage failure"},
    }
)
async def delete_all_entries(
    store: Annotated[MoodStore, Depends(get_store)]
):
    """Delete every entry. Tags and moods are kept."""
    return {"deleted": store.delete_all_entries()}
