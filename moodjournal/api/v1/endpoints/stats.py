"""
Dashboard statistics endpoints.
"""
from datetime import date
from typing import Annotated, Dict, Optional

from fastapi import APIRouter, Depends, Query

from moodjournal.api.dependencies import get_store
from moodjournal.schemas.stats import MoodStats
from moodjournal.storage.base import MoodStore

router = APIRouter()


@router.get("/", response_model=MoodStats)
async def get_stats(store: Annotated[MoodStore, Depends(get_store)]):
    """Total entries and the most common primary mood."""
    return store.get_stats()


@router.get("/distribution", response_model=Dict[str, int])
async def get_mood_distribution(store: Annotated[MoodStore, Depends(get_store)]):
    """Mood counts across all entries, for the pie chart."""
    return store.get_mood_distribution()


@router.get("/daily", response_model=Dict[str, int])
async def get_daily_counts(
    store: Annotated[MoodStore, Depends(get_store)],
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None)
):
    """Entries per day, for the heatmap."""
    return store.get_daily_counts(start_date, end_date)
