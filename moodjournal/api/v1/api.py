"""
Version 1 API router.
"""
from fastapi import APIRouter

from moodjournal.api.v1.endpoints import configuration, entries, stats, tags

api_router = APIRouter()
api_router.include_router(entries.router, prefix="/entries", tags=["entries"])
api_router.include_router(tags.router, tags=["catalogue"])
api_router.include_router(configuration.router, prefix="/configuration", tags=["configuration"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
