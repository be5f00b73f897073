"""
Shared API dependencies.
"""
from fastapi import Request

from moodjournal.storage.base import MoodStore


def get_store(request: Request) -> MoodStore:
    """
    Dependency returning the store selected at startup.

    Usage:
        @router.get("/example")
        async def example(store: Annotated[MoodStore, Depends(get_store)]):
            return store.get_stats()
    """
    return request.app.state.store
