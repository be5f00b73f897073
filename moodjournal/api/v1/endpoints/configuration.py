"""
Configuration endpoints.
"""
from typing import Annotated, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from moodjournal.api.dependencies import get_store
from moodjournal.schemas.configuration import ConfigurationRead, ConfigurationUpdate
from moodjournal.storage.base import MoodStore

router = APIRouter()


@router.get(
    "/",
    response_model=ConfigurationRead,
    responses={
        404: {"description": "Configuration missing"},
    }
)
async def get_configuration(store: Annotated[MoodStore, Depends(get_store)]):
    config = store.get_configuration()
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Configuration not found"
        )
    return config


@router.patch(
    "/",
    response_model=Dict[str, bool],
    responses={
        422: {"description": "Invalid configuration data"},
    }
)
async def update_configuration(
    config_data: ConfigurationUpdate,
    store: Annotated[MoodStore, Depends(get_store)]
):
    """Update only the supplied fields."""
    return {"changed": store.update_configuration(config_data)}
