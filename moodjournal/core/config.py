"""
Application settings loaded from the environment.
"""
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BLOB_KEY = "mood_app_web_db_v1"


class Settings(BaseSettings):
    """Runtime configuration, read from ``MOODJOURNAL_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="MOODJOURNAL_",
        env_file=".env",
        extra="ignore",
    )

    # Backend selection
    storage_backend: Literal["auto", "sql", "blob"] = "auto"

    # SQL backend
    database_url: str = "sqlite:///humor_app_global.db"
    sql_echo: bool = False

    # Blob backend
    blob_store: Literal["auto", "memory", "file", "redis", "browser"] = "auto"
    blob_path: str = "./moodjournal_data"
    blob_key: str = DEFAULT_BLOB_KEY
    redis_url: Optional[str] = None

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return v


settings = Settings()
