"""Application configuration and settings management.

This module defines the application settings loaded from environment
variables and provides a helper for accessing the cached settings.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        PROJECT_NAME: Title shown in the OpenAPI docs.
        DATABASE_URL: Database connection string.
        ALLOWED_ORIGINS: Allowed origins for CORS.
        LOG_LEVEL: Root logger level name.
        LOG_FILE: Optional path of a file to mirror log output to.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="allow")

    PROJECT_NAME: str = "Contact Management API"
    DATABASE_URL: str = "sqlite:///./app.db"
    ALLOWED_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The settings object is cached to prevent reloading environment
    variables multiple times during application lifetime.
    """

    return Settings()
