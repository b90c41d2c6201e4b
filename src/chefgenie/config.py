"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from chefgenie.services.favorites import FavoriteIdentity

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_text_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    openai_timeout_seconds: float = 120.0
    openai_image_model: str = "gpt-image-1"
    openai_image_size: str = "1536x1024"
    openai_video_model: str = "sora-2"
    openai_video_size: str = "1280x720"
    openai_video_seconds: str = "8"
    video_poll_interval_seconds: float = 5.0
    video_max_poll_attempts: int = 120
    video_backoff_factor: float = 1.0
    video_max_poll_interval_seconds: float = 30.0
    favorites_backend: Literal["file", "supabase"] = "file"
    favorites_path: Path = Path("data/favorites.json")
    favorites_key: str = "chefgenie_favorites"
    favorite_identity: FavoriteIdentity = FavoriteIdentity.TITLE
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    session_ttl_seconds: int = 3600
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
