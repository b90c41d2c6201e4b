"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI
from supabase import create_client

from chefgenie.adapters.json_favorites_repository import JsonFileFavoritesRepository
from chefgenie.adapters.openai_image_client import OpenAIImageClient
from chefgenie.adapters.openai_recipe_client import OpenAIRecipeClient
from chefgenie.adapters.openai_video_client import OpenAIVideoClient
from chefgenie.adapters.supabase_favorites_repository import (
    SupabaseFavoritesRepository,
)
from chefgenie.config import Settings
from chefgenie.services.cache import InMemoryCache
from chefgenie.services.favorites import FavoritesRepository, FavoritesService
from chefgenie.services.images import DishImageService
from chefgenie.services.orchestrator import GenerationOrchestrator
from chefgenie.services.recipes import RecipeService
from chefgenie.services.videos import VideoJobTracker, VideoService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    orchestrator: GenerationOrchestrator
    favorites_service: FavoritesService
    close_resources: Callable[[], Awaitable[None]]


def build_favorites_repository(settings: Settings) -> FavoritesRepository:
    """Select the favorites backend configured in settings."""
    if settings.favorites_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase favorites backend requires URL and service key")
        supabase_client = create_client(
            settings.supabase_url, settings.supabase_service_key
        )
        return SupabaseFavoritesRepository(supabase_client, key=settings.favorites_key)
    return JsonFileFavoritesRepository(
        path=settings.favorites_path, key=settings.favorites_key
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(resolved_settings.openai_timeout_seconds)
    )
    openai_client = AsyncOpenAI(
        api_key=resolved_settings.openai_api_key, http_client=http_client
    )
    recipe_service = RecipeService(
        client=OpenAIRecipeClient(openai_client),
        model=resolved_settings.openai_text_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    image_service = DishImageService(
        client=OpenAIImageClient(openai_client),
        model=resolved_settings.openai_image_model,
        size=resolved_settings.openai_image_size,
    )
    video_service = VideoService(
        client=OpenAIVideoClient(openai_client),
        model=resolved_settings.openai_video_model,
        size=resolved_settings.openai_video_size,
        seconds=resolved_settings.openai_video_seconds,
        poll_interval_seconds=resolved_settings.video_poll_interval_seconds,
        max_poll_attempts=resolved_settings.video_max_poll_attempts,
        backoff_factor=resolved_settings.video_backoff_factor,
        max_poll_interval_seconds=resolved_settings.video_max_poll_interval_seconds,
    )
    orchestrator = GenerationOrchestrator(
        recipe_service=recipe_service,
        image_service=image_service,
        video_tracker=VideoJobTracker(video_service),
        cache=InMemoryCache(),
        session_ttl_seconds=resolved_settings.session_ttl_seconds,
    )
    favorites_service = FavoritesService(
        repository=build_favorites_repository(resolved_settings),
        identity=resolved_settings.favorite_identity,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        orchestrator=orchestrator,
        favorites_service=favorites_service,
        close_resources=close_resources,
    )
