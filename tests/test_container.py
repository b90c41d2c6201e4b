"""Tests for container wiring."""

import asyncio

import pytest

from chefgenie.adapters.json_favorites_repository import JsonFileFavoritesRepository
from chefgenie.config import Settings
from chefgenie.containers import build_container, build_favorites_repository
from chefgenie.services.favorites import FavoriteIdentity


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.orchestrator is not None
    assert container.favorites_service.list_favorites() == []
    assert container.orchestrator.video_tracker.service.poll_interval_seconds == 5.0
    asyncio.run(container.close_resources())


def test_file_backend_is_default(settings: Settings) -> None:
    repository = build_favorites_repository(settings)

    assert isinstance(repository, JsonFileFavoritesRepository)
    assert repository.key == "chefgenie_favorites"


def test_supabase_backend_requires_credentials(settings: Settings) -> None:
    supabase_settings = settings.model_copy(update={"favorites_backend": "supabase"})

    with pytest.raises(ValueError):
        build_favorites_repository(supabase_settings)


def test_settings_parse_identity_policy(settings: Settings) -> None:
    configured = Settings(
        openai_api_key="key",
        favorite_identity="title_and_description",
    )

    assert configured.favorite_identity is FavoriteIdentity.TITLE_AND_DESCRIPTION
    assert settings.favorite_identity is FavoriteIdentity.TITLE
