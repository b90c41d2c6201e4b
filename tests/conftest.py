"""Shared test fixtures."""

import asyncio
import copy
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from chefgenie.config import Settings
from chefgenie.containers import AppContainer
from chefgenie.domain.recipes import Recipe, SavedRecipe
from chefgenie.domain.videos import VideoOperation
from chefgenie.services.cache import InMemoryCache
from chefgenie.services.favorites import FavoritesRepository, FavoritesService
from chefgenie.services.images import DishImageService, ImageClient
from chefgenie.services.orchestrator import GenerationOrchestrator
from chefgenie.services.recipes import RecipeClient, RecipeService
from chefgenie.services.videos import VideoClient, VideoJobTracker, VideoService

RECIPE_PAYLOAD: dict[str, object] = {
    "title": "Lemon Garlic Chicken",
    "description": "Juicy pan-seared chicken with a bright lemon butter sauce.",
    "cookingTime": "35 mins",
    "difficulty": "Easy",
    "servings": 4,
    "ingredients": [
        {"item": "chicken breast", "quantity": "2", "unit": "lb"},
        {"item": "lemon juice", "quantity": "1/2", "unit": "cup"},
        {"item": "garlic cloves", "quantity": "3-4", "unit": ""},
        {"item": "salt", "quantity": "", "unit": "to taste"},
    ],
    "instructions": [
        "Season the chicken.",
        "Sear until golden.",
        "Finish with lemon and garlic.",
    ],
    "macros": {"calories": 420, "protein": 48, "carbs": 6, "fats": 22},
}


def make_recipe(**overrides: object) -> Recipe:
    payload = copy.deepcopy(RECIPE_PAYLOAD)
    payload.update(overrides)
    return Recipe.model_validate(payload)


async def no_sleep(_seconds: float) -> None:
    return None


@dataclass
class FakeRecipeClient(RecipeClient):
    """Fake recipe client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: copy.deepcopy(RECIPE_PAYLOAD)
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None,
    ) -> dict[str, object]:
        self.calls.append({"prompt": prompt, "image_data_url": image_data_url})
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeImageClient(ImageClient):
    """Fake image client returning base64 content or failing."""

    encoded: str | None = "aW1hZ2U="
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str, size: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.encoded


@dataclass
class FakeVideoClient(VideoClient):
    """Scripted video client; polls pop from `statuses`."""

    statuses: list[VideoOperation] = field(default_factory=list)
    submitted: VideoOperation = VideoOperation(id="op-1", done=False)
    submit_error: Exception | None = None
    poll_error: Exception | None = None
    gate: asyncio.Event | None = None
    content: bytes = b"mp4-bytes"
    submit_calls: int = 0
    poll_calls: int = 0
    cancelled: list[str] = field(default_factory=list)

    async def submit(
        self, *, model: str, prompt: str, size: str, seconds: str
    ) -> VideoOperation:
        self.submit_calls += 1
        if self.submit_error is not None:
            raise self.submit_error
        return self.submitted

    async def poll(self, operation: VideoOperation) -> VideoOperation:
        self.poll_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.poll_error is not None:
            raise self.poll_error
        if self.statuses:
            return self.statuses.pop(0)
        return VideoOperation(id=operation.id, done=True, video_id="video-1")

    async def cancel(self, operation: VideoOperation) -> None:
        self.cancelled.append(operation.id)

    async def download(self, video_id: str) -> bytes:
        return self.content


@dataclass
class InMemoryFavoritesRepository(FavoritesRepository):
    """In-memory favorites store that counts writes."""

    stored: list[SavedRecipe] = field(default_factory=list)
    load_calls: int = 0
    save_calls: int = 0

    def load(self) -> list[SavedRecipe]:
        self.load_calls += 1
        return list(self.stored)

    def save(self, favorites: list[SavedRecipe]) -> None:
        self.save_calls += 1
        self.stored = list(favorites)


def build_orchestrator(
    recipe_client: FakeRecipeClient | None = None,
    image_client: FakeImageClient | None = None,
    video_client: FakeVideoClient | None = None,
    session_ttl_seconds: int = 3600,
) -> GenerationOrchestrator:
    return GenerationOrchestrator(
        recipe_service=RecipeService(
            client=recipe_client or FakeRecipeClient(),
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
        ),
        image_service=DishImageService(
            client=image_client or FakeImageClient(),
            model="gpt-image-1",
            size="1536x1024",
        ),
        video_tracker=VideoJobTracker(
            VideoService(
                client=video_client or FakeVideoClient(),
                model="sora-2",
                size="1280x720",
                seconds="8",
                sleep=no_sleep,
            )
        ),
        cache=InMemoryCache(),
        session_ttl_seconds=session_ttl_seconds,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="test-openai-key",
        favorites_backend="file",
        favorites_path=tmp_path / "favorites.json",
    )


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def video_client() -> FakeVideoClient:
    return FakeVideoClient()


@pytest.fixture
def favorites_repository() -> InMemoryFavoritesRepository:
    return InMemoryFavoritesRepository()


@pytest.fixture
def container(
    settings: Settings,
    recipe_client: FakeRecipeClient,
    image_client: FakeImageClient,
    video_client: FakeVideoClient,
    favorites_repository: InMemoryFavoritesRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        orchestrator=build_orchestrator(recipe_client, image_client, video_client),
        favorites_service=FavoritesService(favorites_repository),
        close_resources=close_resources,
    )
