"""Coordinates recipe, image and video generation for a request."""

import asyncio
import logging
from dataclasses import dataclass, field
from uuid import uuid4

from chefgenie.domain.recipes import Recipe, SavedRecipe, UserPreferences
from chefgenie.domain.videos import VideoJob, VideoState
from chefgenie.services.cache import Cache
from chefgenie.services.images import DishImageService
from chefgenie.services.recipes import RecipeService
from chefgenie.services.videos import VideoGenerationError, VideoJobTracker

_logger = logging.getLogger(__name__)

_SESSION_PREFIX = "session:"


class SessionNotFoundError(LookupError):
    """Raised when a generation session is unknown or expired."""


@dataclass
class GenerationSession:
    """A generated recipe together with its best-effort image state."""

    id: str
    recipe: Recipe
    image_url: str | None = None
    image_loading: bool = True
    favorite_id: str | None = None

    @property
    def video_key(self) -> str:
        """Key of the video job; sessions opened from one favorite share it."""
        if self.favorite_id is not None:
            return f"favorite:{self.favorite_id}"
        return f"session:{self.id}"


@dataclass
class GenerationOrchestrator:
    """Runs the required recipe call, then the best-effort asset calls."""

    recipe_service: RecipeService
    image_service: DishImageService
    video_tracker: VideoJobTracker
    cache: Cache
    session_ttl_seconds: int = 3600
    _image_tasks: dict[str, "asyncio.Task[None]"] = field(default_factory=dict)
    _video_keys: dict[str, str] = field(default_factory=dict)

    async def generate(self, preferences: UserPreferences) -> GenerationSession:
        """Generate a recipe and start its image in the background.

        GenerationError from the recipe call propagates; in that case no
        session is stored and no asset request is made.
        """
        self._purge_expired()
        recipe = await self.recipe_service.generate(preferences)
        session = GenerationSession(id=str(uuid4()), recipe=recipe)
        self._store(session)
        self._image_tasks[session.id] = asyncio.create_task(
            self._attach_image(session)
        )
        return session

    def open_saved(self, favorite: SavedRecipe) -> GenerationSession:
        """Open a saved recipe for viewing, reusing its stored image."""
        self._purge_expired()
        session = GenerationSession(
            id=str(uuid4()),
            recipe=favorite,
            image_url=favorite.image_url,
            image_loading=False,
            favorite_id=favorite.id,
        )
        self._store(session)
        return session

    def get_session(self, session_id: str) -> GenerationSession:
        """Return a live session or raise SessionNotFoundError."""
        session = self.cache.get(_SESSION_PREFIX + session_id)
        if not isinstance(session, GenerationSession):
            raise SessionNotFoundError(session_id)
        return session

    async def wait_for_image(self, session_id: str) -> GenerationSession:
        """Wait until the session's image request has settled."""
        session = self.get_session(session_id)
        task = self._image_tasks.get(session_id)
        if task is not None:
            await task
        return session

    def request_video(self, session_id: str) -> VideoJob:
        """Start a video for the session's recipe unless one is in flight."""
        session = self.get_session(session_id)
        return self.video_tracker.request(session.video_key, session.recipe)

    def video_status(self, session_id: str) -> VideoJob:
        """Return the video job of the session's recipe."""
        session = self.get_session(session_id)
        return self.video_tracker.status(session.video_key)

    async def wait_for_video(self, session_id: str) -> VideoJob:
        """Wait until the recipe's video request has settled."""
        session = self.get_session(session_id)
        return await self.video_tracker.wait(session.video_key)

    async def download_video(self, session_id: str) -> bytes:
        """Return the rendered video bytes of a Ready job."""
        job = self.video_status(session_id)
        if job.state is not VideoState.READY or job.video_id is None:
            raise VideoGenerationError(f"Video not ready: state={job.state.value}")
        return await self.video_tracker.service.download(job.video_id)

    def discard(self, session_id: str) -> None:
        """Drop a session and abandon interest in its pending assets."""
        self.cache.delete(_SESSION_PREFIX + session_id)
        video_key = self._video_keys.pop(session_id, None)
        if video_key is not None and video_key not in self._video_keys.values():
            self.video_tracker.discard(video_key)
        task = self._image_tasks.pop(session_id, None)
        if task is not None:
            task.cancel()

    def _store(self, session: GenerationSession) -> None:
        self._video_keys[session.id] = session.video_key
        self.cache.set(
            _SESSION_PREFIX + session.id, session, ttl_seconds=self.session_ttl_seconds
        )

    async def _attach_image(self, session: GenerationSession) -> None:
        try:
            session.image_url = await self.image_service.generate(
                session.recipe.title, session.recipe.description
            )
        finally:
            session.image_loading = False
            self._image_tasks.pop(session.id, None)
        _logger.info(
            "Image settled: session=%s available=%s",
            session.id,
            session.image_url is not None,
        )

    def _purge_expired(self) -> None:
        for key in self.cache.purge_expired():
            if key.startswith(_SESSION_PREFIX):
                self.discard(key.removeprefix(_SESSION_PREFIX))
