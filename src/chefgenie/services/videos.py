"""Long-running recipe video generation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from chefgenie.domain.recipes import Recipe
from chefgenie.domain.videos import VideoJob, VideoOperation, VideoState

_logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Authorization failed. Please select a valid API key."
UNAVAILABLE_MESSAGE = "Video generation unavailable right now."
EMPTY_RESULT_MESSAGE = "Could not generate video. Please try again."


class VideoGenerationError(Exception):
    """Raised when the provider could not produce a video."""


class VideoAuthorizationError(VideoGenerationError):
    """Raised when the provider rejects the configured credentials."""


class VideoTimeoutError(VideoGenerationError):
    """Raised when polling exceeds the configured attempt ceiling."""


class VideoClient(Protocol):
    """Interface for a long-running video generation provider."""

    async def submit(
        self, *, model: str, prompt: str, size: str, seconds: str
    ) -> VideoOperation:
        """Start a video operation and return its handle."""

    async def poll(self, operation: VideoOperation) -> VideoOperation:
        """Return the latest status of an operation."""

    async def cancel(self, operation: VideoOperation) -> None:
        """Ask the provider to abandon an operation."""

    async def download(self, video_id: str) -> bytes:
        """Return the rendered video bytes."""


@dataclass
class VideoService:
    """Submits a video request and polls it to completion."""

    client: VideoClient
    model: str
    size: str
    seconds: str
    poll_interval_seconds: float = 5.0
    max_poll_attempts: int = 120
    backoff_factor: float = 1.0
    max_poll_interval_seconds: float = 30.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def generate(
        self,
        recipe: Recipe,
        on_submitted: Callable[[VideoOperation], None] | None = None,
    ) -> str | None:
        """Return the provider video id, or None when nothing was rendered."""
        operation = await self.client.submit(
            model=self.model,
            prompt=build_video_prompt(recipe),
            size=self.size,
            seconds=self.seconds,
        )
        _logger.info("Video operation submitted: id=%s", operation.id)
        if on_submitted is not None:
            on_submitted(operation)
        try:
            operation = await self._wait(operation)
        except asyncio.CancelledError:
            await self._cancel_quietly(operation)
            raise
        if operation.error:
            _logger.warning(
                "Video operation failed: id=%s error=%s", operation.id, operation.error
            )
            return None
        return operation.video_id

    async def download(self, video_id: str) -> bytes:
        """Fetch rendered video bytes using the server-side credentials."""
        return await self.client.download(video_id)

    async def _wait(self, operation: VideoOperation) -> VideoOperation:
        """Poll until done, with optional backoff and a hard attempt ceiling."""
        interval = self.poll_interval_seconds
        attempts = 0
        while not operation.done:
            if attempts >= self.max_poll_attempts:
                await self._cancel_quietly(operation)
                raise VideoTimeoutError(
                    f"Video operation {operation.id} not done after {attempts} checks"
                )
            await self.sleep(interval)
            operation = await self.client.poll(operation)
            attempts += 1
            interval = min(
                interval * self.backoff_factor, self.max_poll_interval_seconds
            )
        return operation

    async def _cancel_quietly(self, operation: VideoOperation) -> None:
        try:
            await self.client.cancel(operation)
        except Exception:
            _logger.warning("Failed to cancel video operation: id=%s", operation.id)


@dataclass
class VideoJobTracker:
    """Tracks one video request per key; repeated requests while busy are no-ops."""

    service: VideoService
    _jobs: dict[str, VideoJob] = field(default_factory=dict)
    _tasks: dict[str, "asyncio.Task[None]"] = field(default_factory=dict)

    def status(self, key: str) -> VideoJob:
        """Return the current job for a key (Idle when never requested)."""
        return self._jobs.get(key, VideoJob())

    def request(self, key: str, recipe: Recipe) -> VideoJob:
        """Start a video request unless one is already in flight."""
        current = self.status(key)
        if current.state.in_flight:
            return current
        job = VideoJob(state=VideoState.REQUESTING)
        self._jobs[key] = job
        self._tasks[key] = asyncio.create_task(self._run(key, recipe))
        return job

    async def wait(self, key: str) -> VideoJob:
        """Wait for an in-flight request to settle and return its job."""
        task = self._tasks.get(key)
        if task is not None:
            await task
        return self.status(key)

    def discard(self, key: str) -> None:
        """Forget a key, cancelling any in-flight request."""
        task = self._tasks.pop(key, None)
        if task is not None:
            task.cancel()
        self._jobs.pop(key, None)

    async def _run(self, key: str, recipe: Recipe) -> None:
        def on_submitted(operation: VideoOperation) -> None:
            self._jobs[key] = VideoJob(
                state=VideoState.POLLING, operation_id=operation.id
            )

        try:
            video_id = await self.service.generate(recipe, on_submitted=on_submitted)
        except VideoAuthorizationError:
            _logger.warning("Video generation needs re-authorization: key=%s", key)
            self._finish(key, VideoState.AUTH_FAILED, message=AUTH_FAILED_MESSAGE)
        except VideoGenerationError:
            _logger.exception("Video generation failed: key=%s", key)
            self._finish(key, VideoState.UNAVAILABLE, message=UNAVAILABLE_MESSAGE)
        except Exception:
            _logger.exception("Unexpected video generation failure: key=%s", key)
            self._finish(key, VideoState.UNAVAILABLE, message=UNAVAILABLE_MESSAGE)
        else:
            if video_id is None:
                self._finish(
                    key, VideoState.UNAVAILABLE, message=EMPTY_RESULT_MESSAGE
                )
            else:
                self._finish(key, VideoState.READY, video_id=video_id)
        finally:
            self._tasks.pop(key, None)

    def _finish(
        self,
        key: str,
        state: VideoState,
        *,
        video_id: str | None = None,
        message: str | None = None,
    ) -> None:
        operation_id = self.status(key).operation_id
        self._jobs[key] = VideoJob(
            state=state,
            operation_id=operation_id,
            video_id=video_id,
            message=message,
        )


def build_video_prompt(recipe: Recipe) -> str:
    """Cinematic cooking-video prompt for a recipe."""
    return (
        f"Cinematic short cooking video of {recipe.title}.\n"
        "Show ingredients being prepared, chopped, and cooked.\n"
        "Close up shots of the cooking process in a professional kitchen with "
        "warm lighting.\n"
        f"Final shot of the plated dish {recipe.title}.\n"
        "High quality, 4k, photorealistic, slow motion b-roll style."
    )
