"""OpenAI Videos API client for recipe videos."""

from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from chefgenie.domain.videos import VideoOperation
from chefgenie.services.videos import VideoAuthorizationError, VideoClient

_AUTH_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
)
_DONE_STATUSES = {"completed", "failed"}


@dataclass
class OpenAIVideoClient(VideoClient):
    """Video client backed by OpenAI Videos API."""

    client: AsyncOpenAI

    async def submit(
        self, *, model: str, prompt: str, size: str, seconds: str
    ) -> VideoOperation:
        """Create a video job."""
        try:
            video = await self.client.videos.create(
                model=model, prompt=prompt, size=size, seconds=seconds
            )
        except _AUTH_ERRORS as exc:
            raise VideoAuthorizationError(str(exc)) from exc
        return _to_operation(video)

    async def poll(self, operation: VideoOperation) -> VideoOperation:
        """Retrieve the current job status."""
        try:
            video = await self.client.videos.retrieve(operation.id)
        except _AUTH_ERRORS as exc:
            raise VideoAuthorizationError(str(exc)) from exc
        return _to_operation(video)

    async def cancel(self, operation: VideoOperation) -> None:
        """Delete the job on the provider side."""
        await self.client.videos.delete(operation.id)

    async def download(self, video_id: str) -> bytes:
        """Download the rendered MP4."""
        response = await self.client.videos.download_content(video_id, variant="video")
        return response.content


def _to_operation(video: object) -> VideoOperation:
    """Map an OpenAI video object onto a provider-neutral operation."""
    video_id = str(getattr(video, "id", ""))
    status = str(getattr(video, "status", ""))
    error = None
    if status == "failed":
        error = getattr(getattr(video, "error", None), "message", None) or "failed"
    return VideoOperation(
        id=video_id,
        done=status in _DONE_STATUSES,
        video_id=video_id if status == "completed" else None,
        error=error,
    )
