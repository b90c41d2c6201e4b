"""Models for long-running video generation."""

from dataclasses import dataclass
from enum import Enum


class VideoState(str, Enum):
    """Lifecycle of a recipe video request."""

    IDLE = "idle"
    REQUESTING = "requesting"
    POLLING = "polling"
    READY = "ready"
    UNAVAILABLE = "unavailable"
    AUTH_FAILED = "auth_failed"

    @property
    def in_flight(self) -> bool:
        """Return True while the provider is still working on the request."""
        return self in {VideoState.REQUESTING, VideoState.POLLING}


@dataclass(frozen=True)
class VideoOperation:
    """Snapshot of a provider-side video operation."""

    id: str
    done: bool
    video_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class VideoJob:
    """Current video status for one recipe."""

    state: VideoState = VideoState.IDLE
    operation_id: str | None = None
    video_id: str | None = None
    message: str | None = None
