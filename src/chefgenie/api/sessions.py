"""Shared view helpers for recipe sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chefgenie.api.models import SessionResponse, VideoJobResponse

if TYPE_CHECKING:
    from chefgenie.containers import AppContainer
    from chefgenie.services.orchestrator import GenerationSession


def build_session_response(
    container: AppContainer, session: GenerationSession
) -> SessionResponse:
    """Assemble the API view of a session, including favorite state."""
    favorite = container.favorites_service.find(session.recipe)
    job = container.orchestrator.video_status(session.id)
    return SessionResponse(
        session_id=session.id,
        recipe=session.recipe,
        image_url=session.image_url,
        image_loading=session.image_loading,
        is_favorite=favorite is not None,
        favorite_id=favorite.id if favorite else None,
        rating=favorite.rating if favorite else None,
        video=VideoJobResponse.from_job(session.id, job),
    )
