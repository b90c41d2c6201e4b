"""Favorites (cookbook) API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from chefgenie.api.models import (
    RatingRequest,
    ScaledIngredientsResponse,
    SessionResponse,
    ToggleFavoriteRequest,
    ToggleFavoriteResponse,
)
from chefgenie.api.sessions import build_session_response
from chefgenie.domain.recipes import SavedRecipe
from chefgenie.services.favorites import FavoriteNotFoundError
from chefgenie.services.scaling import scale_ingredients

if TYPE_CHECKING:
    from chefgenie.containers import AppContainer

router = APIRouter(prefix="/favorites", tags=["favorites"])


def _get_favorite(container: AppContainer, favorite_id: str) -> SavedRecipe:
    favorite = container.favorites_service.get(favorite_id)
    if favorite is None:
        raise FavoriteNotFoundError(favorite_id)
    return favorite


@router.get("")
async def list_favorites(request: Request) -> list[SavedRecipe]:
    """Return saved recipes, newest first."""
    container: AppContainer = request.app.state.container
    return container.favorites_service.list_favorites()


@router.post("/toggle")
async def toggle_favorite(
    payload: ToggleFavoriteRequest, request: Request
) -> ToggleFavoriteResponse:
    """Save the session's recipe, or remove it if already saved."""
    container: AppContainer = request.app.state.container
    session = container.orchestrator.get_session(payload.session_id)
    saved = container.favorites_service.toggle(session.recipe, session.image_url)
    return ToggleFavoriteResponse(is_favorite=saved is not None, favorite=saved)


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(favorite_id: str, request: Request) -> Response:
    """Delete a saved recipe."""
    container: AppContainer = request.app.state.container
    container.favorites_service.remove(favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{favorite_id}/rating")
async def rate_favorite(
    favorite_id: str, payload: RatingRequest, request: Request
) -> SavedRecipe:
    """Set a 1-5 star rating on a saved recipe."""
    container: AppContainer = request.app.state.container
    try:
        return container.favorites_service.rate(favorite_id, payload.rating)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.post("/{favorite_id}/open", status_code=status.HTTP_201_CREATED)
async def open_favorite(favorite_id: str, request: Request) -> SessionResponse:
    """Open a saved recipe as a session so it can be scaled or get a video."""
    container: AppContainer = request.app.state.container
    session = container.orchestrator.open_saved(_get_favorite(container, favorite_id))
    return build_session_response(container, session)


@router.get("/{favorite_id}/ingredients")
async def favorite_ingredients(
    favorite_id: str,
    request: Request,
    servings: int | None = Query(default=None, ge=1),
) -> ScaledIngredientsResponse:
    """Return a saved recipe's ingredient lines scaled to the requested servings."""
    container: AppContainer = request.app.state.container
    recipe = _get_favorite(container, favorite_id)
    target = servings or recipe.servings
    return ScaledIngredientsResponse(
        base_servings=recipe.servings,
        servings=target,
        ingredients=scale_ingredients(recipe, target),
    )
