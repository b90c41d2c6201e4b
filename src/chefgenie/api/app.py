"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse

from chefgenie.api.favorites import router as favorites_router
from chefgenie.api.models import (
    NutritionResponse,
    ScaledIngredientsResponse,
    SessionResponse,
    SlideResponse,
    VideoJobResponse,
)
from chefgenie.api.sessions import build_session_response
from chefgenie.app_logging import configure_logging
from chefgenie.containers import AppContainer
from chefgenie.domain.recipes import UserPreferences
from chefgenie.domain.videos import VideoState
from chefgenie.services.favorites import FavoriteNotFoundError
from chefgenie.services.orchestrator import SessionNotFoundError
from chefgenie.services.presentation import build_slides, macro_breakdown
from chefgenie.services.recipes import GenerationError
from chefgenie.services.scaling import scale_ingredients
from chefgenie.services.videos import VideoGenerationError

GENERATION_FAILED_MESSAGE = (
    "Oops! The kitchen is a bit chaotic right now. Please try again."
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(favorites_router)

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Recipe session not found"},
        )

    @app.exception_handler(FavoriteNotFoundError)
    async def favorite_not_found(
        request: Request, exc: FavoriteNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Favorite not found"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/recipes", status_code=status.HTTP_201_CREATED)
    async def generate_recipe(
        preferences: UserPreferences, request: Request
    ) -> SessionResponse:
        """Generate a recipe; the dish image follows in the background."""
        state_container: AppContainer = request.app.state.container
        try:
            session = await state_container.orchestrator.generate(preferences)
        except GenerationError as exc:
            logger.warning("Recipe generation failed: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=GENERATION_FAILED_MESSAGE,
            ) from exc
        return build_session_response(state_container, session)

    @app.get("/recipes/{session_id}")
    async def get_recipe(session_id: str, request: Request) -> SessionResponse:
        """Return a recipe session with its image and video state."""
        state_container: AppContainer = request.app.state.container
        session = state_container.orchestrator.get_session(session_id)
        return build_session_response(state_container, session)

    @app.delete("/recipes/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def discard_recipe(session_id: str, request: Request) -> Response:
        """Forget a session and its pending assets."""
        state_container: AppContainer = request.app.state.container
        state_container.orchestrator.get_session(session_id)
        state_container.orchestrator.discard(session_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/recipes/{session_id}/ingredients")
    async def recipe_ingredients(
        session_id: str,
        request: Request,
        servings: int | None = Query(default=None, ge=1),
    ) -> ScaledIngredientsResponse:
        """Return ingredient lines scaled to the requested servings."""
        state_container: AppContainer = request.app.state.container
        recipe = state_container.orchestrator.get_session(session_id).recipe
        target = servings or recipe.servings
        return ScaledIngredientsResponse(
            base_servings=recipe.servings,
            servings=target,
            ingredients=scale_ingredients(recipe, target),
        )

    @app.get("/recipes/{session_id}/slides")
    async def recipe_slides(session_id: str, request: Request) -> list[SlideResponse]:
        """Return the text slideshow used when no video is available."""
        state_container: AppContainer = request.app.state.container
        recipe = state_container.orchestrator.get_session(session_id).recipe
        return [SlideResponse.from_slide(slide) for slide in build_slides(recipe)]

    @app.get("/recipes/{session_id}/nutrition")
    async def recipe_nutrition(session_id: str, request: Request) -> NutritionResponse:
        """Return the macronutrient breakdown for charting."""
        state_container: AppContainer = request.app.state.container
        recipe = state_container.orchestrator.get_session(session_id).recipe
        return NutritionResponse.from_breakdown(macro_breakdown(recipe.macros))

    @app.post("/recipes/{session_id}/video", status_code=status.HTTP_202_ACCEPTED)
    async def request_video(session_id: str, request: Request) -> VideoJobResponse:
        """Start generating a cooking video; repeated calls while busy are no-ops."""
        state_container: AppContainer = request.app.state.container
        job = state_container.orchestrator.request_video(session_id)
        return VideoJobResponse.from_job(session_id, job)

    @app.get("/recipes/{session_id}/video")
    async def video_status(session_id: str, request: Request) -> VideoJobResponse:
        """Return the cooking video state."""
        state_container: AppContainer = request.app.state.container
        job = state_container.orchestrator.video_status(session_id)
        return VideoJobResponse.from_job(session_id, job)

    @app.get("/recipes/{session_id}/video/content")
    async def video_content(session_id: str, request: Request) -> Response:
        """Stream the rendered video using server-side credentials."""
        state_container: AppContainer = request.app.state.container
        job = state_container.orchestrator.video_status(session_id)
        if job.state is not VideoState.READY:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Video is not ready"
            )
        try:
            content = await state_container.orchestrator.download_video(session_id)
        except VideoGenerationError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        except Exception as exc:
            logger.exception("Video download failed: session=%s", session_id)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Video download unavailable right now.",
            ) from exc
        return Response(content=content, media_type="video/mp4")

    return app
