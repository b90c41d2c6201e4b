"""Request and response models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chefgenie.domain.presentation import MacroBreakdown, Slide
from chefgenie.domain.recipes import Recipe, SavedRecipe
from chefgenie.domain.videos import VideoJob, VideoState


class ApiModel(BaseModel):
    """Base model serializing with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoJobResponse(ApiModel):
    """Video job state for a recipe session."""

    state: VideoState
    message: str | None = None
    content_url: str | None = None

    @classmethod
    def from_job(cls, session_id: str, job: VideoJob) -> "VideoJobResponse":
        content_url = (
            f"/recipes/{session_id}/video/content"
            if job.state is VideoState.READY
            else None
        )
        return cls(state=job.state, message=job.message, content_url=content_url)


class SessionResponse(ApiModel):
    """Generated or reopened recipe with its asset and favorite state."""

    session_id: str
    recipe: Recipe
    image_url: str | None
    image_loading: bool
    is_favorite: bool
    favorite_id: str | None = None
    rating: int | None = None
    video: VideoJobResponse


class ScaledIngredientsResponse(ApiModel):
    """Ingredient lines rendered for a serving count."""

    base_servings: int
    servings: int
    ingredients: list[str]


class SlideResponse(ApiModel):
    """One slide of the fallback slideshow."""

    kind: str
    heading: str
    body: str
    duration_seconds: float | None

    @classmethod
    def from_slide(cls, slide: Slide) -> "SlideResponse":
        return cls(
            kind=slide.kind,
            heading=slide.heading,
            body=slide.body,
            duration_seconds=slide.duration_seconds,
        )


class MacroShareResponse(ApiModel):
    """One macronutrient slice of the nutrition chart."""

    name: str
    grams: float
    percent: float
    color: str


class NutritionResponse(ApiModel):
    """Calories plus the macronutrient chart slices."""

    calories: float
    shares: list[MacroShareResponse]

    @classmethod
    def from_breakdown(cls, breakdown: MacroBreakdown) -> "NutritionResponse":
        return cls(
            calories=breakdown.calories,
            shares=[
                MacroShareResponse(
                    name=share.name,
                    grams=share.grams,
                    percent=share.percent,
                    color=share.color,
                )
                for share in breakdown.shares
            ],
        )


class ToggleFavoriteRequest(ApiModel):
    """Payload for saving or unsaving a session's recipe."""

    session_id: str


class ToggleFavoriteResponse(ApiModel):
    """Favorite state after a toggle."""

    is_favorite: bool
    favorite: SavedRecipe | None = None


class RatingRequest(ApiModel):
    """Payload for rating a favorite."""

    rating: int = Field(ge=1, le=5)
