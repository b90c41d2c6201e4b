"""Best-effort dish photography."""

import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class ImageClient(Protocol):
    """Interface for image generation."""

    async def generate(self, *, model: str, prompt: str, size: str) -> str | None:
        """Return a base64-encoded JPEG, or None when nothing was produced."""


@dataclass
class DishImageService:
    """Generates a dish photo; failures resolve to no image."""

    client: ImageClient
    model: str
    size: str

    async def generate(self, title: str, description: str) -> str | None:
        """Return a JPEG data URI for the dish, or None on any failure."""
        try:
            encoded = await self.client.generate(
                model=self.model,
                prompt=build_image_prompt(title, description),
                size=self.size,
            )
        except Exception:
            _logger.exception("Image generation failed: title=%s", title)
            return None
        if not encoded:
            _logger.warning("Image generation returned no image: title=%s", title)
            return None
        return f"data:image/jpeg;base64,{encoded}"


def build_image_prompt(title: str, description: str) -> str:
    """Food-photography prompt for a recipe."""
    return (
        f"Professional food photography of {title}.\n"
        f"Context: {description}.\n"
        "Style: Michelin star plating, photorealistic, 8k resolution, soft natural "
        "window lighting, shallow depth of field to highlight texture, vibrant "
        "colors, fresh garnish, macro detail, overhead or 45-degree angle shot. "
        "No text overlays."
    )
