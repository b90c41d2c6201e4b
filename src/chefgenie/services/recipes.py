"""Structured recipe generation using LLMs."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from chefgenie.domain.recipes import Recipe, UserPreferences

_logger = logging.getLogger(__name__)

RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "The creative name of the dish."},
        "description": {
            "type": "string",
            "description": "A short, appetizing description of the dish.",
        },
        "cookingTime": {
            "type": "string",
            "description": "Total time required (e.g., '30 mins').",
        },
        "difficulty": {
            "type": "string",
            "description": "Difficulty level (Easy, Medium, Hard).",
        },
        "servings": {
            "type": "integer",
            "minimum": 1,
            "description": "The number of servings this recipe yields.",
        },
        "ingredients": {
            "type": "array",
            "description": "List of ingredients with structured quantities.",
            "items": {
                "type": "object",
                "properties": {
                    "item": {
                        "type": "string",
                        "description": "Ingredient name (e.g., 'Chicken Breast').",
                    },
                    "quantity": {
                        "type": "string",
                        "description": (
                            "Numeric quantity such as '1', '0.5', '1/2' or '1-2'. "
                            "Empty if not applicable."
                        ),
                    },
                    "unit": {
                        "type": "string",
                        "description": (
                            "Unit of measure (e.g., 'cup', 'kg', 'pinch'). "
                            "Empty if not applicable."
                        ),
                    },
                },
                "required": ["item", "quantity", "unit"],
                "additionalProperties": False,
            },
        },
        "instructions": {
            "type": "array",
            "description": "Step-by-step cooking instructions.",
            "items": {"type": "string"},
        },
        "macros": {
            "type": "object",
            "properties": {
                "calories": {"type": "number"},
                "protein": {"type": "number", "description": "In grams"},
                "carbs": {"type": "number", "description": "In grams"},
                "fats": {"type": "number", "description": "In grams"},
            },
            "required": ["calories", "protein", "carbs", "fats"],
            "additionalProperties": False,
        },
    },
    "required": [
        "title",
        "description",
        "cookingTime",
        "difficulty",
        "servings",
        "ingredients",
        "instructions",
        "macros",
    ],
    "additionalProperties": False,
}


class GenerationError(Exception):
    """Raised when no usable recipe could be produced."""


class RecipeClient(Protocol):
    """Interface for structured-output text generation."""

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
        """Return structured recipe data matching the schema."""


@dataclass
class RecipeService:
    """Builds recipe prompts and validates the structured response."""

    client: RecipeClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate(self, preferences: UserPreferences) -> Recipe:
        """Generate a recipe for the given preferences."""
        prompt = build_recipe_prompt(preferences)
        image_data_url = _to_data_url(preferences.image) if preferences.image else None
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=RECIPE_SCHEMA,
                image_data_url=image_data_url,
            )
        except Exception as exc:
            _logger.exception("Recipe generation request failed")
            raise GenerationError(str(exc) or "No response from AI") from exc
        try:
            recipe = Recipe.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Recipe response failed validation: %s", exc)
            raise GenerationError("AI returned an invalid recipe") from exc
        if not recipe.ingredients or not recipe.instructions:
            raise GenerationError("AI returned an incomplete recipe")
        _logger.info(
            "Generated recipe: title=%s servings=%s", recipe.title, recipe.servings
        )
        return recipe


def build_recipe_prompt(preferences: UserPreferences) -> str:
    """Compose the natural-language generation prompt."""
    lines = ["Generate a creative and delicious recipe."]
    if preferences.ingredients:
        lines[0] += f" Use these ingredients: {', '.join(preferences.ingredients)}."
    elif preferences.image:
        lines[0] += " Identify the ingredients in the image and use them."
    else:
        lines[0] += " Suggest a random popular dish."

    if preferences.user_instructions:
        lines.append(
            "Please try to incorporate the following specific cooking "
            "steps/instructions requested by the user:"
        )
        lines.extend(
            f"{index}. {step}"
            for index, step in enumerate(preferences.user_instructions, start=1)
        )

    lines.extend(
        [
            f"Meal Type: {preferences.meal_type.value}.",
            "Cooking Time Goal: "
            f"{preferences.cooking_time or 'No specific time constraint'}.",
            f"Dietary Restriction: {preferences.diet.value}.",
            "Specific Allergies/Restrictions: "
            f"{preferences.specific_dietary_restrictions or 'None'}.",
            f"Additional Notes: {preferences.additional_notes or 'None'}.",
            "Return the result strictly as a JSON object matching the schema provided.",
        ]
    )
    return "\n".join(lines)


def _to_data_url(image: str) -> str:
    """Normalize an uploaded image (data URL or bare base64) to a data URL."""
    if image.startswith("data:"):
        return image
    try:
        header = base64.b64decode(image[:64], validate=False)
    except (binascii.Error, ValueError):
        header = b""
    return f"data:{_detect_mime_type(header)};base64,{image}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
