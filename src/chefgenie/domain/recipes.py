"""Domain models for generated and saved recipes."""

import time
from enum import Enum
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_SERVINGS = 4

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DietType(str, Enum):
    """Dietary constraint selected by the user."""

    NONE = "None"
    VEGAN = "Vegan"
    VEGETARIAN = "Vegetarian"
    KETO = "Keto"
    PALEO = "Paleo"
    GLUTEN_FREE = "Gluten-Free"


class MealType(str, Enum):
    """Meal slot the recipe is meant for."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DESSERT = "Dessert"


class Macros(BaseModel):
    """Per-serving macronutrients; protein, carbs and fats in grams."""

    model_config = ConfigDict(frozen=True)

    calories: float
    protein: float
    carbs: float
    fats: float


class PlainIngredient(BaseModel):
    """Free-text ingredient line kept from older saved data."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str


class StructuredIngredient(BaseModel):
    """Ingredient with a scalable quantity."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    item: str
    quantity: str = ""
    unit: str = ""

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


Ingredient = Annotated[
    PlainIngredient | StructuredIngredient, Field(discriminator="kind")
]


def _coerce_ingredient(entry: object) -> object:
    """Tag legacy ingredient payloads (bare strings or untagged objects)."""
    if isinstance(entry, str):
        return {"kind": "plain", "text": entry}
    if isinstance(entry, dict) and "kind" not in entry:
        return {"kind": "structured", **entry}
    return entry


class Recipe(BaseModel):
    """A generated recipe; immutable once produced."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    title: str
    description: str
    cooking_time: str
    difficulty: str
    servings: int = Field(default=DEFAULT_SERVINGS, ge=1)
    ingredients: list[Ingredient]
    instructions: list[str]
    macros: Macros

    @field_validator("servings", mode="before")
    @classmethod
    def _default_missing_servings(cls, value: object) -> object:
        if value is None or value == 0:
            return DEFAULT_SERVINGS
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def _coerce_legacy_ingredients(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return [_coerce_ingredient(entry) for entry in value]


class SavedRecipe(Recipe):
    """A favorited recipe with its persistence metadata."""

    id: str
    saved_at: int
    image_url: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)

    @classmethod
    def from_recipe(cls, recipe: Recipe, image_url: str | None) -> "SavedRecipe":
        """Create a new favorite entry from a generated recipe."""
        return cls(
            **recipe.model_dump(include=set(Recipe.model_fields)),
            id=str(uuid4()),
            saved_at=int(time.time() * 1000),
            image_url=image_url,
        )


class UserPreferences(BaseModel):
    """Input collected for a single generation request."""

    model_config = _CAMEL_CONFIG

    ingredients: list[str] = Field(default_factory=list)
    user_instructions: list[str] = Field(default_factory=list)
    diet: DietType = DietType.NONE
    meal_type: MealType = MealType.DINNER
    additional_notes: str = ""
    specific_dietary_restrictions: str = ""
    cooking_time: str = ""
    image: str | None = None

    @field_validator("ingredients", "user_instructions", mode="after")
    @classmethod
    def _drop_blank_entries(cls, value: list[str]) -> list[str]:
        return [entry.strip() for entry in value if entry.strip()]
