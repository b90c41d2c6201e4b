"""Serving-size scaling for ingredient quantities."""

import math
import re

from chefgenie.domain.recipes import (
    Ingredient,
    PlainIngredient,
    Recipe,
    StructuredIngredient,
)

MIN_SERVINGS = 1

_NUMBER_PATTERN = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")
_CULINARY_FRACTIONS: tuple[tuple[float, str], ...] = (
    (0.25, "¼"),
    (0.33, "⅓"),
    (0.5, "½"),
    (0.66, "⅔"),
    (0.75, "¾"),
)
_FRACTION_TOLERANCE = 0.05
_NOISE_THRESHOLD = 0.01


def scale_quantity(quantity: str, base_servings: int, target_servings: int) -> str:
    """Rescale a quantity string from base to target servings.

    Integers, decimals, simple fractions ("1/2") and ranges ("1-2") are
    scaled; anything else, or any arithmetic failure, returns the input
    unchanged.
    """
    if not quantity or base_servings == target_servings:
        return quantity
    try:
        ratio = target_servings / base_servings
        if "-" in quantity:
            low_raw, high_raw = quantity.split("-", 1)
            low = _parse_number(low_raw)
            high = _parse_number(high_raw)
            if low is None or high is None:
                return quantity
            return f"{format_quantity(low * ratio)}-{format_quantity(high * ratio)}"
        if "/" in quantity:
            numerator_raw, denominator_raw = quantity.split("/", 1)
            numerator = _parse_number(numerator_raw)
            denominator = _parse_number(denominator_raw)
            if numerator is None or denominator is None or denominator == 0:
                return quantity
            return format_quantity(numerator / denominator * ratio)
        value = _parse_number(quantity)
        if value is None:
            return quantity
        return format_quantity(value * ratio)
    except (ArithmeticError, ValueError):
        return quantity


def format_quantity(value: float) -> str:
    """Render a scaled value, snapping to common kitchen fractions."""
    whole = math.floor(value)
    fraction = value - whole
    if fraction < _NOISE_THRESHOLD:
        return str(whole)
    for target, glyph in _CULINARY_FRACTIONS:
        if abs(fraction - target) < _FRACTION_TOLERANCE:
            return f"{whole} {glyph}" if whole > 0 else glyph
    rounded = f"{value:.1f}"
    return rounded[:-2] if rounded.endswith(".0") else rounded


def adjust_servings(current: int, delta: int) -> int:
    """Apply a stepper adjustment, never dropping below one serving."""
    return max(MIN_SERVINGS, current + delta)


def format_ingredient(
    ingredient: Ingredient, base_servings: int, target_servings: int
) -> str:
    """Render one ingredient line for the requested serving count."""
    if isinstance(ingredient, PlainIngredient):
        return ingredient.text
    if isinstance(ingredient, StructuredIngredient):
        quantity = scale_quantity(
            ingredient.quantity, base_servings, target_servings
        )
        return " ".join(
            part for part in (quantity, ingredient.unit, ingredient.item) if part
        )
    raise TypeError(f"Unsupported ingredient type: {type(ingredient)!r}")


def scale_ingredients(recipe: Recipe, target_servings: int) -> list[str]:
    """Return all ingredient lines of a recipe scaled to target servings."""
    return [
        format_ingredient(ingredient, recipe.servings, target_servings)
        for ingredient in recipe.ingredients
    ]


def _parse_number(raw: str) -> float | None:
    """Parse a plain non-negative decimal, or return None."""
    cleaned = raw.strip()
    if not _NUMBER_PATTERN.match(cleaned):
        return None
    return float(cleaned)
