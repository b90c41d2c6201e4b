"""View-ready data derived from a recipe."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Slide:
    """One frame of the text slideshow shown in place of a video."""

    kind: str
    heading: str
    body: str
    duration_seconds: float | None


@dataclass(frozen=True)
class MacroShare:
    """Single macronutrient slice for a nutrition chart."""

    name: str
    grams: float
    percent: float
    color: str


@dataclass(frozen=True)
class MacroBreakdown:
    """Macronutrient split plus total calories."""

    calories: float
    shares: list[MacroShare]
