"""Display data derived from recipes: fallback slideshow and macro chart."""

from chefgenie.domain.presentation import MacroBreakdown, MacroShare, Slide
from chefgenie.domain.recipes import Macros, Recipe

TITLE_SLIDE_SECONDS = 4.0
STEP_SLIDE_SECONDS = 6.0

_MACRO_COLORS = {
    "Protein": "#10b981",
    "Carbs": "#f59e0b",
    "Fats": "#ef4444",
}


def build_slides(recipe: Recipe) -> list[Slide]:
    """Build the auto-advancing slideshow shown when no video is available.

    The title slide and each step advance on a timer; the closing slide stays
    until dismissed.
    """
    slides = [
        Slide(
            kind="title",
            heading=recipe.title,
            body=recipe.description,
            duration_seconds=TITLE_SLIDE_SECONDS,
        )
    ]
    total = len(recipe.instructions)
    slides.extend(
        Slide(
            kind="step",
            heading=f"Step {index} of {total}",
            body=step,
            duration_seconds=STEP_SLIDE_SECONDS,
        )
        for index, step in enumerate(recipe.instructions, start=1)
    )
    slides.append(
        Slide(
            kind="end",
            heading="Bon appétit!",
            body=(
                "Enjoy this meal while fresh! "
                f"The estimated cooking time is {recipe.cooking_time}."
            ),
            duration_seconds=None,
        )
    )
    return slides


def macro_breakdown(macros: Macros) -> MacroBreakdown:
    """Split protein, carbs and fats into chart slices by gram share."""
    grams = {
        "Protein": macros.protein,
        "Carbs": macros.carbs,
        "Fats": macros.fats,
    }
    total = sum(value for value in grams.values() if value > 0)
    shares = [
        MacroShare(
            name=name,
            grams=value,
            percent=round(value / total * 100, 1) if total and value > 0 else 0.0,
            color=_MACRO_COLORS[name],
        )
        for name, value in grams.items()
    ]
    return MacroBreakdown(calories=macros.calories, shares=shares)
