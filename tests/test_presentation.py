"""Tests for slideshow and macro chart data."""

from chefgenie.domain.recipes import Macros
from chefgenie.services.presentation import build_slides, macro_breakdown
from tests.conftest import make_recipe


def test_build_slides_orders_title_steps_and_end() -> None:
    slides = build_slides(make_recipe())

    assert [slide.kind for slide in slides] == [
        "title",
        "step",
        "step",
        "step",
        "end",
    ]
    assert slides[0].heading == "Lemon Garlic Chicken"
    assert slides[0].duration_seconds == 4.0
    assert slides[2].heading == "Step 2 of 3"
    assert slides[2].body == "Sear until golden."
    assert slides[2].duration_seconds == 6.0


def test_build_slides_end_slide_does_not_auto_advance() -> None:
    end = build_slides(make_recipe())[-1]

    assert end.heading == "Bon appétit!"
    assert end.duration_seconds is None
    assert "35 mins" in end.body


def test_macro_breakdown_uses_gram_share() -> None:
    breakdown = macro_breakdown(Macros(calories=420, protein=48, carbs=6, fats=22))

    assert breakdown.calories == 420
    assert [share.name for share in breakdown.shares] == ["Protein", "Carbs", "Fats"]
    assert [share.percent for share in breakdown.shares] == [63.2, 7.9, 28.9]
    assert breakdown.shares[0].color == "#10b981"


def test_macro_breakdown_all_zero() -> None:
    breakdown = macro_breakdown(Macros(calories=0, protein=0, carbs=0, fats=0))

    assert all(share.percent == 0.0 for share in breakdown.shares)
