"""Tests for dish image generation."""

import asyncio

from chefgenie.services.images import DishImageService, build_image_prompt
from tests.conftest import FakeImageClient


def _service(client: FakeImageClient) -> DishImageService:
    return DishImageService(client=client, model="gpt-image-1", size="1536x1024")


def test_generate_returns_jpeg_data_uri() -> None:
    client = FakeImageClient(encoded="YWJj")

    result = asyncio.run(_service(client).generate("Ramen", "Rich broth"))

    assert result == "data:image/jpeg;base64,YWJj"
    assert "Professional food photography of Ramen." in client.prompts[0]
    assert "Context: Rich broth." in client.prompts[0]


def test_generate_resolves_failures_to_none() -> None:
    client = FakeImageClient(error=ConnectionError("network down"))

    assert asyncio.run(_service(client).generate("Ramen", "Rich broth")) is None


def test_generate_resolves_empty_result_to_none() -> None:
    client = FakeImageClient(encoded=None)

    assert asyncio.run(_service(client).generate("Ramen", "Rich broth")) is None


def test_image_prompt_forbids_text_overlays() -> None:
    assert build_image_prompt("Tacos", "Street style").endswith("No text overlays.")
