"""OpenAI Images API client for dish photos."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from chefgenie.services.images import ImageClient


@dataclass
class OpenAIImageClient(ImageClient):
    """Image client backed by OpenAI Images API."""

    client: AsyncOpenAI

    async def generate(self, *, model: str, prompt: str, size: str) -> str | None:
        """Generate a single JPEG and return its base64 payload."""
        response = await self.client.images.generate(
            model=model,
            prompt=prompt,
            n=1,
            size=size,
            output_format="jpeg",
        )
        if not response.data:
            return None
        return response.data[0].b64_json
