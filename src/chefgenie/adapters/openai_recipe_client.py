"""OpenAI Responses API client for structured recipe generation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from chefgenie.services.recipes import RecipeClient


@dataclass
class OpenAIRecipeClient(RecipeClient):
    """Recipe client backed by OpenAI Responses API structured outputs."""

    client: AsyncOpenAI

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
        """Call OpenAI Responses API and decode the JSON output."""
        content: list[dict[str, object]] = []
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        content.append({"type": "input_text", "text": prompt})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "recipe",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("No response from AI")
        return json.loads(output_text)
