"""OpenAI Responses API client for face recognition."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from face_tagger.domain.recognition import RequestPart
from face_tagger.services.recognition import RecognitionClient


@dataclass
class OpenAIRecognitionClient(RecognitionClient):
    """Recognition oracle backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIRecognitionClient":
        """Create an OpenAI recognition client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def compare(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float | None,
        store: bool,
        parts: list[RequestPart],
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        content = [_to_content(part) for part in parts]
        content.append({"type": "input_text", "text": prompt})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "face_match",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if temperature is not None:
            request_payload["temperature"] = temperature

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()


def _to_content(part: RequestPart) -> dict[str, str]:
    if part.kind == "image":
        return {
            "type": "input_image",
            "image_url": f"data:{part.media_type};base64,{part.data}",
        }
    return {"type": "input_text", "text": part.text or ""}
