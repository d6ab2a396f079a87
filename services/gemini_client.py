# services/gemini_client.py
from google import genai
from google.genai import types

from services.model_client import GenerationConfig, ModelClientError, ModelReply


class GeminiReviewer:
    """Vertex AI Gemini vision model, one generate_content call per photo."""

    name = "vertex"

    def __init__(self, project: str, location: str, model: str, timeout: float = 30.0, client=None):
        self.model = model
        self._client = client or genai.Client(
            vertexai=True,
            project=project,
            location=location,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    def generate(self, prompt: str, image: bytes, mime_type: str, config: GenerationConfig) -> ModelReply:
        resp = self._client.models.generate_content(
            model=self.model,
            contents=[
                prompt,
                types.Part.from_bytes(data=image, mime_type=mime_type),
            ],
            config=types.GenerateContentConfig(
                temperature=config.temperature,
                max_output_tokens=config.max_output_tokens,
            ),
        )
        if resp is None:
            raise ModelClientError("Gemini returned no response")
        raw = resp.model_dump(mode="json", exclude_none=True) if hasattr(resp, "model_dump") else resp
        return ModelReply(text=(resp.text or "").strip(), raw=raw)
