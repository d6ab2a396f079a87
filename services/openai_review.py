# services/openai_review.py
from openai import OpenAI

from services.model_client import GenerationConfig, ModelClientError, ModelReply
from services.utils import ImagePayload, to_data_uri


class OpenAIReviewer:
    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o", timeout: float = 30.0, client=None):
        self.model = model
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def generate(self, prompt: str, image: bytes, mime_type: str, config: GenerationConfig) -> ModelReply:
        image_url = to_data_uri(ImagePayload(image, mime_type))
        resp = self._client.chat.completions.create(
            model=self.model,
            temperature=config.temperature,
            max_tokens=config.max_output_tokens,
            messages=[
                {"role": "user", "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_url}}
                ]}
            ],
        )
        if not resp.choices:
            raise ModelClientError("OpenAI returned no choices")
        text = (resp.choices[0].message.content or "").strip()
        raw = resp.model_dump() if hasattr(resp, "model_dump") else resp
        return ModelReply(text=text, raw=raw)
