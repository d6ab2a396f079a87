import replicate

from services.model_client import GenerationConfig, ModelReply
from services.utils import ImagePayload, to_data_uri


class ReplicateReviewer:
    name = "replicate"

    def __init__(self, api_token: str, model: str, timeout: float = 30.0, client=None):
        self.model = model
        self.timeout = timeout
        self._client = client or replicate.Client(api_token=api_token, timeout=timeout)

    def generate(self, prompt: str, image: bytes, mime_type: str, config: GenerationConfig) -> ModelReply:
        out = self._client.run(
            self.model,
            input={
                "prompt": f"{prompt}\n\nReturn ONLY JSON.",
                "image": to_data_uri(ImagePayload(image, mime_type)),
                "temperature": config.temperature,
                "max_tokens": config.max_output_tokens,
            },
        )
        # language models on Replicate stream tokens back as an iterator of strings
        if isinstance(out, str):
            chunks = [out]
        else:
            chunks = [str(c) for c in (out or [])]
        return ModelReply(text="".join(chunks).strip(), raw=chunks)
