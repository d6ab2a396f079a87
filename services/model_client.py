# services/model_client.py
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from config import Settings

logger = logging.getLogger(__name__)


class ModelClientError(RuntimeError):
    """Raised by a provider when the model call returns nothing usable."""


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 0.2
    max_output_tokens: int = 256


@dataclass
class ModelReply:
    text: str
    raw: Any = None


class ModelClient(Protocol):
    name: str

    def generate(self, prompt: str, image: bytes, mime_type: str, config: GenerationConfig) -> ModelReply:
        ...


def build_model_client(settings: Settings) -> Optional[ModelClient]:
    """Construct the configured provider once, or return None with a warning."""
    provider = settings.model_provider

    if provider == "vertex":
        if not settings.gcloud_project:
            logger.warning("GCLOUD_PROJECT not set, model feedback disabled")
            return None
        creds = settings.google_credentials
        if creds and not os.path.exists(creds):
            logger.warning("Credentials file not found at %s, model feedback disabled", creds)
            return None
        from services.gemini_client import GeminiReviewer
        client = GeminiReviewer(
            project=settings.gcloud_project,
            location=settings.gcloud_location,
            model=settings.gcloud_model,
            timeout=settings.model_timeout,
        )
        logger.info("Vertex AI configured: region=%s model=%s", settings.gcloud_location, settings.gcloud_model)
        return client

    if provider == "openai":
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY not set, model feedback disabled")
            return None
        from services.openai_review import OpenAIReviewer
        logger.info("OpenAI configured: model=%s", settings.review_model)
        return OpenAIReviewer(api_key=settings.openai_api_key, model=settings.review_model, timeout=settings.model_timeout)

    if provider == "replicate":
        if not settings.replicate_token:
            logger.warning("REPLICATE_API_TOKEN not set, model feedback disabled")
            return None
        from services.replicate_client import ReplicateReviewer
        logger.info("Replicate configured: model=%s", settings.replicate_model)
        return ReplicateReviewer(
            api_token=settings.replicate_token,
            model=settings.replicate_model,
            timeout=settings.model_timeout,
        )

    logger.warning("Unknown MODEL_PROVIDER %r, model feedback disabled", provider)
    return None
