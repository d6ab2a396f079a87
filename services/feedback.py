# services/feedback.py
"""Photo feedback pipeline: vibe -> prompt -> one model call -> verdict.

`review_photo` is total. Whatever the model client does, the caller gets a
FeedbackResponse back; failures become an ``Error ⚠️`` verdict.
"""
import asyncio
import logging
import random
from typing import Optional

from prompts import prompt_for
from schemas import DisplayVerdict, FeedbackResponse
from services.model_client import GenerationConfig, ModelClient
from services.utils import ImagePayload
from services.verdict import parse_verdict
from services.vibes import normalize_vibe_key

logger = logging.getLogger(__name__)

NOT_CONFIGURED_SUGGESTION = "Model service not configured. Check the MODEL_PROVIDER settings and credentials."
CALL_FAILED_SUGGESTION = (
    "Could not analyze image. Verify the model API is enabled, the region/model name, "
    "and that the service account or API key has access."
)
TIMEOUT_SUGGESTION = "The photo review took too long. Please try again."
PARSE_FAILED_SUGGESTION = "The reviewer sent back something unreadable. Please try again."


def _error_response(suggestion: str, raw, vibe: str) -> FeedbackResponse:
    return FeedbackResponse(verdict=DisplayVerdict.ERROR.value, suggestion=suggestion, raw=raw, vibe=vibe)


async def review_photo(
    client: Optional[ModelClient],
    image: ImagePayload,
    category: Optional[str] = None,
    *,
    config: GenerationConfig = GenerationConfig(),
    timeout: float = 30.0,
    rng: Optional[random.Random] = None,
) -> FeedbackResponse:
    vibe = normalize_vibe_key(category)

    if client is None:
        return _error_response(NOT_CONFIGURED_SUGGESTION, "Model client not initialized", vibe.value)

    provider = getattr(client, "name", type(client).__name__)
    logger.info("Calling %s for vibe=%s (%d bytes, %s)", provider, vibe.value, len(image.data), image.mime_type)
    try:
        reply = await asyncio.wait_for(
            asyncio.to_thread(client.generate, prompt_for(vibe), image.data, image.mime_type, config),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("%s call timed out after %.1fs", provider, timeout)
        return _error_response(TIMEOUT_SUGGESTION, {"error": f"timed out after {timeout}s", "provider": provider}, vibe.value)
    except Exception as e:
        logger.exception("%s call failed", provider)
        return _error_response(CALL_FAILED_SUGGESTION, {"error": str(e), "provider": provider}, vibe.value)

    logger.debug("%s reply: %s", provider, reply.text)
    try:
        verdict = parse_verdict(reply.text, vibe, rng)
        raw = {"fallback": True, "provider": provider, "response": reply.raw} if verdict.degraded else reply.raw
        return FeedbackResponse(
            verdict=verdict.label,
            suggestion=verdict.comment,
            reasons=verdict.reasons,
            score=verdict.score,
            vibe=vibe.value,
            degraded=verdict.degraded,
            raw=raw,
        )
    except Exception as e:
        logger.exception("Could not interpret %s reply", provider)
        return _error_response(PARSE_FAILED_SUGGESTION, {"error": str(e), "provider": provider}, vibe.value)
