from __future__ import annotations

import random
import time
from typing import Any, List

import pytest

from prompts import prompt_for
from services.feedback import (
    CALL_FAILED_SUGGESTION,
    NOT_CONFIGURED_SUGGESTION,
    PARSE_FAILED_SUGGESTION,
    TIMEOUT_SUGGESTION,
    review_photo,
)
from services.model_client import GenerationConfig, ModelReply
from services.utils import ImagePayload
from services.vibes import VibeKey

IMAGE = ImagePayload(b"\x00\x00\x00", "image/png")


class StubModelClient:
    name = "stub"

    def __init__(self, text: str = "", raw: Any = None, error: Exception | None = None, delay: float = 0.0):
        self.text = text
        self.raw = raw if raw is not None else {"candidates": [{"text": text}]}
        self.error = error
        self.delay = delay
        self.calls: List[dict] = []

    def generate(self, prompt: str, image: bytes, mime_type: str, config: GenerationConfig) -> ModelReply:
        self.calls.append({"prompt": prompt, "image": image, "mime_type": mime_type, "config": config})
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ModelReply(text=self.text, raw=self.raw)


@pytest.mark.asyncio
async def test_structured_reply_is_mapped() -> None:
    client = StubModelClient(
        '{"verdict":"POST IT","comment":"confident pose","reasons":["good lighting","strong eye contact"],"score":8.8}'
    )
    config = GenerationConfig(temperature=0.1, max_output_tokens=128)
    resp = await review_photo(client, IMAGE, "Rizz core", config=config)

    assert resp.verdict == "Post ✅"
    assert resp.suggestion == "confident pose"
    assert resp.reasons == ["good lighting", "strong eye contact"]
    assert resp.score == 8.8
    assert resp.vibe == VibeKey.RIZZ_CORE.value
    assert resp.degraded is False
    assert resp.raw == client.raw

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["prompt"] == prompt_for(VibeKey.RIZZ_CORE)
    assert call["image"] == IMAGE.data
    assert call["mime_type"] == "image/png"
    assert call["config"] == config


@pytest.mark.asyncio
async def test_missing_client_short_circuits() -> None:
    resp = await review_photo(None, IMAGE, "Classy core")
    assert resp.verdict == "Error ⚠️"
    assert resp.suggestion == NOT_CONFIGURED_SUGGESTION
    assert resp.vibe == VibeKey.CLASSY_CORE.value


@pytest.mark.asyncio
async def test_provider_error_becomes_error_verdict() -> None:
    client = StubModelClient(error=PermissionError("403 permission denied on aiplatform"))
    resp = await review_photo(client, IMAGE)
    assert resp.verdict == "Error ⚠️"
    assert resp.suggestion == CALL_FAILED_SUGGESTION
    assert resp.raw == {"error": "403 permission denied on aiplatform", "provider": "stub"}
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_timeout_becomes_error_verdict() -> None:
    client = StubModelClient(text='{"verdict":"POST IT"}', delay=0.5)
    resp = await review_photo(client, IMAGE, timeout=0.05)
    assert resp.verdict == "Error ⚠️"
    assert resp.suggestion == TIMEOUT_SUGGESTION
    assert resp.raw["provider"] == "stub"


@pytest.mark.asyncio
async def test_empty_reply_is_flagged_as_degraded() -> None:
    client = StubModelClient(text="", raw={"candidates": []})
    resp = await review_photo(client, IMAGE, "Matcha core", rng=random.Random(3))
    assert resp.degraded is True
    assert resp.verdict in {"Post ✅", "Nah ❌"}
    assert resp.suggestion
    assert resp.raw == {"fallback": True, "provider": "stub", "response": {"candidates": []}}


@pytest.mark.asyncio
async def test_freeform_reply_uses_heuristic() -> None:
    client = StubModelClient(text="This is post-worthy but honestly nah, skip it")
    resp = await review_photo(client, IMAGE, "xyz123")
    assert resp.verdict == "Nah ❌"
    assert resp.suggestion == "This is post-worthy but honestly nah, skip it"
    assert resp.vibe == "general"
    assert resp.degraded is False


@pytest.mark.asyncio
async def test_deeply_nested_reply_does_not_escape() -> None:
    text = '{"verdict": "NAH", "x": ' + "[" * 5000 + "]" * 5000 + "}"
    resp = await review_photo(StubModelClient(text=text), ImagePayload(b"\x00"), "Rizz core")
    assert resp.verdict == "Nah ❌"
    assert resp.vibe == VibeKey.RIZZ_CORE.value


@pytest.mark.asyncio
async def test_unexpected_parse_failure_becomes_error_verdict(monkeypatch: pytest.MonkeyPatch) -> None:
    import services.feedback as feedback_module

    def _boom(*args: Any, **kwargs: Any):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(feedback_module, "parse_verdict", _boom)
    resp = await review_photo(StubModelClient(text='{"verdict": "POST IT"}'), IMAGE)
    assert resp.verdict == "Error ⚠️"
    assert resp.suggestion == PARSE_FAILED_SUGGESTION
    assert resp.raw == {"error": "parser exploded", "provider": "stub"}
