from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from services.model_client import GenerationConfig, ModelReply

PROVIDER_PAYLOAD = {"candidates": [{"content": {"parts": [{"text": "..."}]}}], "modelVersion": "stub-1"}


class StubModelClient:
    name = "stub"

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def generate(self, prompt: str, image: bytes, mime_type: str, config: GenerationConfig) -> ModelReply:
        self.calls.append({"image": image, "mime_type": mime_type, "config": config})
        if self.error is not None:
            raise self.error
        return ModelReply(text=self.text, raw=PROVIDER_PAYLOAD)


def _client(model_client, **settings: Any) -> TestClient:
    return TestClient(create_app(Settings(**settings), model_client=model_client))


def test_end_to_end_rizz_core() -> None:
    stub = StubModelClient(
        '{"verdict":"POST IT","comment":"confident pose","reasons":["good lighting","strong eye contact"]}'
    )
    with _client(stub, model_max_output_tokens=200, model_temperature=0.1) as client:
        res = client.post(
            "/api/feedback",
            json={"imageBase64": "data:image/png;base64,AAAA", "category": "Rizz core"},
        )

    assert res.status_code == 200
    body = res.json()
    assert body["verdict"] == "Post ✅"
    assert body["suggestion"] == "confident pose"
    assert body["reasons"] == ["good lighting", "strong eye contact"]
    assert body["raw"] == PROVIDER_PAYLOAD
    assert body["vibe"] == "rizzCore"
    assert body["degraded"] is False

    call = stub.calls[0]
    assert call["image"] == b"\x00\x00\x00"
    assert call["mime_type"] == "image/png"
    assert call["config"] == GenerationConfig(temperature=0.1, max_output_tokens=200)


def test_bare_base64_with_mime_type_override() -> None:
    stub = StubModelClient('{"verdict": "TWEAK IT", "comment": "straighten it"}')
    with _client(stub) as client:
        res = client.post("/api/feedback", json={"imageBase64": "AAAA", "mimeType": "image/webp"})
    assert res.status_code == 200
    assert res.json()["verdict"] == "Tweak ✏️"
    assert stub.calls[0]["mime_type"] == "image/webp"


@pytest.mark.parametrize("payload", [{}, {"imageBase64": ""}, {"imageBase64": "   ", "category": "Rizz core"}])
def test_missing_image_is_rejected(payload: dict) -> None:
    stub = StubModelClient("{}")
    with _client(stub) as client:
        res = client.post("/api/feedback", json=payload)
    assert res.status_code == 400
    assert res.json()["detail"] == "imageBase64 is a required field."
    assert stub.calls == []


def test_malformed_base64_is_rejected() -> None:
    with _client(StubModelClient("{}")) as client:
        res = client.post("/api/feedback", json={"imageBase64": "data:image/png;base64,@@@"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid base64 string format."


def test_model_failure_is_still_200() -> None:
    stub = StubModelClient(error=ConnectionError("network unreachable"))
    with _client(stub) as client:
        res = client.post("/api/feedback", json={"imageBase64": "AAAA", "category": "Classy core"})
    assert res.status_code == 200
    body = res.json()
    assert body["verdict"] == "Error ⚠️"
    assert "network unreachable" not in body["suggestion"]
    assert body["raw"]["error"] == "network unreachable"


def test_unconfigured_model_gives_error_verdict() -> None:
    with _client(None) as client:
        res = client.post("/api/feedback", json={"imageBase64": "AAAA"})
        health = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["verdict"] == "Error ⚠️"
    assert health.json()["model"] == {"provider": "vertex", "configured": False}


def test_lifespan_builds_client_from_settings() -> None:
    app = create_app(Settings(model_provider="vertex", gcloud_project=None))
    with TestClient(app) as client:
        assert client.app.state.model_client is None
        res = client.post("/api/feedback", json={"imageBase64": "AAAA"})
    assert res.json()["verdict"] == "Error ⚠️"


def test_client_slot_missing_without_startup() -> None:
    # no context manager: lifespan never runs, so nothing was initialized
    client = TestClient(create_app(Settings(), model_client=StubModelClient("{}")))
    res = client.post("/api/feedback", json={"imageBase64": "AAAA"})
    assert res.status_code == 500
    assert res.json()["detail"] == "Model client unavailable"


def test_health() -> None:
    with _client(StubModelClient(), model_provider="openai") as client:
        res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ok",
        "message": "Backend is running",
        "model": {"provider": "openai", "configured": True},
    }
