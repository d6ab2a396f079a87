# app.py
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from config import Settings
from schemas import FeedbackRequest, FeedbackResponse, HealthResponse, ModelStatus
from services.feedback import review_photo
from services.model_client import GenerationConfig, ModelClient, build_model_client
from services.utils import ImagePayloadError, decode_image_payload

logger = logging.getLogger(__name__)

_BUILD = object()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None, model_client=_BUILD) -> FastAPI:
    """Build the API. Pass `model_client` to skip provider construction (tests, scripts)."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Post or Nah backend (provider=%s)", settings.model_provider)
        client = build_model_client(settings) if model_client is _BUILD else model_client
        if client is None:
            logger.info("No model client, /api/feedback will answer with Error verdicts")
        app.state.model_client = client
        yield
        logger.info("Shutting down...")

    app = FastAPI(title="Post or Nah API", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_model_client(request: Request) -> Optional[ModelClient]:
        if not hasattr(request.app.state, "model_client"):
            raise HTTPException(status_code=500, detail="Model client unavailable")
        return request.app.state.model_client

    @app.get("/api/health", response_model=HealthResponse)
    def health(request: Request):
        client = getattr(request.app.state, "model_client", None)
        return HealthResponse(model=ModelStatus(provider=settings.model_provider, configured=client is not None))

    @app.post("/api/feedback", response_model=FeedbackResponse)
    async def feedback(body: FeedbackRequest, client: Optional[ModelClient] = Depends(get_model_client)):
        """
        Judge one photo for the chosen vibe. Model failures still answer 200
        with an ``Error ⚠️`` verdict; only bad input is rejected.
        """
        if not body.imageBase64 or not body.imageBase64.strip():
            raise HTTPException(status_code=400, detail="imageBase64 is a required field.")
        try:
            image = decode_image_payload(body.imageBase64, body.mimeType)
        except ImagePayloadError as e:
            logger.info("Rejected image payload: %s", e)
            raise HTTPException(status_code=400, detail="Invalid base64 string format.")

        logger.info("Received image for feedback, category=%s", body.category or "none")
        return await review_photo(
            client,
            image,
            body.category,
            config=GenerationConfig(
                temperature=settings.model_temperature,
                max_output_tokens=settings.model_max_output_tokens,
            ),
            timeout=settings.model_timeout,
        )

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)
app = create_app(_settings)


# If run directly for local dev
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=_settings.port, reload=True)
