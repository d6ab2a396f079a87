import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> List[str]:
    return [s.strip() for s in value.split(",") if s.strip()]


@dataclass(frozen=True)
class Settings:
    model_provider: str = "vertex"
    gcloud_project: Optional[str] = None
    gcloud_location: str = "us-central1"
    gcloud_model: str = "gemini-2.0-flash"
    google_credentials: Optional[str] = None
    openai_api_key: Optional[str] = None
    review_model: str = "gpt-4o"
    replicate_token: Optional[str] = None
    replicate_model: str = "meta/meta-llama-3.2-11b-vision-instruct"
    model_temperature: float = 0.2
    model_max_output_tokens: int = 256
    model_timeout: float = 30.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 3001

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            model_provider=os.getenv("MODEL_PROVIDER", "vertex").strip().lower(),
            gcloud_project=os.getenv("GCLOUD_PROJECT") or None,
            gcloud_location=os.getenv("GCLOUD_LOCATION", "us-central1"),
            gcloud_model=os.getenv("GCLOUD_MODEL", "gemini-2.0-flash"),
            google_credentials=os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            review_model=os.getenv("REVIEW_MODEL", "gpt-4o"),
            replicate_token=os.getenv("REPLICATE_API_TOKEN") or None,
            replicate_model=os.getenv("REPLICATE_MODEL", "meta/meta-llama-3.2-11b-vision-instruct"),
            model_temperature=float(os.getenv("MODEL_TEMPERATURE", "0.2")),
            model_max_output_tokens=int(os.getenv("MODEL_MAX_OUTPUT_TOKENS", "256")),
            model_timeout=float(os.getenv("MODEL_TIMEOUT", "30")),
            cors_origins=_split(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "3001")),
        )
