from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, List, Optional


class DisplayVerdict(str, Enum):
    POST = "Post ✅"
    TWEAK = "Tweak ✏️"
    NAH = "Nah ❌"
    ERROR = "Error ⚠️"


class FeedbackRequest(BaseModel):
    imageBase64: Optional[str] = None
    category: Optional[str] = None
    mimeType: Optional[str] = None


class FeedbackResponse(BaseModel):
    verdict: str
    suggestion: str
    reasons: List[str] = Field(default_factory=list, max_length=4)
    score: Optional[float] = Field(default=None, ge=0, le=10)
    vibe: str = "general"
    degraded: bool = False
    raw: Any = None


class ModelStatus(BaseModel):
    provider: str
    configured: bool


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "Backend is running"
    model: ModelStatus
