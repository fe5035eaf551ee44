from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from .errors import ErrorKind


class SummaryFormat(str, Enum):
    ABSTRACT = "abstract"
    FULL = "full"
    FLOWCHART = "flowchart"


class Paper(BaseModel):
    id: str
    title: str
    authors: list[str] = []
    journal: str = ""
    year: int | None = None
    abstract: str = ""
    similarity: float | None = Field(None, ge=0.0, le=1.0)
    citations: int | None = None
    reference_count: int | None = None
    downloads: int | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class SummaryRequest(BaseModel):
    text: str
    format: str | None = None  # anything outside SummaryFormat, or none, gets the bare prompt

class SummaryResponse(BaseModel):
    summary: str

class ErrorResponse(BaseModel):
    error: str
    kind: ErrorKind = ErrorKind.DOWNSTREAM

class ProcessPaperRequest(BaseModel):
    paperText: str
    operation: Literal["store", "similar"]

class SpeechRequest(BaseModel):
    text: str
    voiceId: str

class Voice(BaseModel):
    id: str
    name: str


VOICES = [
    Voice(id="EXAVITQu4vr4xnSDxMaL", name="Sarah"),
    Voice(id="TX3LPaxmHKxFdv7VOQHJ", name="Liam"),
    Voice(id="pFZP5JQG7iQjIQuC4Bku", name="Lily"),
]

DEFAULT_VOICE_ID = VOICES[0].id


def find_voice(voice_id: str) -> Voice | None:
    return next((v for v in VOICES if v.id == voice_id), None)
