# ============================================================
#  PixelWords — Pydantic API Schemas
# ============================================================
"""PixelWords — Pydantic API Schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

# ── Processing ───────────────────────────────────────────────


class LetterBin(BaseModel):
    start: int = Field(..., ge=0, le=255)
    end: int = Field(..., ge=0, le=255)
    letter: str = Field(..., min_length=1, max_length=1)
    pixel_count: int = Field(0, ge=0)


class ProcessResponse(BaseModel):
    words: list[str] = Field(default_factory=list, description="Up to 10 words, longest first")
    letter_string: str = Field("", description="Run-capped letter string the words were found in")
    width: int = 0
    height: int = 0
    mapping: list[LetterBin] = Field(default_factory=list, description="Bins in rank order")
    inference_ms: float = 0.0


# ── Errors ───────────────────────────────────────────────────


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Stable error code")
    message: str
    request_id: str | None = None


# ── Health ───────────────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    dictionary_words: int
    uptime_seconds: float
