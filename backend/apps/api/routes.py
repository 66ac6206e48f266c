"""PixelWords — API Routes.

REST endpoints for image-to-words processing.
All processing uses the core/ pipeline modules.
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, File, Request, UploadFile
from loguru import logger
from starlette.concurrency import run_in_threadpool

from backend.apps.api.dependencies import get_dictionary, get_pipeline, get_settings
from backend.apps.api.schemas import ErrorResponse, HealthResponse, LetterBin, ProcessResponse
from backend.config import Settings
from core.errors import InvalidImageError, NoImageError, PixelWordsError, ProcessingError
from core.matching.dictionary import Dictionary
from core.pipeline import WordExtractionPipeline
from core.types import ExtractionResult

router = APIRouter()


# ── Health ───────────────────────────────────────────────────


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(
    request: Request,
    settings: Settings = Depends(get_settings),
    dictionary: Dictionary = Depends(get_dictionary),
) -> HealthResponse:
    """Liveness / readiness check."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        dictionary_words=len(dictionary),
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )


# ── Processing ───────────────────────────────────────────────


def _to_response(result: ExtractionResult) -> ProcessResponse:
    mapping = result.mapping.assignments if result.mapping else ()
    return ProcessResponse(
        words=result.words,
        letter_string=result.letter_string,
        width=result.width,
        height=result.height,
        mapping=[
            LetterBin(
                start=a.bin.start,
                end=a.bin.end,
                letter=a.letter,
                pixel_count=a.pixel_count,
            )
            for a in mapping
        ],
        inference_ms=round(result.inference_time_ms, 2),
    )


async def _read_upload(image: UploadFile, max_bytes: int) -> bytes:
    """Read the upload, refusing payloads over `max_bytes` (0 = unlimited).

    The declared size is checked first; the read itself stops one byte past
    the limit, so an oversized body is never held in memory whole.
    """
    if not max_bytes:
        return await image.read()

    if image.size is not None and image.size > max_bytes:
        raise InvalidImageError(
            f"Invalid image: payload of {image.size} bytes exceeds {max_bytes}",
            {"filename": image.filename},
        )

    contents = await image.read(max_bytes + 1)
    if len(contents) > max_bytes:
        raise InvalidImageError(
            f"Invalid image: payload exceeds {max_bytes} bytes",
            {"filename": image.filename},
        )
    return contents


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Processing"],
)
async def process_image(
    image: UploadFile | None = File(None, description="Image file (PNG/JPEG/WebP/...)"),
    pipeline: WordExtractionPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
) -> ProcessResponse:
    """Turn an uploaded image into a letter string and the words hidden in it."""
    if image is None:
        raise NoImageError()

    contents = await _read_upload(image, settings.max_upload_bytes)
    if not contents:
        raise NoImageError()

    try:
        # One uninterrupted CPU-bound call, off the event loop
        result = await run_in_threadpool(pipeline.process_bytes, contents)
    except PixelWordsError:
        raise
    except Exception as e:
        logger.exception("Processing failed: {}", e)
        raise ProcessingError("Internal processing failure") from e

    logger.info(
        "Processed {} | {}x{} | {} words",
        image.filename,
        result.width,
        result.height,
        len(result.words),
    )
    return _to_response(result)
