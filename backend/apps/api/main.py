# ============================================================
#  PixelWords — FastAPI Application Factory
# ============================================================
"""
FastAPI application with:
  • POST /process — image upload → letter string + dictionary words
  • GET /health — liveness / readiness check
  • CORS and request ID middleware (ID bound to every log line)
  • Structured logging integration
  • Dictionary loaded once at startup and shared read-only

NOTE: The core pipeline (core/) runs without a server; see pixelwords.py.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from backend.apps.api.middleware import RequestIDMiddleware
from backend.apps.api.routes import router as api_router
from backend.config import Settings, settings as default_settings
from backend.logging_config import setup_logging
from core.errors import (
    InputError,
    InvalidImageError,
    InvariantViolation,
    NoImageError,
    PixelWordsError,
    StartupError,
)
from core.matching.dictionary import Dictionary, load_dictionary
from core.pipeline import PipelineConfig, WordExtractionPipeline
from core.vision.decoder import DecodeConfig, ImageDecoder


def build_pipeline(settings: Settings, dictionary: Dictionary) -> WordExtractionPipeline:
    """Create the shared pipeline from settings."""
    config = PipelineConfig(
        max_word_len=settings.max_word_length,
        max_consecutive=settings.max_consecutive_letters,
        max_results=settings.max_results,
        random_seed=settings.random_seed,
    )
    decoder = ImageDecoder(DecodeConfig(max_bytes=settings.max_upload_bytes))
    return WordExtractionPipeline(dictionary, config, decoder=decoder)


def _error_body(request: Request, exc: PixelWordsError) -> dict[str, str | None]:
    return {
        "error": exc.code,
        "message": exc.message,
        "request_id": getattr(request.state, "request_id", None),
    }


def _validation_to_input_error(exc: RequestValidationError) -> InputError:
    """Turn a failed form validation on `POST /process` into an upload error.

    The only form field is `image`, so every body error is reported as a bad
    or missing image rather than as FastAPI's bare 422.
    """
    errors = exc.errors()
    for err in errors:
        if tuple(err.get("loc", ()))[:2] == ("body", "image"):
            if not err.get("input"):
                return NoImageError(context={"errors": errors})
            return InvalidImageError("Invalid image: expected a file upload", {"errors": errors})
    return InvalidImageError("Invalid image: malformed upload", {"errors": errors})


def register_exception_handlers(app: FastAPI) -> None:
    """Map core exceptions to the JSON error envelope.

    InputError              → 400 (no_image / invalid_image)
    RequestValidationError  → 400 (no_image / invalid_image)
    InvariantViolation      → 500 internal_error
    PixelWordsError         → 500 internal_error
    """

    @app.exception_handler(InputError)
    async def handle_input_error(request: Request, exc: InputError) -> ORJSONResponse:
        logger.warning("Rejected upload: {}", exc.message)
        return ORJSONResponse(status_code=400, content=_error_body(request, exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> ORJSONResponse:
        return await handle_input_error(request, _validation_to_input_error(exc))

    @app.exception_handler(InvariantViolation)
    async def handle_invariant(request: Request, exc: InvariantViolation) -> ORJSONResponse:
        logger.error("Invariant violated: {} | context={}", exc.message, exc.context)
        body = _error_body(request, exc)
        body["message"] = "Internal processing failure"
        return ORJSONResponse(status_code=500, content=body)

    @app.exception_handler(PixelWordsError)
    async def handle_pixelwords_error(request: Request, exc: PixelWordsError) -> ORJSONResponse:
        logger.error("Request failed: {}", exc.message)
        return ORJSONResponse(status_code=500, content=_error_body(request, exc))


def create_app(
    settings: Settings | None = None,
    dictionary: Dictionary | None = None,
) -> FastAPI:
    """Application factory.

    Args:
        settings: Configuration (module-level settings if None).
        dictionary: Pre-built dictionary; loaded from
            ``settings.dictionary_path`` at startup when None.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # noqa: ANN202
        """Startup / shutdown lifecycle."""
        setup_logging(settings)
        logger.info(
            "{} v{} starting  |  env={}  debug={}",
            settings.app_name,
            settings.app_version,
            settings.app_env,
            settings.debug,
        )

        words = dictionary
        if words is None:
            try:
                words = load_dictionary(settings.dictionary_path, settings.dictionary_max_length)
            except StartupError as e:
                logger.critical("Cannot start without a dictionary: {}", e.message)
                raise

        app.state.settings = settings
        app.state.dictionary = words
        app.state.pipeline = build_pipeline(settings, words)
        app.state.started_at = time.time()
        logger.info("Ready  |  dictionary={} words", len(words))
        yield
        logger.info("PixelWords shutting down gracefully")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "**PixelWords** turns an image into a letter string by "
            "histogram-balanced substitution and finds the dictionary words "
            "hidden in it."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # ── Middleware ────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Routes ───────────────────────────────────────────────
    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"name": settings.app_name, "version": settings.app_version}

    return app


app = create_app()
