# ============================================================
#  PixelWords — Dependency Injection
# ============================================================
"""
FastAPI dependency providers for settings, dictionary and pipeline.
The pipeline and its dictionary are built once in the lifespan and live on
``app.state``; every request receives the same immutable instances.
"""
from __future__ import annotations

from fastapi import Request

from backend.config import Settings, settings
from core.matching.dictionary import Dictionary
from core.pipeline import WordExtractionPipeline


def get_settings(request: Request) -> Settings:
    """Return the settings the app was created with."""
    app_settings: Settings = getattr(request.app.state, "settings", settings)
    return app_settings


def get_pipeline(request: Request) -> WordExtractionPipeline:
    """Return the application-wide pipeline."""
    pipeline: WordExtractionPipeline = request.app.state.pipeline
    return pipeline


def get_dictionary(request: Request) -> Dictionary:
    """Return the read-only dictionary loaded at startup."""
    dictionary: Dictionary = request.app.state.dictionary
    return dictionary
