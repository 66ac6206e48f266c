"""Structured logging configuration (Loguru)."""

from __future__ import annotations

import sys

from loguru import logger

from backend.config import Settings, settings as default_settings


def setup_logging(settings: Settings | None = None, log_to_file: bool = True) -> None:
    """Configure Loguru sinks for the server and CLI."""
    settings = settings or default_settings
    logger.remove()
    # Lines logged outside a request carry "-" instead of an ID
    logger.configure(extra={"request_id": "-"})

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<magenta>{extra[request_id]}</magenta> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> — "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=fmt,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    if log_to_file:
        logger.add(
            f"{settings.log_dir}/pixelwords_{{time:YYYY-MM-DD}}.log",
            format=fmt,
            level="DEBUG",
            rotation="00:00",
            retention="30 days",
            compression="gz",
            enqueue=True,
        )

    logger.info(
        "Logging ready  |  level={}  env={}  version={}",
        settings.log_level,
        settings.app_env,
        settings.app_version,
    )
