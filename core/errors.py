"""Exception hierarchy for the PixelWords core.

PixelWordsError (base)
├── InputError            bad caller input, rejected before the pipeline runs
│   ├── NoImageError      empty or missing image payload
│   └── InvalidImageError payload could not be decoded
├── InvariantViolation    internal bug (e.g. incomplete intensity map)
├── ProcessingError       unexpected failure on valid input
└── StartupError          process cannot start
    └── DictionaryLoadError
"""

from __future__ import annotations

from typing import Any


class PixelWordsError(Exception):
    """Base class for all PixelWords errors.

    Attributes:
        message: Human-readable description, safe to return to a client.
        context: Extra debug information (logged, never returned).
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class InputError(PixelWordsError):
    """The caller supplied image data the pipeline cannot accept."""

    code = "invalid_input"


class NoImageError(InputError):
    code = "no_image"

    def __init__(self, message: str = "No image provided", context: dict[str, Any] | None = None) -> None:
        super().__init__(message, context)


class InvalidImageError(InputError):
    code = "invalid_image"


class InvariantViolation(PixelWordsError):
    """An internal guarantee of the letter pipeline was broken.

    Never caused by caller input; always fatal to the current computation.
    """

    code = "internal_error"


class StartupError(PixelWordsError):
    """The process cannot serve requests (fatal)."""

    code = "startup_error"


class DictionaryLoadError(StartupError):
    """The word list could not be read or decoded."""


class ProcessingError(PixelWordsError):
    """Unexpected failure while running the pipeline on valid input."""

    code = "internal_error"
