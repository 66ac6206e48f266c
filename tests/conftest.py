"""Shared test fixtures for PixelWords."""

from __future__ import annotations

import cv2
import numpy as np
import pytest

from core.matching.dictionary import Dictionary


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible letter assignment."""
    return np.random.default_rng(42)


@pytest.fixture
def gray_image() -> np.ndarray:
    """Generate a random 48x64 grayscale image."""
    return np.random.default_rng(42).integers(0, 256, (48, 64), dtype=np.uint8)


@pytest.fixture
def gradient_image() -> np.ndarray:
    """16x16 image covering every intensity 0-255 exactly once."""
    return np.arange(256, dtype=np.uint8).reshape(16, 16)


@pytest.fixture
def solid_image() -> np.ndarray:
    """4x5 image with a single intensity."""
    return np.full((4, 5), 128, dtype=np.uint8)


@pytest.fixture
def small_dictionary() -> Dictionary:
    return Dictionary.from_words(
        ["a", "an", "at", "cat", "dog", "ear", "eat", "rat", "rate", "tea", "ten", "tone"],
        max_length=10,
    )


@pytest.fixture
def png_bytes(gray_image: np.ndarray) -> bytes:
    """Lossless PNG encoding of ``gray_image``."""
    ok, buf = cv2.imencode(".png", gray_image)
    assert ok
    return buf.tobytes()
