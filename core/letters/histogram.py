"""Intensity histogram for 8-bit grayscale images."""

from __future__ import annotations

import numpy as np

from core.errors import InputError
from core.types import INTENSITY_LEVELS


def check_grayscale(image: np.ndarray) -> None:
    """Validate that ``image`` is a 2-D uint8 grayscale array.

    Raises:
        InputError: If the array has the wrong rank or dtype.
    """
    if image is None:
        raise InputError("Image is None")
    if image.ndim != 2:
        raise InputError(f"Expected (H, W) grayscale image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise InputError(f"Expected uint8 pixels, got {image.dtype}")


def build_histogram(image: np.ndarray) -> np.ndarray:
    """Count pixels per intensity level.

    Args:
        image: Grayscale image (H, W), dtype uint8.

    Returns:
        (256,) int64 array; its sum equals H * W.
    """
    check_grayscale(image)
    return np.bincount(image.ravel(), minlength=INTENSITY_LEVELS).astype(np.int64)
