"""Per-pixel letter substitution."""

from __future__ import annotations

import numpy as np
from loguru import logger

from core.errors import InvariantViolation
from core.letters.histogram import check_grayscale
from core.types import LetterMapping


class MatrixBuilder:
    """Map every pixel of a grayscale image to its letter.

    Stateless and thread-safe.

    Usage:
        >>> grid = MatrixBuilder().build(gray, mapping)
        >>> grid.shape == gray.shape
        True
    """

    def build(self, image: np.ndarray, mapping: LetterMapping) -> np.ndarray:
        """Build the letter grid.

        Args:
            image: Grayscale image (H, W), dtype uint8.
            mapping: Total intensity → letter mapping.

        Returns:
            (H, W) array of one-character strings.

        Raises:
            InputError: If the image is not a 2-D uint8 array.
            InvariantViolation: If the mapping leaves any intensity unmapped.
        """
        check_grayscale(image)
        try:
            mapping.ensure_total()
        except InvariantViolation as e:
            logger.error("Refusing to build letter grid: {} | missing={}", e, e.context.get("missing"))
            raise

        grid: np.ndarray = mapping.table[image]
        return grid
