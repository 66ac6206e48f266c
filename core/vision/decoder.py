"""Image decoding for the letter pipeline.

Turns raw upload bytes (PNG, JPEG, WebP, BMP, ...) or already-decoded arrays
into the 2-D uint8 grayscale arrays the core expects.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

from core.errors import InputError, InvalidImageError, NoImageError


@dataclass(frozen=True, slots=True)
class DecodeConfig:
    """Configuration for image decoding.

    Attributes:
        max_bytes: Reject payloads larger than this (0 = no limit).
    """
    max_bytes: int = 0


class ImageDecoder:
    """Decode images into grayscale pixel grids using OpenCV.

    Stateless and thread-safe.

    Usage:
        >>> decoder = ImageDecoder()
        >>> gray = decoder.decode(upload_bytes)  # (H, W) uint8
    """

    def __init__(self, config: DecodeConfig | None = None) -> None:
        self._config = config or DecodeConfig()

    @property
    def config(self) -> DecodeConfig:
        return self._config

    def decode(self, data: bytes | None) -> np.ndarray:
        """Decode encoded image bytes to grayscale.

        Args:
            data: Encoded image file contents.

        Returns:
            Grayscale image (H, W), dtype uint8.

        Raises:
            NoImageError: If ``data`` is empty.
            InvalidImageError: If the bytes are not a decodable image.
        """
        if not data:
            raise NoImageError()
        if self._config.max_bytes and len(data) > self._config.max_bytes:
            raise InvalidImageError(
                f"Invalid image: payload of {len(data)} bytes exceeds {self._config.max_bytes}",
                context={"size": len(data)},
            )

        buf = np.frombuffer(data, np.uint8)
        try:
            gray = cv2.imdecode(buf, cv2.IMREAD_GRAYSCALE)
        except cv2.error as e:
            raise InvalidImageError(f"Invalid image: {e}", context={"size": len(data)}) from e

        if gray is None or gray.size == 0:
            raise InvalidImageError(
                "Invalid image: unrecognized or corrupt image data",
                context={"size": len(data)},
            )
        return gray

    def read(self, path: str | Path) -> np.ndarray:
        """Read and decode an image file from disk."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise InputError(f"Cannot read image {path}: {e.strerror or e}") from e
        return self.decode(data)

    def to_grayscale(self, frame: np.ndarray) -> np.ndarray:
        """Convert a decoded array (gray, BGR or BGRA) to 2-D uint8 grayscale."""
        if frame is None:
            raise NoImageError("Frame is None")
        if frame.size == 0:
            raise NoImageError("Frame is empty")
        if frame.dtype != np.uint8:
            raise InvalidImageError(f"Expected uint8 pixels, got {frame.dtype}")

        if frame.ndim == 2:
            return frame
        if frame.ndim == 3 and frame.shape[2] == 1:
            return frame[:, :, 0]
        if frame.ndim == 3 and frame.shape[2] == 3:
            return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        if frame.ndim == 3 and frame.shape[2] == 4:
            return cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
        raise InvalidImageError(f"Expected (H, W), (H, W, 3) or (H, W, 4) frame, got shape {frame.shape}")
