"""Vision module — image decoding and grayscale conversion."""

from core.vision.decoder import DecodeConfig, ImageDecoder

__all__ = ["DecodeConfig", "ImageDecoder"]
